"""
Tracking ingest - append-only shipment event log with derived status advances.
"""
import logging
from datetime import datetime, timezone
from typing import List, Optional
from uuid import UUID

from sqlalchemy.orm import Session

from spaceledger.config.tracking_rules import get_status_for_event
from spaceledger.models import Shipment, TrackingEvent
from spaceledger.services.errors import InvalidArgument
from spaceledger.services.shipment_lifecycle import advance_at_least, get_shipment
from spaceledger.services.store import lock_row, unit_of_work

logger = logging.getLogger(__name__)


def _as_naive_utc(value: datetime) -> datetime:
    if value.tzinfo is None:
        return value
    return value.astimezone(timezone.utc).replace(tzinfo=None)


def _last_event(db: Session, shipment_id: UUID) -> Optional[TrackingEvent]:
    return (
        db.query(TrackingEvent)
        .filter(TrackingEvent.shipment_id == shipment_id)
        .order_by(TrackingEvent.sequence.desc())
        .first()
    )


def append_event(
    db: Session,
    shipment_id: UUID,
    event_type: str,
    location: Optional[str] = None,
    details: Optional[str] = None,
    timestamp: Optional[datetime] = None,
) -> TrackingEvent:
    """
    Append a tracking event and apply its status rule.

    Appends for one shipment are serialized on the shipment row, so
    sequence numbers are gapless and timestamps never go backwards.
    """
    event_type = (event_type or "").strip()
    if not event_type:
        raise InvalidArgument("Event type is required")

    shipment = get_shipment(db, shipment_id)

    with unit_of_work(db):
        lock_row(db, Shipment, shipment.id)
        previous = _last_event(db, shipment.id)
        event_time = _as_naive_utc(timestamp) if timestamp else datetime.utcnow()
        if previous and event_time < previous.timestamp:
            event_time = previous.timestamp

        event = TrackingEvent(
            shipment_id=shipment.id,
            sequence=(previous.sequence + 1) if previous else 1,
            event_type=event_type,
            location=location,
            details=details,
            timestamp=event_time,
        )
        db.add(event)
        db.flush()

        target = get_status_for_event(event_type)
        if target is not None:
            db.refresh(shipment)
            advance_at_least(db, shipment, target)

    db.refresh(event)
    logger.info(f"Tracking event #{event.sequence} '{event_type}' recorded for shipment {shipment_id}")
    return event


def list_events(db: Session, shipment_id: UUID) -> List[TrackingEvent]:
    """All events for a shipment in append order."""
    get_shipment(db, shipment_id)
    return (
        db.query(TrackingEvent)
        .filter(TrackingEvent.shipment_id == shipment_id)
        .order_by(TrackingEvent.sequence)
        .all()
    )

