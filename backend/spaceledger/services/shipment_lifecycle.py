"""
Shipment lifecycle controller - booking and the shipment state machine.

    pending -> confirmed -> in_transit -> delivered

`delivered` is terminal and there is no cancelled state. Explicit status
changes must follow the chain one step at a time; side effects from
payment and tracking use advance_at_least, which may skip forward but
never moves a shipment back.
"""
import logging
from typing import Dict, List
from uuid import UUID

from sqlalchemy.orm import Session

from spaceledger.models import LogisticsSpace, Shipment, ShipmentStatus, SpaceStatus, User
from spaceledger.schemas.shipment import ShipmentCreate
from spaceledger.services.errors import Conflict, InvalidArgument, InvalidTransition
from spaceledger.services.space_allocator import claim_space
from spaceledger.services.store import (
    MAX_CAS_ATTEMPTS,
    compare_and_set_status,
    get_by_id,
    unit_of_work,
)

logger = logging.getLogger(__name__)

LIFECYCLE_ORDER: List[ShipmentStatus] = [
    ShipmentStatus.PENDING,
    ShipmentStatus.CONFIRMED,
    ShipmentStatus.IN_TRANSIT,
    ShipmentStatus.DELIVERED,
]

# Single-step forward moves accepted from explicit status requests
ALLOWED_TRANSITIONS: Dict[ShipmentStatus, ShipmentStatus] = {
    ShipmentStatus.PENDING: ShipmentStatus.CONFIRMED,
    ShipmentStatus.CONFIRMED: ShipmentStatus.IN_TRANSIT,
    ShipmentStatus.IN_TRANSIT: ShipmentStatus.DELIVERED,
}


def status_rank(status: ShipmentStatus) -> int:
    return LIFECYCLE_ORDER.index(ShipmentStatus(status))


def parse_shipment_status(value) -> ShipmentStatus:
    try:
        return ShipmentStatus(value)
    except ValueError:
        allowed = [s.value for s in ShipmentStatus]
        raise InvalidArgument(f"Unknown shipment status '{value}'. Allowed: {allowed}")


def get_shipment(db: Session, shipment_id: UUID) -> Shipment:
    return get_by_id(db, Shipment, shipment_id, "Shipment")


def list_shipments_by_owner(db: Session, owner_id: UUID) -> List[Shipment]:
    return (
        db.query(Shipment)
        .filter(Shipment.owner_id == owner_id)
        .order_by(Shipment.created_at, Shipment.id)
        .all()
    )


def create_shipment(db: Session, space_id: UUID, booking: ShipmentCreate) -> Shipment:
    """
    Book a space: create a `pending` shipment and mark the space `booked`.

    Both writes commit together. A space that is already booked, or that
    another request books first, raises Conflict and nothing is written.
    """
    space = get_by_id(db, LogisticsSpace, space_id, "Logistics space")
    get_by_id(db, User, booking.owner_id, "User")

    if space.status == SpaceStatus.BOOKED:
        logger.warning(f"Booking rejected, space {space.token_id} already booked")
        raise Conflict("space already booked")

    with unit_of_work(db):
        if not claim_space(db, space):
            logger.warning(f"Booking rejected, space {space.token_id} was booked concurrently")
            raise Conflict("space already booked")
        shipment = Shipment(
            logistics_space_id=space.id,
            owner_id=booking.owner_id,
            goods_type=booking.goods_type,
            weight=booking.weight,
            status=ShipmentStatus.PENDING.value,
        )
        db.add(shipment)

    db.refresh(shipment)
    db.refresh(space)
    logger.info(f"Created shipment {shipment.id} on space {space.token_id}; space now {space.status.value}")
    return shipment


def advance_status(db: Session, shipment_id: UUID, new_status) -> Shipment:
    """
    Move a shipment exactly one step forward.

    Requesting the current status again is a no-op; any other move raises
    InvalidTransition.
    """
    shipment = get_shipment(db, shipment_id)
    target = parse_shipment_status(new_status)

    for _ in range(MAX_CAS_ATTEMPTS):
        current = ShipmentStatus(shipment.status)
        if current == target:
            return shipment
        if ALLOWED_TRANSITIONS.get(current) != target:
            logger.warning(f"Rejected shipment {shipment.id} transition {current.value} -> {target.value}")
            raise InvalidTransition(f"Invalid shipment transition: {current.value} -> {target.value}")

        with unit_of_work(db):
            swapped = compare_and_set_status(db, Shipment, shipment.id, target.value, expected=current.value)
        db.refresh(shipment)
        if swapped:
            logger.info(f"Shipment {shipment.id} advanced {current.value} -> {target.value}")
            return shipment

    raise Conflict(f"Shipment {shipment.id} is being updated concurrently, retry")


def advance_at_least(db: Session, shipment: Shipment, target: ShipmentStatus) -> Shipment:
    """
    Move a shipment forward to ``target`` if it is behind it.

    Joins the caller's transaction and never regresses a shipment that is
    already at or past ``target``.
    """
    target = ShipmentStatus(target)
    for _ in range(MAX_CAS_ATTEMPTS):
        current = ShipmentStatus(shipment.status)
        if status_rank(current) >= status_rank(target):
            return shipment
        swapped = compare_and_set_status(db, Shipment, shipment.id, target.value, expected=current.value)
        db.refresh(shipment)
        if swapped:
            logger.info(f"Shipment {shipment.id} advanced {current.value} -> {target.value}")
            return shipment

    raise Conflict(f"Shipment {shipment.id} is being updated concurrently, retry")
