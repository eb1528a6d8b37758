"""
Tracking API endpoints - carrier event ingest.
"""
import logging
import traceback
from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session
from spaceledger.db.database import get_db
from spaceledger.schemas.tracking_event import TrackingEventCreate, TrackingEventResponse
from spaceledger.services import tracking
from spaceledger.services.errors import LedgerError

logger = logging.getLogger(__name__)
router = APIRouter()


@router.post("/", response_model=TrackingEventResponse, status_code=status.HTTP_201_CREATED)
async def append_tracking_event(
    event_data: TrackingEventCreate,
    db: Session = Depends(get_db)
):
    """Record a tracking event; pickup and delivered events advance the shipment."""
    try:
        return tracking.append_event(
            db,
            event_data.shipment_id,
            event_data.event_type,
            location=event_data.location,
            details=event_data.details,
            timestamp=event_data.timestamp,
        )
    except LedgerError:
        raise
    except Exception as e:
        db.rollback()
        logger.error(f"Error recording tracking event: {str(e)}")
        logger.error(f"Traceback: {traceback.format_exc()}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=f"Failed to record tracking event: {str(e)}"
        )
