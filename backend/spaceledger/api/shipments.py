"""
Shipment API endpoints - booking, lifecycle, and per-shipment views.
"""
import logging
import traceback
from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session
from typing import List
from uuid import UUID
from spaceledger.db.database import get_db
from spaceledger.schemas.shipment import ShipmentCreate, ShipmentResponse, ShipmentStatusUpdate
from spaceledger.schemas.transaction import TransactionResponse
from spaceledger.schemas.tracking_event import TrackingEventResponse
from spaceledger.services import shipment_lifecycle, settlement, tracking
from spaceledger.services.errors import LedgerError

logger = logging.getLogger(__name__)
router = APIRouter()


@router.post("/", response_model=ShipmentResponse, status_code=status.HTTP_201_CREATED)
async def create_shipment(
    shipment_data: ShipmentCreate,
    db: Session = Depends(get_db)
):
    """Book a logistics space for a shipment."""
    try:
        logger.info(
            f"Booking space {shipment_data.logistics_space_id} for user {shipment_data.owner_id}: "
            f"goods_type={shipment_data.goods_type}, weight={shipment_data.weight}"
        )
        return shipment_lifecycle.create_shipment(db, shipment_data.logistics_space_id, shipment_data)
    except LedgerError:
        raise
    except Exception as e:
        db.rollback()
        logger.error(f"Error creating shipment: {str(e)}")
        logger.error(f"Traceback: {traceback.format_exc()}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=f"Failed to create shipment: {str(e)}"
        )


@router.get("/", response_model=List[ShipmentResponse])
async def list_shipments(
    user_id: UUID,
    db: Session = Depends(get_db)
):
    """List a user's shipments."""
    return shipment_lifecycle.list_shipments_by_owner(db, user_id)


@router.get("/{shipment_id}", response_model=ShipmentResponse)
async def get_shipment(
    shipment_id: UUID,
    db: Session = Depends(get_db)
):
    """Get a specific shipment."""
    return shipment_lifecycle.get_shipment(db, shipment_id)


@router.patch("/{shipment_id}/status", response_model=ShipmentResponse)
async def advance_shipment_status(
    shipment_id: UUID,
    update: ShipmentStatusUpdate,
    db: Session = Depends(get_db)
):
    """Advance a shipment one step along its lifecycle."""
    return shipment_lifecycle.advance_status(db, shipment_id, update.status)


@router.get("/{shipment_id}/transaction", response_model=TransactionResponse)
async def get_shipment_transaction(
    shipment_id: UUID,
    db: Session = Depends(get_db)
):
    """Get the transaction recorded for a shipment."""
    return settlement.get_transaction_for_shipment(db, shipment_id)


@router.get("/{shipment_id}/tracking", response_model=List[TrackingEventResponse])
async def list_tracking_events(
    shipment_id: UUID,
    db: Session = Depends(get_db)
):
    """List a shipment's tracking events in the order they were recorded."""
    return tracking.list_events(db, shipment_id)
