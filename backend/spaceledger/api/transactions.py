"""
Transaction API endpoints.
"""
import logging
import traceback
from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session
from uuid import UUID
from spaceledger.db.database import get_db
from spaceledger.schemas.transaction import TransactionCreate, TransactionConfirm, TransactionResponse
from spaceledger.services import settlement
from spaceledger.services.errors import LedgerError

logger = logging.getLogger(__name__)
router = APIRouter()


@router.post("/", response_model=TransactionResponse, status_code=status.HTTP_201_CREATED)
async def create_transaction(
    transaction_data: TransactionCreate,
    db: Session = Depends(get_db)
):
    """Record the payment for a shipment; confirms the shipment."""
    try:
        return settlement.create_transaction(db, transaction_data.shipment_id, transaction_data.amount)
    except LedgerError:
        raise
    except Exception as e:
        db.rollback()
        logger.error(f"Error creating transaction: {str(e)}")
        logger.error(f"Traceback: {traceback.format_exc()}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=f"Failed to create transaction: {str(e)}"
        )


@router.get("/{transaction_id}", response_model=TransactionResponse)
async def get_transaction(
    transaction_id: UUID,
    db: Session = Depends(get_db)
):
    """Get a specific transaction."""
    return settlement.get_transaction(db, transaction_id)


@router.patch("/{transaction_id}/confirm", response_model=TransactionResponse)
async def confirm_transaction(
    transaction_id: UUID,
    confirmation: TransactionConfirm,
    db: Session = Depends(get_db)
):
    """Mark a transaction completed with its blockchain hash."""
    return settlement.confirm_transaction(db, transaction_id, confirmation.blockchain_tx_hash)
