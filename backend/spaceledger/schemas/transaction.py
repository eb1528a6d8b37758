"""
Transaction schemas.
"""
from pydantic import BaseModel, Field
from uuid import UUID
from datetime import datetime
from typing import Optional
from decimal import Decimal
from spaceledger.models.transaction import TransactionStatus


class TransactionCreate(BaseModel):
    shipment_id: UUID
    amount: Decimal = Field(..., gt=0, max_digits=12, decimal_places=2)


class TransactionConfirm(BaseModel):
    blockchain_tx_hash: Optional[str] = None


class TransactionResponse(BaseModel):
    id: UUID
    shipment_id: UUID
    amount: Decimal
    status: TransactionStatus
    blockchain_tx_hash: Optional[str] = None
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True
