"""
Logistics space schemas.
"""
from pydantic import BaseModel, Field
from uuid import UUID
from datetime import datetime
from typing import Optional
from decimal import Decimal
from spaceledger.models.logistics_space import SpaceStatus


class SpaceCreate(BaseModel):
    token_id: str = Field(..., min_length=1)
    owner_id: UUID
    source: str = Field(..., min_length=1)
    destination: str = Field(..., min_length=1)
    length: Decimal = Field(..., gt=0, max_digits=10, decimal_places=2)
    width: Decimal = Field(..., gt=0, max_digits=10, decimal_places=2)
    height: Decimal = Field(..., gt=0, max_digits=10, decimal_places=2)
    max_weight: Decimal = Field(..., gt=0, max_digits=10, decimal_places=2)
    price: Optional[Decimal] = Field(None, ge=0, max_digits=12, decimal_places=2)


class SpaceStatusUpdate(BaseModel):
    status: str


class SpaceResponse(BaseModel):
    id: UUID
    token_id: str
    owner_id: UUID
    source: str
    destination: str
    length: Decimal
    width: Decimal
    height: Decimal
    max_weight: Decimal
    price: Optional[Decimal] = None
    status: SpaceStatus
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True
