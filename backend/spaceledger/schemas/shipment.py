"""
Shipment schemas.
"""
from pydantic import BaseModel, Field
from uuid import UUID
from datetime import datetime
from decimal import Decimal
from spaceledger.models.shipment import ShipmentStatus


class ShipmentCreate(BaseModel):
    logistics_space_id: UUID
    owner_id: UUID
    goods_type: str = Field(..., min_length=1)
    weight: Decimal = Field(..., gt=0, max_digits=10, decimal_places=2)


class ShipmentStatusUpdate(BaseModel):
    status: str


class ShipmentResponse(BaseModel):
    id: UUID
    logistics_space_id: UUID
    owner_id: UUID
    goods_type: str
    weight: Decimal
    status: ShipmentStatus
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True
