"""
Tracking event schemas.
"""
from pydantic import BaseModel
from uuid import UUID
from datetime import datetime
from typing import Optional


class TrackingEventCreate(BaseModel):
    shipment_id: UUID
    event_type: str
    location: Optional[str] = None
    details: Optional[str] = None
    timestamp: Optional[datetime] = None


class TrackingEventResponse(BaseModel):
    id: UUID
    shipment_id: UUID
    sequence: int
    event_type: str
    location: Optional[str] = None
    details: Optional[str] = None
    timestamp: datetime

    class Config:
        from_attributes = True
