"""
Tracking event model - append-only audit trail of shipment progress.
"""
from sqlalchemy import Column, String, DateTime, ForeignKey, Integer, Text, Uuid, UniqueConstraint
from sqlalchemy.orm import relationship
import uuid
from datetime import datetime
from spaceledger.db.database import Base


class TrackingEvent(Base):
    __tablename__ = "tracking_events"
    __table_args__ = (
        UniqueConstraint("shipment_id", "sequence", name="uq_tracking_events_shipment_sequence"),
    )

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    shipment_id = Column(Uuid, ForeignKey("shipments.id"), nullable=False, index=True)
    sequence = Column(Integer, nullable=False)  # 1-based append order per shipment
    event_type = Column(String, nullable=False)  # e.g., "pickup", "checkpoint", "delivered"
    location = Column(String, nullable=True)
    details = Column(Text, nullable=True)
    timestamp = Column(DateTime, nullable=False, default=datetime.utcnow)

    # Relationships
    shipment = relationship("Shipment", back_populates="tracking_events")
