"""
Shipment model - a booking of cargo against one logistics space.
"""
from sqlalchemy import Column, String, DateTime, ForeignKey, Numeric, Uuid, Enum as SQLEnum
from sqlalchemy.orm import relationship
import uuid
from datetime import datetime
import enum
from spaceledger.db.database import Base


class ShipmentStatus(str, enum.Enum):
    PENDING = "pending"
    CONFIRMED = "confirmed"
    IN_TRANSIT = "in_transit"
    DELIVERED = "delivered"


class Shipment(Base):
    __tablename__ = "shipments"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    logistics_space_id = Column(Uuid, ForeignKey("logistics_spaces.id"), nullable=False, index=True)
    owner_id = Column(Uuid, ForeignKey("users.id"), nullable=False, index=True)

    # Cargo
    goods_type = Column(String, nullable=False)
    weight = Column(Numeric(10, 2), nullable=False)  # kg

    status = Column(
        SQLEnum(
            ShipmentStatus,
            native_enum=False,
            values_callable=lambda enum_cls: [member.value for member in enum_cls],
            validate_strings=True,
        ),
        nullable=False,
        default=ShipmentStatus.PENDING.value,
    )
    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    # Relationships
    logistics_space = relationship("LogisticsSpace", back_populates="shipments")
    owner = relationship("User", back_populates="shipments")
    transaction = relationship("Transaction", back_populates="shipment", uselist=False)
    tracking_events = relationship(
        "TrackingEvent",
        back_populates="shipment",
        order_by="TrackingEvent.sequence",
    )
