"""
Logistics space model - a bookable unit of transport capacity.
"""
from sqlalchemy import Column, String, DateTime, ForeignKey, Numeric, Uuid, Enum as SQLEnum
from sqlalchemy.orm import relationship
import uuid
from datetime import datetime
import enum
from spaceledger.db.database import Base


class SpaceStatus(str, enum.Enum):
    AVAILABLE = "available"
    PARTIAL = "partial"
    BOOKED = "booked"


class LogisticsSpace(Base):
    __tablename__ = "logistics_spaces"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    token_id = Column(String, nullable=False, unique=True)  # e.g., "T-100"
    owner_id = Column(Uuid, ForeignKey("users.id"), nullable=False)

    # Route
    source = Column(String, nullable=False)
    destination = Column(String, nullable=False)

    # Dimensions in metres, weight in kg
    length = Column(Numeric(10, 2), nullable=False)
    width = Column(Numeric(10, 2), nullable=False)
    height = Column(Numeric(10, 2), nullable=False)
    max_weight = Column(Numeric(10, 2), nullable=False)
    price = Column(Numeric(12, 2), nullable=True)

    status = Column(
        SQLEnum(
            SpaceStatus,
            native_enum=False,
            values_callable=lambda enum_cls: [member.value for member in enum_cls],
            validate_strings=True,
        ),
        nullable=False,
        default=SpaceStatus.AVAILABLE.value,
    )
    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    # Relationships
    owner = relationship("User", back_populates="spaces")
    shipments = relationship("Shipment", back_populates="logistics_space")
