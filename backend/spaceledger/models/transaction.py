"""
Transaction model - the payment record held 1:1 by a shipment.
"""
from sqlalchemy import Column, String, DateTime, ForeignKey, Numeric, Uuid, Enum as SQLEnum
from sqlalchemy.orm import relationship
import uuid
from datetime import datetime
import enum
from spaceledger.db.database import Base


class TransactionStatus(str, enum.Enum):
    PENDING = "pending"
    COMPLETED = "completed"


class Transaction(Base):
    __tablename__ = "transactions"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    # Unique: at most one transaction per shipment
    shipment_id = Column(Uuid, ForeignKey("shipments.id"), nullable=False, unique=True)
    amount = Column(Numeric(12, 2), nullable=False)
    status = Column(
        SQLEnum(
            TransactionStatus,
            native_enum=False,
            values_callable=lambda enum_cls: [member.value for member in enum_cls],
            validate_strings=True,
        ),
        nullable=False,
        default=TransactionStatus.PENDING.value,
    )
    blockchain_tx_hash = Column(String, nullable=True)  # Set only on completion
    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    # Relationships
    shipment = relationship("Shipment", back_populates="transaction")
