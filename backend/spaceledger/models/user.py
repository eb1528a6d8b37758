"""
User model - identities that book, offer or operate logistics space.
"""
from sqlalchemy import Column, String, DateTime, Uuid, Enum as SQLEnum
from sqlalchemy.orm import relationship
import uuid
from datetime import datetime
import enum
from spaceledger.db.database import Base


class UserRole(str, enum.Enum):
    USER = "user"
    LOGISTICS = "logistics"
    DEVELOPER = "developer"


class User(Base):
    __tablename__ = "users"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    username = Column(String, nullable=False, unique=True)
    email = Column(String, nullable=False, unique=True)
    password_hash = Column(String, nullable=True)  # Wallet-only users have none
    first_name = Column(String, nullable=True)
    last_name = Column(String, nullable=True)
    role = Column(
        SQLEnum(
            UserRole,
            native_enum=False,
            values_callable=lambda enum_cls: [member.value for member in enum_cls],
            validate_strings=True,
        ),
        nullable=False,
        default=UserRole.USER.value,
    )
    wallet_address = Column(String, nullable=True, unique=True)
    created_at = Column(DateTime, default=datetime.utcnow)

    # Relationships
    spaces = relationship("LogisticsSpace", back_populates="owner")
    shipments = relationship("Shipment", back_populates="owner")
