from .user import UserCreate, UserResponse, LoginRequest
from .logistics_space import SpaceCreate, SpaceResponse, SpaceStatusUpdate
from .shipment import ShipmentCreate, ShipmentResponse, ShipmentStatusUpdate
from .transaction import TransactionCreate, TransactionResponse, TransactionConfirm
from .tracking_event import TrackingEventCreate, TrackingEventResponse

__all__ = [
    "UserCreate",
    "UserResponse",
    "LoginRequest",
    "SpaceCreate",
    "SpaceResponse",
    "SpaceStatusUpdate",
    "ShipmentCreate",
    "ShipmentResponse",
    "ShipmentStatusUpdate",
    "TransactionCreate",
    "TransactionResponse",
    "TransactionConfirm",
    "TrackingEventCreate",
    "TrackingEventResponse",
]
