from .user import User, UserRole
from .logistics_space import LogisticsSpace, SpaceStatus
from .shipment import Shipment, ShipmentStatus
from .transaction import Transaction, TransactionStatus
from .tracking_event import TrackingEvent

__all__ = [
    "User",
    "UserRole",
    "LogisticsSpace",
    "SpaceStatus",
    "Shipment",
    "ShipmentStatus",
    "Transaction",
    "TransactionStatus",
    "TrackingEvent",
]
