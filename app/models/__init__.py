# models/__init__.py
from app.models.base import Base, BaseModel, TimestampModel
from app.models.booking import Booking, BookingRoom, Payment
from app.models.homestay import Homestay, Room
from app.models.lead import Lead

__all__ = [
    "Base",
    "BaseModel",
    "TimestampModel",
    "Booking",
    "BookingRoom",
    "Payment",
    "Homestay",
    "Room",
    "Lead",
]
