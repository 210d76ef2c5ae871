# --- File: app/models/base/__init__.py ---
"""
Base models package.

Provides the declarative base, abstract models and enums for all
database models.
"""

from app.models.base.base_model import Base, BaseModel, TimestampModel
from app.models.base.enums import (
    BookingStatus,
    HomestayStatus,
    LeadStatus,
    PaymentMethod,
    PaymentStatus,
    PaymentType,
    RoomBookingStatus,
    RoomStatus,
    RoomType,
    enum_values,
)

__all__ = [
    "Base",
    "BaseModel",
    "TimestampModel",
    "BookingStatus",
    "HomestayStatus",
    "LeadStatus",
    "PaymentMethod",
    "PaymentStatus",
    "PaymentType",
    "RoomBookingStatus",
    "RoomStatus",
    "RoomType",
    "enum_values",
]
