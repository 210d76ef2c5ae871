# app/repositories/booking/__init__.py
"""
Booking repositories package.

Exports all booking-related repositories for easy importing.
"""

from app.repositories.booking.booking_repository import (
    BookingRepository,
    BookingSearchCriteria,
    BookingStatistics,
)
from app.repositories.booking.booking_room_repository import BookingRoomRepository
from app.repositories.booking.payment_repository import PaymentRepository

__all__ = [
    "BookingRepository",
    "BookingSearchCriteria",
    "BookingStatistics",
    "BookingRoomRepository",
    "PaymentRepository",
]
