"""
Booking models package.

Contains the booking aggregate: the booking header, its room lines and
the payments recorded against it.
"""

from app.models.booking.booking import Booking
from app.models.booking.booking_room import BookingRoom, derive_line_status
from app.models.booking.payment import Payment

__all__ = [
    "Booking",
    "BookingRoom",
    "Payment",
    "derive_line_status",
]
