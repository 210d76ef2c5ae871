"""
Booking service layer.

Provides business logic for:
- Booking creation under per-room reservation locks
- Room availability checks
- Pricing (per head, per night, flat discount, tax)
- Updates, status lifecycle, check-in/check-out, releasing room lines
- Payments
- Statistics and daily check-in/check-out views
"""

from app.services.booking.booking_service import BookingService
from app.services.booking.booking_analytics_service import BookingAnalyticsService
from app.services.booking.booking_payment_service import BookingPaymentService
from app.services.booking.booking_pricing_service import (
    BookingPricingService,
    BookingQuote,
    LineQuote,
    PricingLine,
)
from app.services.booking.room_availability_service import RoomAvailabilityService
from app.services.booking.room_lock import RoomReservationLock, room_lock_registry

__all__ = [
    "BookingService",
    "BookingAnalyticsService",
    "BookingPaymentService",
    "BookingPricingService",
    "BookingQuote",
    "LineQuote",
    "PricingLine",
    "RoomAvailabilityService",
    "RoomReservationLock",
    "room_lock_registry",
]
