"""Booking request, update, payment and response schemas."""

from app.schemas.booking.booking_filters import BookingFilterParams
from app.schemas.booking.booking_payment import PaymentCreate
from app.schemas.booking.booking_request import BookingCreate, BookingRoomRequest
from app.schemas.booking.booking_response import (
    BookingDetail,
    BookingResponse,
    BookingRoomResponse,
    BookingStatisticsResponse,
    Money,
    PaymentResponse,
)
from app.schemas.booking.booking_update import (
    BookingStatusUpdate,
    BookingUpdate,
    CheckInRequest,
    CheckOutRequest,
    RoomLineCancellation,
)

__all__ = [
    "BookingFilterParams",
    "PaymentCreate",
    "BookingCreate",
    "BookingRoomRequest",
    "BookingDetail",
    "BookingResponse",
    "BookingRoomResponse",
    "BookingStatisticsResponse",
    "Money",
    "PaymentResponse",
    "BookingStatusUpdate",
    "BookingUpdate",
    "CheckInRequest",
    "CheckOutRequest",
    "RoomLineCancellation",
]
