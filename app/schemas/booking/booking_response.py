# --- File: app/schemas/booking/booking_response.py ---
"""
Booking response schemas for API responses.

Amounts are returned rounded to two decimal places.
"""

from __future__ import annotations

from datetime import date as Date
from datetime import datetime
from decimal import Decimal
from typing import Annotated, Any, Dict, List, Optional

from pydantic import Field, PlainSerializer

from app.models.base.enums import (
    BookingStatus,
    PaymentMethod,
    PaymentStatus,
    PaymentType,
    RoomBookingStatus,
)
from app.schemas.common.base import BaseResponseSchema, BaseSchema
from app.utils.money import quantize_money

__all__ = [
    "Money",
    "BookingRoomResponse",
    "PaymentResponse",
    "BookingResponse",
    "BookingDetail",
    "BookingStatisticsResponse",
]


# Decimal amount rendered in JSON as a string with exactly two decimal places
Money = Annotated[
    Decimal,
    PlainSerializer(lambda v: str(quantize_money(v)), return_type=str, when_used="json"),
]


class BookingRoomResponse(BaseSchema):
    """One room line; status is derived from the booking."""

    id: str
    room_id: str
    room_number: Optional[str] = None
    line_number: int
    number_of_guests: int
    rate_per_night: Money
    total_amount: Money
    is_fully_occupied: bool
    is_cancelled: bool
    status: RoomBookingStatus
    notes: Optional[str] = None

    @classmethod
    def from_line(cls, line: Any) -> "BookingRoomResponse":
        response = cls.model_validate(line)
        if line.room is not None:
            response.room_number = line.room.room_number
        return response


class PaymentResponse(BaseResponseSchema):
    """Recorded payment."""

    booking_id: str
    payment_reference: str
    amount: Money
    payment_method: PaymentMethod
    payment_type: PaymentType
    status: PaymentStatus
    transaction_id: Optional[str] = None
    payment_gateway: Optional[str] = None
    payment_date: datetime
    notes: Optional[str] = None
    payment_details: Optional[Dict[str, Any]] = None


class BookingResponse(BaseResponseSchema):
    """
    Booking summary with its room lines.

    balance_amount always equals total_amount - paid_amount.
    """

    booking_reference: str
    lead_id: str
    homestay_id: str

    guest_name: str
    guest_email: Optional[str] = None
    guest_phone: Optional[str] = None
    number_of_adults: int
    number_of_children: int

    check_in_date: Date
    check_out_date: Date
    number_of_nights: int
    total_rooms: int
    status: BookingStatus

    total_amount: Money
    paid_amount: Money
    balance_amount: Money
    discount_amount: Money
    tax_percentage: Decimal
    tax_amount: Money
    is_payment_complete: bool

    special_requests: Optional[str] = None
    notes: Optional[str] = None
    expected_arrival_time: Optional[str] = None
    guest_details: Optional[Dict[str, Any]] = None

    actual_check_in_time: Optional[datetime] = None
    actual_check_out_time: Optional[datetime] = None
    cancelled_at: Optional[datetime] = None
    cancellation_reason: Optional[str] = None

    rooms: List[BookingRoomResponse] = Field(default_factory=list)

    @classmethod
    def from_booking(cls, booking: Any) -> "BookingResponse":
        data = cls.model_validate(booking, from_attributes=True)
        data.rooms = [BookingRoomResponse.from_line(line) for line in booking.rooms]
        return data


class BookingDetail(BookingResponse):
    """Booking with its payments."""

    payments: List[PaymentResponse] = Field(default_factory=list)

    @classmethod
    def from_booking(cls, booking: Any, payments: Optional[List[Any]] = None) -> "BookingDetail":
        data = super().from_booking(booking)
        data.payments = [PaymentResponse.model_validate(p) for p in (payments or [])]
        return data


class BookingStatisticsResponse(BaseSchema):
    total_bookings: int
    confirmed_bookings: int
    checked_in_bookings: int
    cancelled_bookings: int
    total_revenue: Money
    total_paid: Money
    pending_amount: Money
