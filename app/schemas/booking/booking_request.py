# --- File: app/schemas/booking/booking_request.py ---
"""
Booking request schemas for creating bookings.

A booking is requested for one lead, one homestay and a stay range, with
one line per room. Business rules that need the database (capacity,
ownership, availability) are checked by the booking service; these
schemas only enforce the shape of the request.
"""

from __future__ import annotations

from datetime import date as Date
from decimal import Decimal
from typing import Any, Dict, List, Optional

from pydantic import Field, field_validator

from app.schemas.common.base import BaseCreateSchema, BaseSchema

__all__ = [
    "BookingRoomRequest",
    "BookingCreate",
]


class BookingRoomRequest(BaseSchema):
    """One requested room and the guests placed in it."""

    room_id: str = Field(
        ...,
        min_length=1,
        description="Room to book",
    )
    number_of_guests: int = Field(
        ...,
        ge=1,
        description="Guests staying in this room",
    )
    is_fully_occupied: bool = Field(
        False,
        description="Mark the room as exclusively used even below capacity",
    )
    notes: Optional[str] = Field(
        None,
        max_length=1000,
    )


class BookingCreate(BaseCreateSchema):
    """
    Request to create a booking.

    The stay is half-open: guests leave on check_out_date, which is free
    for the next booking.
    """

    lead_id: str = Field(..., min_length=1, description="Lead the booking originates from")
    homestay_id: str = Field(..., min_length=1, description="Homestay the rooms belong to")
    check_in_date: Date = Field(..., description="Arrival date")
    check_out_date: Date = Field(..., description="Departure date, exclusive")

    rooms: List[BookingRoomRequest] = Field(
        ...,
        min_length=1,
        description="Requested rooms, in the order they should be validated",
    )

    discount_amount: Decimal = Field(
        Decimal("0"),
        ge=0,
        max_digits=10,
        decimal_places=2,
        description="Flat discount on the whole booking",
    )
    tax_percentage: Optional[Decimal] = Field(
        None,
        ge=0,
        le=100,
        max_digits=5,
        decimal_places=2,
        description="Tax rate in percent; defaults to the configured rate",
    )

    special_requests: Optional[str] = Field(None, max_length=2000)
    notes: Optional[str] = Field(None, max_length=2000)
    expected_arrival_time: Optional[str] = Field(
        None,
        pattern=r"^([01]\d|2[0-3]):[0-5]\d$",
        description="Expected arrival time as HH:MM",
    )
    guest_details: Optional[Dict[str, Any]] = Field(
        None,
        description="Free-form guest information (names, ages, ID proofs)",
    )

    @field_validator("rooms")
    @classmethod
    def validate_unique_rooms(cls, v: List[BookingRoomRequest]) -> List[BookingRoomRequest]:
        """A room can appear only once in a booking."""
        room_ids = [line.room_id for line in v]
        if len(room_ids) != len(set(room_ids)):
            raise ValueError("Each room can only be requested once per booking")
        return v
