# --- File: app/schemas/booking/booking_update.py ---
"""
Schemas for changing an existing booking: field edits, status changes,
check-in/check-out and releasing a single room line.
"""

from __future__ import annotations

from datetime import datetime
from decimal import Decimal
from typing import Any, Dict, Optional

from pydantic import Field

from app.models.base.enums import BookingStatus
from app.schemas.common.base import BaseSchema, BaseUpdateSchema

__all__ = [
    "BookingUpdate",
    "BookingStatusUpdate",
    "CheckInRequest",
    "CheckOutRequest",
    "RoomLineCancellation",
]


class BookingUpdate(BaseUpdateSchema):
    """
    Partial update of a booking.

    Changing discount_amount or tax_percentage recomputes the booking
    totals from its active room lines.
    """

    special_requests: Optional[str] = Field(None, max_length=2000)
    notes: Optional[str] = Field(None, max_length=2000)
    expected_arrival_time: Optional[str] = Field(
        None,
        pattern=r"^([01]\d|2[0-3]):[0-5]\d$",
    )
    guest_details: Optional[Dict[str, Any]] = None
    discount_amount: Optional[Decimal] = Field(None, ge=0, max_digits=10, decimal_places=2)
    tax_percentage: Optional[Decimal] = Field(None, ge=0, le=100, max_digits=5, decimal_places=2)

    @property
    def changes_totals(self) -> bool:
        fields = self.model_fields_set
        return "discount_amount" in fields or "tax_percentage" in fields


class BookingStatusUpdate(BaseSchema):
    """Move a booking to another lifecycle status."""

    status: BookingStatus = Field(..., description="Target status")
    reason: Optional[str] = Field(
        None,
        max_length=500,
        description="Appended to the booking notes with a timestamp",
    )
    cancellation_reason: Optional[str] = Field(None, max_length=1000)


class CheckInRequest(BaseSchema):
    actual_check_in_time: Optional[datetime] = None
    notes: Optional[str] = Field(None, max_length=1000)


class CheckOutRequest(BaseSchema):
    actual_check_out_time: Optional[datetime] = None
    notes: Optional[str] = Field(None, max_length=1000)


class RoomLineCancellation(BaseSchema):
    reason: Optional[str] = Field(None, max_length=500)
