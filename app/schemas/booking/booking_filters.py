# --- File: app/schemas/booking/booking_filters.py ---
"""
Booking list filters.
"""

from __future__ import annotations

from datetime import date as Date
from typing import Optional

from pydantic import Field, model_validator

from app.models.base.enums import BookingStatus
from app.schemas.common.base import BaseFilterSchema

__all__ = ["BookingFilterParams"]


class BookingFilterParams(BaseFilterSchema):
    """Optional filters for listing bookings; results are newest first."""

    status: Optional[BookingStatus] = None
    homestay_id: Optional[str] = None
    lead_id: Optional[str] = None
    check_in_after: Optional[Date] = Field(None, description="Check-in on or after this date")
    check_in_before: Optional[Date] = Field(None, description="Check-in on or before this date")
    skip: int = Field(0, ge=0)
    limit: int = Field(100, ge=1, le=500)

    @model_validator(mode="after")
    def validate_date_window(self) -> "BookingFilterParams":
        if self.check_in_after and self.check_in_before and self.check_in_after > self.check_in_before:
            raise ValueError("check_in_after must not be later than check_in_before")
        return self
