# --- File: app/schemas/room/room_availability.py ---
"""
Room availability schemas.

A stay range is half-open: a room leaving on the 15th is free for a
guest arriving on the 15th.
"""

from datetime import date as Date
from typing import List, Optional

from pydantic import Field

from app.schemas.common.base import BaseSchema

__all__ = [
    "RoomAvailabilityResponse",
]


class RoomAvailabilityResponse(BaseSchema):
    """
    Availability of one room for a stay range.

    reason is blocked, maintenance or already_booked when the room is
    not available.
    """

    room_id: str
    room_number: Optional[str] = None
    check_in_date: Date
    check_out_date: Date
    is_available: bool
    reason: Optional[str] = Field(
        None,
        description="Why the room cannot be booked",
    )
    conflicting_booking_ids: List[str] = Field(default_factory=list)
