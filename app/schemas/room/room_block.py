# --- File: app/schemas/room/room_block.py ---
"""
Room blocking schemas and the room response returned by room operations.
"""

from datetime import date as Date
from decimal import Decimal
from typing import Optional

from pydantic import Field, model_validator

from app.models.base.enums import RoomStatus, RoomType
from app.schemas.common.base import BaseResponseSchema, BaseSchema

__all__ = [
    "BlockRoomRequest",
    "RoomResponse",
]


class BlockRoomRequest(BaseSchema):
    """Take a room out of service; blocked rooms cannot be booked."""

    reason: str = Field(..., min_length=1, max_length=500)
    blocked_from: Optional[Date] = Field(None, description="Defaults to today")
    blocked_until: Optional[Date] = None
    maintenance: bool = Field(
        False,
        description="Mark the room as under maintenance instead of blocked",
    )

    @model_validator(mode="after")
    def validate_block_window(self) -> "BlockRoomRequest":
        if self.blocked_from and self.blocked_until and self.blocked_until < self.blocked_from:
            raise ValueError("blocked_until must not be before blocked_from")
        return self


class RoomResponse(BaseResponseSchema):
    homestay_id: str
    room_number: str
    room_name: Optional[str] = None
    room_type: RoomType
    capacity: int
    price_per_head: Decimal
    status: RoomStatus
    block_reason: Optional[str] = None
    blocked_from: Optional[Date] = None
    blocked_until: Optional[Date] = None
