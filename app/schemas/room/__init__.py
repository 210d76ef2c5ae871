"""Room availability and blocking schemas."""

from app.schemas.room.room_availability import RoomAvailabilityResponse
from app.schemas.room.room_block import BlockRoomRequest, RoomResponse

__all__ = ["RoomAvailabilityResponse", "BlockRoomRequest", "RoomResponse"]
