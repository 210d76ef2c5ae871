# app/services/homestay/homestay_service.py
"""
Homestay service: homestay and room lookups used by bookings, and room
blocking.

A blocked or maintenance room is refused by every availability check
whatever the dates; unblocking makes it bookable again.
"""

from typing import Optional

from sqlalchemy.orm import Session

from app.core.exceptions import HomestayNotFoundError, RoomNotFoundError
from app.core.logging import track_performance
from app.models.base.enums import RoomStatus
from app.models.homestay.homestay import Homestay
from app.models.homestay.room import Room
from app.repositories.homestay.homestay_repository import HomestayRepository
from app.repositories.homestay.room_repository import RoomRepository
from app.schemas.room.room_block import BlockRoomRequest, RoomResponse
from app.services.base import BaseService, ServiceResult
from app.utils.date_utils import today_utc


class HomestayService(BaseService[Homestay, HomestayRepository]):
    """
    Homestay and room operations.

    Provides:
    - Homestay and room lookups raising not-found errors
    - Blocking and unblocking rooms
    """

    def __init__(
        self,
        repository: HomestayRepository,
        db_session: Session,
        room_repository: Optional[RoomRepository] = None,
    ):
        super().__init__(repository, db_session)
        self.room_repository = room_repository or RoomRepository(db_session)

    # -------------------------------------------------------------------------
    # Lookups
    # -------------------------------------------------------------------------

    def find_homestay_by_id(self, homestay_id: str) -> Homestay:
        """
        Resolve a homestay.

        Raises:
            HomestayNotFoundError: if no homestay has this id
        """
        homestay = self.repository.find_by_id(homestay_id)
        if homestay is None:
            raise HomestayNotFoundError(homestay_id)
        return homestay

    def find_room_by_id(self, room_id: str) -> Room:
        """
        Resolve a room with its capacity, price, status and homestay.

        Raises:
            RoomNotFoundError: if no room has this id
        """
        room = self.room_repository.find_by_id(room_id)
        if room is None:
            raise RoomNotFoundError(room_id)
        return room

    # -------------------------------------------------------------------------
    # Blocking
    # -------------------------------------------------------------------------

    @track_performance("block_room")
    def block_room(self, room_id: str, request: BlockRoomRequest) -> ServiceResult[RoomResponse]:
        """
        Take a room out of service.

        Existing bookings are left untouched; the block only stops new
        bookings from selecting the room.
        """
        try:
            with self.transaction():
                room = self.find_room_by_id(room_id)
                self.room_repository.update(
                    room,
                    {
                        "status": RoomStatus.MAINTENANCE if request.maintenance else RoomStatus.BLOCKED,
                        "block_reason": request.reason,
                        "blocked_from": request.blocked_from or today_utc(),
                        "blocked_until": request.blocked_until,
                    },
                )

            self._logger.info(
                "Room blocked",
                extra={"room_id": room_id, "room_status": room.status.value, "reason": request.reason},
            )
            return ServiceResult.success(RoomResponse.model_validate(room), message="Room blocked")
        except Exception as e:
            return self._handle_exception(e, "block room", room_id)

    @track_performance("unblock_room")
    def unblock_room(self, room_id: str) -> ServiceResult[RoomResponse]:
        """Return a blocked or maintenance room to service."""
        try:
            with self.transaction():
                room = self.find_room_by_id(room_id)
                self.room_repository.update(
                    room,
                    {
                        "status": RoomStatus.AVAILABLE,
                        "block_reason": None,
                        "blocked_from": None,
                        "blocked_until": None,
                    },
                )

            self._logger.info("Room unblocked", extra={"room_id": room_id})
            return ServiceResult.success(RoomResponse.model_validate(room), message="Room unblocked")
        except Exception as e:
            return self._handle_exception(e, "unblock room", room_id)
