# app/services/booking/room_availability_service.py
"""
Room availability service.

A room is unavailable for [check_in, check_out) when its own status is
blocked or maintenance, or when a line that still holds it belongs to a
booking whose stay overlaps the range. Lines of cancelled or checked-out
bookings, and individually cancelled lines, release the room.

Every check is read-only. Callers that act on the answer must hold the
room's reservation lock (see room_lock) while they do.
"""

from datetime import date
from typing import List, Optional, Union

from sqlalchemy.orm import Session

from app.core.exceptions import RoomNotFoundError, RoomUnavailableError
from app.models.base.enums import RoomStatus
from app.models.homestay.room import Room
from app.repositories.booking.booking_room_repository import BookingRoomRepository
from app.repositories.homestay.room_repository import RoomRepository
from app.schemas.room.room_availability import RoomAvailabilityResponse
from app.services.base.base_service import BaseService
from app.services.base.service_result import ServiceResult
from app.utils.date_utils import validate_stay_range


class RoomAvailabilityService(BaseService[Room, RoomRepository]):
    """
    Answers whether rooms can be booked for a stay range.

    Responsibilities:
    - Single-room checks returning a bool or raising RoomUnavailableError
    - Listing the free rooms of a homestay
    """

    _STATUS_REASONS = {
        RoomStatus.BLOCKED: RoomUnavailableError.BLOCKED,
        RoomStatus.MAINTENANCE: RoomUnavailableError.MAINTENANCE,
    }

    def __init__(
        self,
        repository: RoomRepository,
        db_session: Session,
        booking_room_repository: Optional[BookingRoomRepository] = None,
    ):
        super().__init__(repository, db_session)
        self.booking_room_repository = booking_room_repository or BookingRoomRepository(db_session)

    def _resolve(self, room: Union[Room, str]) -> Room:
        if isinstance(room, Room):
            return room
        found = self.repository.find_by_id(room)
        if found is None:
            raise RoomNotFoundError(room)
        return found

    def find_unavailability(
        self,
        room: Union[Room, str],
        check_in: date,
        check_out: date,
    ) -> Optional[RoomUnavailableError]:
        """
        Why the room cannot be booked for the range, or None when it can.

        The room status is checked before any booking lookup.
        """
        room = self._resolve(room)

        status_reason = self._STATUS_REASONS.get(room.status)
        if status_reason is not None:
            return RoomUnavailableError(room.id, status_reason, room_number=room.room_number)

        conflicts = self.booking_room_repository.find_conflicting_lines(room.id, check_in, check_out)
        if conflicts:
            return RoomUnavailableError(
                room.id,
                RoomUnavailableError.ALREADY_BOOKED,
                room_number=room.room_number,
                conflicting_booking_ids=sorted({line.booking_id for line in conflicts}),
            )
        return None

    def is_available(self, room: Union[Room, str], check_in: date, check_out: date) -> bool:
        """
        Whether the room can be booked for [check_in, check_out).

        Raises:
            RoomNotFoundError: if the room id is unknown
        """
        return self.find_unavailability(room, check_in, check_out) is None

    def assert_available(
        self,
        room: Union[Room, str],
        check_in: date,
        check_out: date,
    ) -> Room:
        """
        Return the room when it can be booked for the range.

        Raises:
            RoomNotFoundError: if the room id is unknown
            RoomUnavailableError: with reason blocked, maintenance or already_booked
        """
        room = self._resolve(room)
        error = self.find_unavailability(room, check_in, check_out)
        if error is not None:
            raise error
        return room

    def find_available_rooms(self, homestay_id: str, check_in: date, check_out: date) -> List[Room]:
        """Rooms of the homestay with status available and no overlapping line."""
        candidates = self.repository.find_rooms_by_homestay(homestay_id, status=RoomStatus.AVAILABLE)
        booked = set(
            self.booking_room_repository.find_booked_room_ids(
                [room.id for room in candidates], check_in, check_out
            )
        )
        return [room for room in candidates if room.id not in booked]

    def check_room_availability(
        self,
        room_id: str,
        check_in: date,
        check_out: date,
    ) -> ServiceResult[RoomAvailabilityResponse]:
        """Availability of one room as a result object for the HTTP layer."""
        try:
            validate_stay_range(check_in, check_out)
            room = self._resolve(room_id)
            error = self.find_unavailability(room, check_in, check_out)

            return ServiceResult.success(
                RoomAvailabilityResponse(
                    room_id=room.id,
                    room_number=room.room_number,
                    check_in_date=check_in,
                    check_out_date=check_out,
                    is_available=error is None,
                    reason=error.reason if error else None,
                    conflicting_booking_ids=(error.details.get("conflicting_booking_ids") or []) if error else [],
                )
            )
        except Exception as e:
            return self._handle_exception(e, "check room availability", room_id)


__all__ = ["RoomAvailabilityService"]
