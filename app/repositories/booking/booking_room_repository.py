# app/repositories/booking/booking_room_repository.py
"""
Booking room line repository.

Holds the overlap query every availability decision is based on.
"""

from datetime import date
from typing import List

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.models.base.enums import BookingStatus
from app.models.booking.booking import Booking
from app.models.booking.booking_room import BookingRoom
from app.repositories.base.base_repository import BaseRepository


class BookingRoomRepository(BaseRepository[BookingRoom]):
    """
    Repository for booking room lines.

    The conflict query is the source of truth for room availability.
    """

    BLOCKING_EXCLUDED_STATUSES = (BookingStatus.CANCELLED, BookingStatus.CHECKED_OUT)

    def __init__(self, db: Session):
        super().__init__(BookingRoom, db)

    def find_conflicting_lines(
        self,
        room_id: str,
        check_in: date,
        check_out: date,
    ) -> List[BookingRoom]:
        """
        Lines holding the room during [check_in, check_out).

        A line holds its room while it is not cancelled and its booking is
        neither cancelled nor checked out. Ranges that only touch do not
        conflict.
        """
        query = (
            select(BookingRoom)
            .join(Booking, BookingRoom.booking_id == Booking.id)
            .where(
                BookingRoom.room_id == room_id,
                BookingRoom.is_cancelled.is_(False),
                Booking.status.notin_(self.BLOCKING_EXCLUDED_STATUSES),
                Booking.check_in_date < check_out,
                Booking.check_out_date > check_in,
            )
        )

        try:
            return list(self.db.execute(query).scalars().all())
        except SQLAlchemyError as e:
            raise self._persistence_error("find conflicting lines", e) from e

    def find_booked_room_ids(self, room_ids: List[str], check_in: date, check_out: date) -> List[str]:
        """Subset of room_ids that have a conflicting line in the range."""
        if not room_ids:
            return []
        query = (
            select(BookingRoom.room_id)
            .join(Booking, BookingRoom.booking_id == Booking.id)
            .where(
                BookingRoom.room_id.in_(room_ids),
                BookingRoom.is_cancelled.is_(False),
                Booking.status.notin_(self.BLOCKING_EXCLUDED_STATUSES),
                Booking.check_in_date < check_out,
                Booking.check_out_date > check_in,
            )
            .distinct()
        )
        try:
            return list(self.db.execute(query).scalars().all())
        except SQLAlchemyError as e:
            raise self._persistence_error("find booked rooms", e) from e
