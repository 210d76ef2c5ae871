# app/repositories/homestay/room_repository.py
"""
Room repository.
"""

from typing import List, Optional

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.models.base.enums import RoomStatus
from app.models.homestay.room import Room
from app.repositories.base.base_repository import BaseRepository


class RoomRepository(BaseRepository[Room]):
    """
    Repository for Room entity.

    Handles:
    - Room lookup and locking
    - Rooms of a homestay
    """

    def __init__(self, db: Session):
        super().__init__(Room, db)

    def find_rooms_by_homestay(
        self,
        homestay_id: str,
        status: Optional[RoomStatus] = None,
    ) -> List[Room]:
        """
        Rooms of a homestay ordered by room number.

        Args:
            homestay_id: Homestay ID
            status: Optional status filter

        Returns:
            List of rooms
        """
        query = select(Room).where(Room.homestay_id == homestay_id)
        if status is not None:
            query = query.where(Room.status == status)
        query = query.order_by(Room.room_number)

        try:
            return list(self.db.execute(query).scalars().all())
        except SQLAlchemyError as e:
            raise self._persistence_error("find rooms by homestay", e) from e

    def lock_rooms(self, room_ids: List[str]) -> List[Room]:
        """
        Lock room rows in id order and return them with fresh state.

        A consistent lock order keeps two multi-room bookings from
        deadlocking each other.
        """
        if not room_ids:
            return []
        query = (
            select(Room)
            .where(Room.id.in_(sorted(set(room_ids))))
            .order_by(Room.id)
            .with_for_update()
            .execution_options(populate_existing=True)
        )
        try:
            return list(self.db.execute(query).scalars().all())
        except SQLAlchemyError as e:
            raise self._persistence_error("lock rooms", e) from e
