# app/services/booking/room_lock.py
"""
Per-room reservation locks.

Checking a room's availability and writing the booking that takes it
must happen as one unit, otherwise two requests for the same dates can
both see the room free. RoomReservationLock serialises those units per
room:

- a process-local lock per room id, which also covers engines without
  row locks such as SQLite;
- on PostgreSQL, a transaction-scoped advisory lock per room, which
  covers several worker processes and is released by commit or rollback.

Room ids are always locked in sorted order so two multi-room bookings
cannot deadlock each other.
"""

import threading
from contextlib import contextmanager
from typing import Dict, Iterable, Iterator, List, Optional

from sqlalchemy import text
from sqlalchemy.orm import Session

from app.config.settings import settings
from app.core.exceptions import LockTimeoutError
from app.core.logging import get_logger

logger = get_logger(__name__)


class RoomLockRegistry:
    """
    Process-wide map of room id to lock.

    An entry lives only while some thread holds or waits for it, so ids
    that never resolve to a room leave nothing behind.
    """

    def __init__(self):
        self._entries: Dict[str, List] = {}
        self._guard = threading.Lock()

    def __len__(self) -> int:
        with self._guard:
            return len(self._entries)

    def acquire(self, room_id: str, timeout: float = -1) -> bool:
        with self._guard:
            entry = self._entries.setdefault(room_id, [threading.Lock(), 0])
            entry[1] += 1
        if entry[0].acquire(timeout=timeout):
            return True
        self._forget(room_id)
        return False

    def release(self, room_id: str) -> None:
        with self._guard:
            entry = self._entries[room_id]
        entry[0].release()
        self._forget(room_id)

    def _forget(self, room_id: str) -> None:
        with self._guard:
            entry = self._entries[room_id]
            entry[1] -= 1
            if entry[1] == 0:
                del self._entries[room_id]


room_lock_registry = RoomLockRegistry()


class RoomReservationLock:
    """Acquire every lock guarding a set of rooms for one unit of work."""

    ADVISORY_LOCK_SQL = text("SELECT pg_advisory_xact_lock(hashtext(:lock_key))")

    def __init__(
        self,
        db: Session,
        timeout: Optional[float] = None,
        registry: Optional[RoomLockRegistry] = None,
    ):
        self.db = db
        self.timeout = settings.ROOM_LOCK_TIMEOUT_SECONDS if timeout is None else timeout
        self.registry = room_lock_registry if registry is None else registry

    @property
    def uses_advisory_locks(self) -> bool:
        return self.db.get_bind().dialect.name == "postgresql"

    @contextmanager
    def hold(self, room_ids: Iterable[str]) -> Iterator[List[str]]:
        """
        Hold the locks of the given rooms for the duration of the block.

        The caller's transaction must be committed or rolled back inside
        the block; advisory locks end with that transaction.

        Raises:
            LockTimeoutError: if a room stays locked longer than the timeout
        """
        ordered_ids = sorted(set(room_ids))
        acquired: List[str] = []

        try:
            for room_id in ordered_ids:
                if not self.registry.acquire(room_id, timeout=self.timeout):
                    logger.warning(
                        "Timed out waiting for room lock",
                        extra={"room_id": room_id, "timeout_seconds": self.timeout},
                    )
                    raise LockTimeoutError(room_id, self.timeout)
                acquired.append(room_id)

            if self.uses_advisory_locks:
                for room_id in ordered_ids:
                    self.db.execute(self.ADVISORY_LOCK_SQL, {"lock_key": f"room:{room_id}"})

            logger.debug("Room locks acquired", extra={"room_ids": ordered_ids})
            yield ordered_ids
        finally:
            for room_id in reversed(acquired):
                self.registry.release(room_id)


__all__ = ["RoomLockRegistry", "RoomReservationLock", "room_lock_registry"]
