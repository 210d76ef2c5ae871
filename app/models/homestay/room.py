# app/models/homestay/room.py
"""
Room model.

Rooms are priced per head per night; a room's capacity bounds the number
of guests any booking line may place in it.
"""

from datetime import date
from decimal import Decimal
from typing import TYPE_CHECKING, Optional

from sqlalchemy import (
    CheckConstraint,
    Date,
    Enum,
    ForeignKey,
    Integer,
    Numeric,
    String,
    Text,
    UniqueConstraint,
)
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.models.base.base_model import TimestampModel
from app.models.base.enums import RoomStatus, RoomType, enum_values

if TYPE_CHECKING:
    from app.models.homestay.homestay import Homestay

__all__ = ["Room"]


class Room(TimestampModel):
    """
    Physical room within a homestay.

    A room whose status is blocked or maintenance can never be selected
    for a new booking.
    """

    __tablename__ = "rooms"

    homestay_id: Mapped[str] = mapped_column(
        String(36),
        ForeignKey("homestays.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )

    room_number: Mapped[str] = mapped_column(
        String(100),
        nullable=False,
    )

    room_name: Mapped[Optional[str]] = mapped_column(
        String(255),
        nullable=True,
    )

    room_type: Mapped[RoomType] = mapped_column(
        Enum(RoomType, values_callable=enum_values, name="room_type"),
        nullable=False,
        default=RoomType.NON_VIEW,
    )

    capacity: Mapped[int] = mapped_column(
        Integer,
        nullable=False,
        comment="Maximum number of guests",
    )

    # Pricing (precision: 10, scale: 2)
    price_per_head: Mapped[Decimal] = mapped_column(
        Numeric(10, 2),
        nullable=False,
        comment="Price per guest per night",
    )

    status: Mapped[RoomStatus] = mapped_column(
        Enum(RoomStatus, values_callable=enum_values, name="room_status"),
        nullable=False,
        default=RoomStatus.AVAILABLE,
        index=True,
    )

    # Blocking details
    block_reason: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    blocked_from: Mapped[Optional[date]] = mapped_column(Date, nullable=True)
    blocked_until: Mapped[Optional[date]] = mapped_column(Date, nullable=True)

    homestay: Mapped["Homestay"] = relationship("Homestay", back_populates="rooms")

    __table_args__ = (
        UniqueConstraint("homestay_id", "room_number", name="uq_room_homestay_number"),
        CheckConstraint("capacity > 0", name="ck_room_capacity_positive"),
        CheckConstraint("price_per_head >= 0", name="ck_room_price_non_negative"),
    )

    @property
    def is_bookable(self) -> bool:
        """Whether the room's own status allows new bookings."""
        return self.status == RoomStatus.AVAILABLE
