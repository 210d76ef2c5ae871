# app/models/booking/booking_room.py
"""
Booking room line model.

A line places a number of guests in one room for the whole stay of its
booking. Lines have no stored status of their own: the status is computed
from the booking status and the line's cancellation flag.
"""

from decimal import Decimal
from typing import TYPE_CHECKING, Optional

from sqlalchemy import (
    Boolean,
    CheckConstraint,
    ForeignKey,
    Index,
    Integer,
    Numeric,
    String,
    Text,
)
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.models.base.base_model import TimestampModel
from app.models.base.enums import BookingStatus, RoomBookingStatus

if TYPE_CHECKING:
    from app.models.booking.booking import Booking
    from app.models.homestay.room import Room

__all__ = ["BookingRoom", "derive_line_status"]


_LINE_STATUS_BY_BOOKING_STATUS = {
    BookingStatus.PENDING: RoomBookingStatus.RESERVED,
    BookingStatus.CONFIRMED: RoomBookingStatus.RESERVED,
    BookingStatus.NO_SHOW: RoomBookingStatus.RESERVED,
    BookingStatus.CHECKED_IN: RoomBookingStatus.OCCUPIED,
    BookingStatus.CHECKED_OUT: RoomBookingStatus.CHECKED_OUT,
    BookingStatus.CANCELLED: RoomBookingStatus.CANCELLED,
}


def derive_line_status(booking_status: BookingStatus, is_cancelled: bool) -> RoomBookingStatus:
    """Status of a room line given its booking's status and its own cancellation flag."""
    if is_cancelled:
        return RoomBookingStatus.CANCELLED
    return _LINE_STATUS_BY_BOOKING_STATUS[BookingStatus(booking_status)]


class BookingRoom(TimestampModel):
    """One room's line item within a booking."""

    __tablename__ = "booking_rooms"

    booking_id: Mapped[str] = mapped_column(
        String(36),
        ForeignKey("bookings.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )

    room_id: Mapped[str] = mapped_column(
        String(36),
        ForeignKey("rooms.id"),
        nullable=False,
        index=True,
    )

    line_number: Mapped[int] = mapped_column(
        Integer,
        nullable=False,
        default=1,
        comment="Position of the line in the request",
    )

    number_of_guests: Mapped[int] = mapped_column(Integer, nullable=False)

    rate_per_night: Mapped[Decimal] = mapped_column(
        Numeric(10, 2),
        nullable=False,
        comment="price_per_head * number_of_guests",
    )
    total_amount: Mapped[Decimal] = mapped_column(
        Numeric(10, 2),
        nullable=False,
        comment="rate_per_night * number_of_nights",
    )

    is_fully_occupied: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    notes: Mapped[Optional[str]] = mapped_column(Text, nullable=True)

    is_cancelled: Mapped[bool] = mapped_column(
        Boolean,
        nullable=False,
        default=False,
        comment="Line released on its own while the booking stays open",
    )

    booking: Mapped["Booking"] = relationship("Booking", back_populates="rooms")
    room: Mapped["Room"] = relationship("Room", lazy="joined")

    __table_args__ = (
        Index("ix_booking_room_room_booking", "room_id", "booking_id"),
        CheckConstraint("number_of_guests >= 1", name="ck_booking_room_guests_positive"),
    )

    @property
    def status(self) -> RoomBookingStatus:
        return derive_line_status(self.booking.status, self.is_cancelled)
