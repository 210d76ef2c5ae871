# app/models/homestay/homestay.py
"""
Homestay model.

A homestay owns a set of rooms; bookings are always made against one
homestay and only its rooms may appear on the booking.
"""

from typing import TYPE_CHECKING, List, Optional

from sqlalchemy import Enum, Integer, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.models.base.base_model import TimestampModel
from app.models.base.enums import HomestayStatus, enum_values

if TYPE_CHECKING:
    from app.models.homestay.room import Room

__all__ = ["Homestay"]


class Homestay(TimestampModel):
    """Property that offers rooms for booking."""

    __tablename__ = "homestays"

    name: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
        comment="Display name of the homestay",
    )

    city: Mapped[Optional[str]] = mapped_column(
        String(100),
        nullable=True,
    )

    contact_number: Mapped[Optional[str]] = mapped_column(
        String(20),
        nullable=True,
    )

    status: Mapped[HomestayStatus] = mapped_column(
        Enum(HomestayStatus, values_callable=enum_values, name="homestay_status"),
        nullable=False,
        default=HomestayStatus.ACTIVE,
    )

    total_rooms: Mapped[int] = mapped_column(
        Integer,
        nullable=False,
        default=0,
        comment="Number of rooms registered for this homestay",
    )

    rooms: Mapped[List["Room"]] = relationship(
        "Room",
        back_populates="homestay",
        cascade="all, delete-orphan",
        order_by="Room.room_number",
    )
