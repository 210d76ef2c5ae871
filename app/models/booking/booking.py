# app/models/booking/booking.py
"""
Booking model.

The booking header is the aggregate root of a reservation: it owns the
room lines and the payments, and carries the single authoritative
lifecycle status from which every line status is derived.
"""

from datetime import date, datetime
from decimal import Decimal
from typing import TYPE_CHECKING, List, Optional

from sqlalchemy import (
    JSON,
    Boolean,
    CheckConstraint,
    Date,
    DateTime,
    Enum,
    ForeignKey,
    Index,
    Integer,
    Numeric,
    String,
    Text,
)
from sqlalchemy.orm import Mapped, mapped_column, relationship, validates

from app.models.base.base_model import TimestampModel
from app.models.base.enums import BookingStatus, enum_values

if TYPE_CHECKING:
    from app.models.booking.booking_room import BookingRoom
    from app.models.booking.payment import Payment
    from app.models.homestay.homestay import Homestay
    from app.models.lead.lead import Lead

__all__ = ["Booking"]


class Booking(TimestampModel):
    """
    Reservation of one or more rooms of a homestay for a stay range.

    The stay range is half-open: the guest occupies the nights from
    check_in_date up to, but not including, check_out_date.
    """

    __tablename__ = "bookings"

    booking_reference: Mapped[str] = mapped_column(
        String(50),
        unique=True,
        nullable=False,
        index=True,
        comment="Human-readable booking reference",
    )

    lead_id: Mapped[str] = mapped_column(
        String(36),
        ForeignKey("leads.id"),
        nullable=False,
        index=True,
    )

    homestay_id: Mapped[str] = mapped_column(
        String(36),
        ForeignKey("homestays.id"),
        nullable=False,
        index=True,
    )

    # Guest information, copied from the lead at creation time
    guest_name: Mapped[str] = mapped_column(String(255), nullable=False)
    guest_email: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
    guest_phone: Mapped[Optional[str]] = mapped_column(String(20), nullable=True)
    number_of_adults: Mapped[int] = mapped_column(Integer, nullable=False, default=1)
    number_of_children: Mapped[int] = mapped_column(Integer, nullable=False, default=0)

    # Stay
    check_in_date: Mapped[date] = mapped_column(Date, nullable=False, index=True)
    check_out_date: Mapped[date] = mapped_column(Date, nullable=False, index=True)
    number_of_nights: Mapped[int] = mapped_column(Integer, nullable=False)
    total_rooms: Mapped[int] = mapped_column(Integer, nullable=False, default=1)

    status: Mapped[BookingStatus] = mapped_column(
        Enum(BookingStatus, values_callable=enum_values, name="booking_status"),
        nullable=False,
        default=BookingStatus.PENDING,
        index=True,
    )

    # Pricing (precision: 10, scale: 2)
    total_amount: Mapped[Decimal] = mapped_column(
        Numeric(10, 2),
        nullable=False,
        comment="Grand total after discount and tax",
    )
    paid_amount: Mapped[Decimal] = mapped_column(
        Numeric(10, 2),
        nullable=False,
        default=Decimal("0.00"),
    )
    balance_amount: Mapped[Decimal] = mapped_column(
        Numeric(10, 2),
        nullable=False,
        comment="total_amount - paid_amount",
    )
    discount_amount: Mapped[Decimal] = mapped_column(
        Numeric(10, 2),
        nullable=False,
        default=Decimal("0.00"),
    )
    tax_percentage: Mapped[Decimal] = mapped_column(
        Numeric(5, 2),
        nullable=False,
        default=Decimal("0.00"),
    )
    tax_amount: Mapped[Decimal] = mapped_column(
        Numeric(10, 2),
        nullable=False,
        default=Decimal("0.00"),
    )
    is_payment_complete: Mapped[bool] = mapped_column(
        Boolean,
        nullable=False,
        default=False,
    )

    # Guest-facing details
    special_requests: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    notes: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    expected_arrival_time: Mapped[Optional[str]] = mapped_column(String(20), nullable=True)
    guest_details: Mapped[Optional[dict]] = mapped_column(JSON, nullable=True)

    # Lifecycle stamps
    actual_check_in_time: Mapped[Optional[datetime]] = mapped_column(
        DateTime(timezone=True),
        nullable=True,
    )
    actual_check_out_time: Mapped[Optional[datetime]] = mapped_column(
        DateTime(timezone=True),
        nullable=True,
    )
    cancelled_at: Mapped[Optional[datetime]] = mapped_column(
        DateTime(timezone=True),
        nullable=True,
    )
    cancellation_reason: Mapped[Optional[str]] = mapped_column(Text, nullable=True)

    # Relationships
    lead: Mapped["Lead"] = relationship("Lead", lazy="select")
    homestay: Mapped["Homestay"] = relationship("Homestay", lazy="select")

    rooms: Mapped[List["BookingRoom"]] = relationship(
        "BookingRoom",
        back_populates="booking",
        cascade="all, delete-orphan",
        order_by="BookingRoom.line_number",
        lazy="selectin",
    )

    payments: Mapped[List["Payment"]] = relationship(
        "Payment",
        back_populates="booking",
        cascade="all, delete-orphan",
        order_by="Payment.payment_date.desc()",
        lazy="select",
    )

    __table_args__ = (
        Index("ix_booking_homestay_status", "homestay_id", "status"),
        Index("ix_booking_status_created", "status", "created_at"),
        CheckConstraint(
            "check_out_date > check_in_date",
            name="ck_booking_stay_range",
        ),
        CheckConstraint(
            "number_of_nights >= 1",
            name="ck_booking_nights_positive",
        ),
        CheckConstraint(
            "paid_amount >= 0",
            name="ck_booking_paid_non_negative",
        ),
    )

    @validates("paid_amount", "discount_amount", "tax_percentage")
    def validate_amounts(self, key: str, value: Decimal) -> Decimal:
        """Validate monetary amounts are non-negative."""
        if value is not None and value < 0:
            raise ValueError(f"{key} cannot be negative")
        return value

    @property
    def active_rooms(self) -> List["BookingRoom"]:
        """Room lines that still hold their room."""
        return [line for line in self.rooms if not line.is_cancelled]

    @property
    def is_closed(self) -> bool:
        """Cancelled or checked-out bookings no longer accept edits."""
        return self.status in (BookingStatus.CANCELLED, BookingStatus.CHECKED_OUT)
