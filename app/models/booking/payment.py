# app/models/booking/payment.py
"""
Payment model.

Payments are recorded against a booking; gateway processing happens
elsewhere, this table only keeps the ledger the booking balance is
derived from.
"""

from datetime import datetime
from decimal import Decimal
from typing import TYPE_CHECKING, Optional

from sqlalchemy import (
    JSON,
    CheckConstraint,
    DateTime,
    Enum,
    ForeignKey,
    Numeric,
    String,
    Text,
)
from sqlalchemy.orm import Mapped, mapped_column, relationship
from sqlalchemy.sql import func

from app.models.base.base_model import TimestampModel
from app.models.base.enums import PaymentMethod, PaymentStatus, PaymentType, enum_values

if TYPE_CHECKING:
    from app.models.booking.booking import Booking

__all__ = ["Payment"]


class Payment(TimestampModel):
    """Money received for a booking."""

    __tablename__ = "payments"

    booking_id: Mapped[str] = mapped_column(
        String(36),
        ForeignKey("bookings.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )

    payment_reference: Mapped[str] = mapped_column(
        String(50),
        unique=True,
        nullable=False,
        index=True,
    )

    amount: Mapped[Decimal] = mapped_column(Numeric(10, 2), nullable=False)

    payment_method: Mapped[PaymentMethod] = mapped_column(
        Enum(PaymentMethod, values_callable=enum_values, name="payment_method"),
        nullable=False,
    )
    payment_type: Mapped[PaymentType] = mapped_column(
        Enum(PaymentType, values_callable=enum_values, name="payment_type"),
        nullable=False,
    )
    status: Mapped[PaymentStatus] = mapped_column(
        Enum(PaymentStatus, values_callable=enum_values, name="payment_status"),
        nullable=False,
        default=PaymentStatus.PENDING,
        index=True,
    )

    transaction_id: Mapped[Optional[str]] = mapped_column(String(100), nullable=True)
    payment_gateway: Mapped[Optional[str]] = mapped_column(String(100), nullable=True)

    payment_date: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        server_default=func.now(),
    )

    notes: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    payment_details: Mapped[Optional[dict]] = mapped_column(JSON, nullable=True)

    booking: Mapped["Booking"] = relationship("Booking", back_populates="payments")

    __table_args__ = (
        CheckConstraint("amount >= 0", name="ck_payment_amount_non_negative"),
    )
