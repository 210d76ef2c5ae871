# app/models/lead/lead.py
"""
Lead model.

A lead is the sales record a booking originates from. The booking core
only reads it and marks it converted once a booking exists.
"""

from datetime import datetime
from typing import Optional

from sqlalchemy import DateTime, Enum, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from app.models.base.base_model import TimestampModel
from app.models.base.enums import LeadStatus, enum_values

__all__ = ["Lead"]


class Lead(TimestampModel):
    """Prospective customer that may convert into a booking."""

    __tablename__ = "leads"

    name: Mapped[str] = mapped_column(String(255), nullable=False)
    email: Mapped[str] = mapped_column(String(255), nullable=False)
    phone: Mapped[str] = mapped_column(String(20), nullable=False)

    status: Mapped[LeadStatus] = mapped_column(
        Enum(LeadStatus, values_callable=enum_values, name="lead_status"),
        nullable=False,
        default=LeadStatus.NEW,
        index=True,
    )

    number_of_adults: Mapped[Optional[int]] = mapped_column(Integer, nullable=True)
    number_of_children: Mapped[Optional[int]] = mapped_column(Integer, nullable=True)

    notes: Mapped[Optional[str]] = mapped_column(Text, nullable=True)

    # Conversion tracking
    converted_at: Mapped[Optional[datetime]] = mapped_column(
        DateTime(timezone=True),
        nullable=True,
        comment="When the lead was converted to a booking",
    )
    booking_id: Mapped[Optional[str]] = mapped_column(
        String(36),
        nullable=True,
        comment="Booking created from this lead",
    )
