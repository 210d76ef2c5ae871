# --- File: app/schemas/booking/booking_payment.py ---
"""
Payment request schema.

Payments are recorded as completed; gateway processing is outside this
system.
"""

from __future__ import annotations

from datetime import datetime
from decimal import Decimal
from typing import Any, Dict, Optional

from pydantic import Field

from app.models.base.enums import PaymentMethod, PaymentType
from app.schemas.common.base import BaseCreateSchema

__all__ = ["PaymentCreate"]


class PaymentCreate(BaseCreateSchema):
    """Record money received for a booking."""

    amount: Decimal = Field(
        ...,
        gt=0,
        max_digits=10,
        decimal_places=2,
        description="Amount received",
    )
    payment_method: PaymentMethod = Field(..., description="How the guest paid")
    payment_type: PaymentType = Field(PaymentType.PARTIAL, description="What the payment is for")
    transaction_id: Optional[str] = Field(None, max_length=100)
    payment_gateway: Optional[str] = Field(None, max_length=100)
    payment_date: Optional[datetime] = Field(
        None,
        description="When the money was received; defaults to now",
    )
    notes: Optional[str] = Field(None, max_length=1000)
    payment_details: Optional[Dict[str, Any]] = None
