# app/utils/reference.py
"""Human-readable references for bookings and payments."""

import secrets
from datetime import date
from typing import Optional

REFERENCE_ALPHABET = "ABCDEFGHJKLMNPQRSTUVWXYZ23456789"
REFERENCE_LENGTH = 6


def generate_reference(prefix: str, on: Optional[date] = None) -> str:
    """
    Generate a reference such as ``BKG-2025-7QK2MX``.

    The random part is drawn with `secrets`, so references never depend on
    counting existing rows; uniqueness is still enforced by the column.
    """
    year = (on or date.today()).year
    suffix = "".join(secrets.choice(REFERENCE_ALPHABET) for _ in range(REFERENCE_LENGTH))
    return f"{prefix}-{year}-{suffix}"


__all__ = ["generate_reference", "REFERENCE_ALPHABET", "REFERENCE_LENGTH"]
