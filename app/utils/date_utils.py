# app/utils/date_utils.py
from __future__ import annotations

"""
Date utility functions for stay ranges.

Notes:
- Stay ranges are half-open: [check_in, check_out). The check-out day is
  free for the next guest, so a stay ending on the 15th and one starting
  on the 15th do not overlap.
- All "UTC" helpers use timezone-aware datetimes with `timezone.utc`.
"""

import math
from datetime import date, datetime, timezone
from typing import Union

from app.core.exceptions import InvalidDateRangeError

UTC = timezone.utc

DateLike = Union[date, datetime]

SECONDS_PER_DAY = 24 * 60 * 60


def now_utc() -> datetime:
    """Return current UTC datetime (timezone-aware)."""
    return datetime.now(UTC)


def today_utc() -> date:
    """Return today's date in UTC."""
    return now_utc().date()


def calculate_nights(check_in: DateLike, check_out: DateLike) -> int:
    """
    Number of nights between two stay boundaries.

    Dates give the exact day difference; datetimes are rounded up, so a
    stay from 14:00 on the 10th to 11:00 on the 12th counts as two nights.
    """
    if isinstance(check_in, datetime) and isinstance(check_out, datetime):
        delta = check_out - check_in
        return math.ceil(delta.total_seconds() / SECONDS_PER_DAY)

    if isinstance(check_in, datetime):
        check_in = check_in.date()
    if isinstance(check_out, datetime):
        check_out = check_out.date()
    return (check_out - check_in).days


def validate_stay_range(check_in: DateLike, check_out: DateLike) -> int:
    """
    Ensure check-out is strictly after check-in.

    Returns:
        The number of nights of the stay.

    Raises:
        InvalidDateRangeError: if check_out <= check_in
    """
    if check_in is None or check_out is None or check_out <= check_in:
        raise InvalidDateRangeError(
            start_date=check_in.isoformat() if check_in else None,
            end_date=check_out.isoformat() if check_out else None,
        )
    return calculate_nights(check_in, check_out)


def ranges_overlap(
    a_start: DateLike,
    a_end: DateLike,
    b_start: DateLike,
    b_end: DateLike,
) -> bool:
    """Half-open interval overlap: touching ranges do not overlap."""
    return a_start < b_end and a_end > b_start


__all__ = [
    "UTC",
    "now_utc",
    "today_utc",
    "calculate_nights",
    "validate_stay_range",
    "ranges_overlap",
]
