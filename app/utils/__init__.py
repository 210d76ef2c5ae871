"""
Utility package initialization and exports
"""

# Date utilities
from .date_utils import (
    calculate_nights,
    now_utc,
    ranges_overlap,
    today_utc,
    validate_stay_range,
)

# Money
from .money import quantize_money, to_decimal

# Reference generation
from .reference import generate_reference

__all__ = [
    "calculate_nights",
    "now_utc",
    "ranges_overlap",
    "today_utc",
    "validate_stay_range",
    "quantize_money",
    "to_decimal",
    "generate_reference",
]
