# app/utils/money.py
"""
Money helpers.

Amounts are Decimal end to end; rounding to two places happens only when
an amount is stored or displayed.
"""

from decimal import ROUND_HALF_UP, Decimal
from typing import Union

MONEY_QUANTUM = Decimal("0.01")

Number = Union[Decimal, int, float, str]


def to_decimal(value: Number) -> Decimal:
    """Convert a number to Decimal without going through binary floating point."""
    if isinstance(value, Decimal):
        return value
    if isinstance(value, float):
        return Decimal(str(value))
    return Decimal(value)


def quantize_money(value: Number) -> Decimal:
    """Round an amount to two decimal places, half up."""
    return to_decimal(value).quantize(MONEY_QUANTUM, rounding=ROUND_HALF_UP)


__all__ = ["MONEY_QUANTUM", "Number", "to_decimal", "quantize_money"]
