# app/services/booking/booking_pricing_service.py
"""
Booking pricing service.

Pricing is per guest per night: a line costs the room's price per head
times its guest count for every night of the stay. A flat discount is
taken off the combined line total once, and tax is a percentage of what
remains.

All arithmetic is done on Decimal without intermediate rounding;
quantize_money() is applied only when amounts are stored or displayed.
"""

from dataclasses import dataclass, field
from decimal import Decimal
from typing import List, Sequence

from app.core.exceptions import ValidationError
from app.utils.money import Number, quantize_money, to_decimal


@dataclass(frozen=True)
class PricingLine:
    """A room's price per head and the number of guests placed in it."""

    price_per_head: Decimal
    number_of_guests: int


@dataclass(frozen=True)
class LineQuote:
    rate_per_night: Decimal
    line_total: Decimal


@dataclass(frozen=True)
class BookingQuote:
    """Result of a price computation."""

    line_quotes: List[LineQuote] = field(default_factory=list)
    gross_total: Decimal = Decimal("0")
    discount: Decimal = Decimal("0")
    subtotal: Decimal = Decimal("0")
    tax_percentage: Decimal = Decimal("0")
    tax: Decimal = Decimal("0")
    grand_total: Decimal = Decimal("0")

    @property
    def line_totals(self) -> List[Decimal]:
        return [line.line_total for line in self.line_quotes]

    @property
    def is_negative(self) -> bool:
        return self.subtotal < 0


class BookingPricingService:
    """
    Service for booking pricing calculations.

    Responsibilities:
    - Compute per-line rates and totals
    - Apply the flat booking discount
    - Apply tax to the discounted subtotal

    The service is pure; it never reads or writes the database.
    A discount larger than the line sum produces a negative subtotal here;
    whether that is acceptable is decided by the caller.
    """

    def compute_totals(
        self,
        lines: Sequence[PricingLine],
        nights: int,
        discount: Number = Decimal("0"),
        tax_percentage: Number = Decimal("0"),
    ) -> BookingQuote:
        """
        Compute line totals, subtotal, tax and grand total.

        Args:
            lines: Priced lines (price per head, guest count)
            nights: Number of nights, at least 1
            discount: Flat amount taken off the combined line total
            tax_percentage: Tax rate in percent of the discounted subtotal

        Returns:
            BookingQuote with unrounded Decimal amounts

        Raises:
            ValidationError: if nights is below 1
        """
        if nights < 1:
            raise ValidationError(
                "A stay must last at least one night",
                details={"number_of_nights": nights},
            )

        discount = to_decimal(discount or 0)
        tax_percentage = to_decimal(tax_percentage or 0)

        line_quotes = []
        for line in lines:
            rate = to_decimal(line.price_per_head) * line.number_of_guests
            line_quotes.append(LineQuote(rate_per_night=rate, line_total=rate * nights))

        gross_total = sum((quote.line_total for quote in line_quotes), Decimal("0"))
        subtotal = gross_total - discount
        tax = subtotal * tax_percentage / Decimal("100")

        return BookingQuote(
            line_quotes=line_quotes,
            gross_total=gross_total,
            discount=discount,
            subtotal=subtotal,
            tax_percentage=tax_percentage,
            tax=tax,
            grand_total=subtotal + tax,
        )


__all__ = [
    "BookingPricingService",
    "BookingQuote",
    "LineQuote",
    "PricingLine",
    "quantize_money",
    "to_decimal",
]
