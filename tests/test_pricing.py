"""Per-head, per-night pricing with a flat discount and tax."""

from decimal import Decimal

import pytest

from app.core.exceptions import ValidationError
from app.services.booking import BookingPricingService, PricingLine
from app.utils.money import quantize_money


@pytest.fixture
def pricing() -> BookingPricingService:
    return BookingPricingService()


def test_two_room_quote_is_exact(pricing):
    quote = pricing.compute_totals(
        [PricingLine(Decimal("1000"), 2), PricingLine(Decimal("1500"), 1)],
        nights=3,
        discount=Decimal("500"),
        tax_percentage=Decimal("12"),
    )

    assert quote.line_totals == [Decimal("6000"), Decimal("4500")]
    assert [line.rate_per_night for line in quote.line_quotes] == [Decimal("2000"), Decimal("1500")]
    assert quote.gross_total == Decimal("10500")
    assert quote.subtotal == Decimal("10000")
    assert quote.tax == Decimal("1200")
    assert quote.grand_total == Decimal("11200")
    assert not quote.is_negative


def test_fractional_prices_round_only_at_the_end(pricing):
    quote = pricing.compute_totals(
        [PricingLine(Decimal("333.33"), 1)],
        nights=3,
        tax_percentage=Decimal("18"),
    )

    assert quote.subtotal == Decimal("999.99")
    assert quote.tax == Decimal("179.9982")
    assert quantize_money(quote.grand_total) == Decimal("1179.99")


def test_float_inputs_do_not_drift(pricing):
    quote = pricing.compute_totals(
        [PricingLine(Decimal("0.10"), 3)],
        nights=1,
        discount=0.1,
        tax_percentage=0,
    )

    assert quote.grand_total == Decimal("0.20")


def test_discount_larger_than_lines_is_reported_not_clamped(pricing):
    quote = pricing.compute_totals(
        [PricingLine(Decimal("1000"), 1)],
        nights=1,
        discount=Decimal("1500"),
    )

    assert quote.subtotal == Decimal("-500")
    assert quote.is_negative


def test_rejects_stays_without_nights(pricing):
    with pytest.raises(ValidationError):
        pricing.compute_totals([PricingLine(Decimal("1000"), 1)], nights=0)
