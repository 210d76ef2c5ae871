"""Recording payments against bookings."""

from datetime import datetime, timedelta, timezone
from decimal import Decimal

import pytest

from app.core.exceptions import ErrorCode
from app.models.base.enums import BookingStatus, PaymentMethod, PaymentStatus, PaymentType
from app.schemas.booking import BookingStatusUpdate, PaymentCreate


@pytest.fixture
def booking(seed, create_booking):
    # 2 guests x 1000 x 5 nights
    return create_booking([(seed.room_a, 2)])


def pay(service, booking_id, amount, **kwargs):
    return service.add_payment(
        booking_id,
        PaymentCreate(amount=Decimal(amount), payment_method=kwargs.pop("method", PaymentMethod.UPI), **kwargs),
    )


def test_first_payment_confirms_pending_booking(booking, payment_service, booking_service):
    result = pay(payment_service, booking.id, "4000", transaction_id="UPI-778812")

    assert result.is_success
    assert result.data.status == PaymentStatus.COMPLETED
    assert result.data.payment_type == PaymentType.PARTIAL
    assert result.data.payment_reference.startswith("PAY-")

    detail = booking_service.get_booking(booking.id).data
    assert detail.status == BookingStatus.CONFIRMED
    assert detail.paid_amount == Decimal("4000.00")
    assert detail.balance_amount == Decimal("6000.00")
    assert detail.is_payment_complete is False
    assert [p.id for p in detail.payments] == [result.data.id]


def test_settling_the_balance_completes_payment(booking, payment_service, booking_service):
    pay(payment_service, booking.id, "4000")
    pay(payment_service, booking.id, "6000", payment_type=PaymentType.FULL)

    detail = booking_service.get_booking(booking.id).data
    assert detail.paid_amount == Decimal("10000.00")
    assert detail.balance_amount == Decimal("0.00")
    assert detail.is_payment_complete is True


def test_payments_are_listed_newest_first(booking, payment_service):
    earlier = datetime.now(timezone.utc) - timedelta(days=2)
    first = pay(payment_service, booking.id, "1000", payment_date=earlier).data
    second = pay(payment_service, booking.id, "2000").data

    result = payment_service.list_payments(booking.id)

    assert [p.id for p in result.data] == [second.id, first.id]


def test_cancelled_booking_rejects_payments(booking, payment_service, booking_service):
    booking_service.update_status(booking.id, BookingStatusUpdate(status=BookingStatus.CANCELLED))

    result = pay(payment_service, booking.id, "100")

    assert result.error_code == ErrorCode.INVALID_BOOKING_STATE


def test_unknown_booking(seed, payment_service):
    assert pay(payment_service, "no-such-booking", "100").error_code == ErrorCode.BOOKING_NOT_FOUND
    assert payment_service.list_payments("no-such-booking").error_code == ErrorCode.BOOKING_NOT_FOUND


def test_amount_must_be_positive():
    with pytest.raises(ValueError):
        PaymentCreate(amount=Decimal("0"), payment_method=PaymentMethod.CASH)
