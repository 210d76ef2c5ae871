"""Booking statistics and daily front-desk views."""

from datetime import date
from decimal import Decimal

import pytest

from app.models.base.enums import BookingStatus, PaymentMethod
from app.schemas.booking import BookingStatusUpdate, CheckInRequest, PaymentCreate


@pytest.fixture
def bookings(seed, create_booking, booking_service, payment_service):
    # 2 x 1000 x 2 nights = 4000
    pending = create_booking([(seed.room_a, 2)], check_in=date(2025, 3, 1), check_out=date(2025, 3, 3))
    # 1 x 1500 x 2 nights = 3000, paid 1000 -> confirmed
    confirmed = create_booking([(seed.room_b, 1)], check_in=date(2025, 3, 1), check_out=date(2025, 3, 3))
    payment_service.add_payment(confirmed.id, PaymentCreate(amount=Decimal("1000"), payment_method=PaymentMethod.CASH))
    # 1 x 800 x 2 nights = 1600, cancelled
    cancelled = create_booking([(seed.family_room, 1)], check_in=date(2025, 3, 1), check_out=date(2025, 3, 3))
    booking_service.update_status(cancelled.id, BookingStatusUpdate(status=BookingStatus.CANCELLED))
    return pending, confirmed, cancelled


def test_statistics_exclude_cancelled_amounts(seed, bookings, analytics_service):
    stats = analytics_service.get_statistics(seed.homestay.id).data

    assert stats.total_bookings == 3
    assert stats.confirmed_bookings == 1
    assert stats.checked_in_bookings == 0
    assert stats.cancelled_bookings == 1
    assert stats.total_revenue == Decimal("7000.00")
    assert stats.total_paid == Decimal("1000.00")
    assert stats.pending_amount == Decimal("6000.00")


def test_statistics_for_other_homestay_are_empty(seed, bookings, analytics_service):
    stats = analytics_service.get_statistics(seed.other_homestay.id).data

    assert stats.total_bookings == 0
    assert stats.total_revenue == Decimal("0.00")


def test_today_check_ins_lists_confirmed_arrivals(seed, bookings, analytics_service):
    _, confirmed, _ = bookings

    result = analytics_service.get_today_check_ins(today=date(2025, 3, 1))

    assert [b.id for b in result.data] == [confirmed.id]
    assert result.metadata["date"] == "2025-03-01"


def test_today_check_outs_lists_checked_in_departures(seed, bookings, analytics_service, booking_service):
    _, confirmed, _ = bookings
    booking_service.check_in(confirmed.id, CheckInRequest())

    departures = analytics_service.get_today_check_outs(seed.homestay.id, today=date(2025, 3, 3))
    arrivals = analytics_service.get_today_check_ins(seed.homestay.id, today=date(2025, 3, 1))

    assert [b.id for b in departures.data] == [confirmed.id]
    assert arrivals.data == []
    stats = analytics_service.get_statistics().data
    assert stats.checked_in_bookings == 1
