"""Booking creation workflow."""

from datetime import date
from decimal import Decimal

import pytest
from sqlalchemy import func, select
from sqlalchemy.exc import OperationalError

from app.core.exceptions import ErrorCode, PersistenceError
from app.models.base.enums import BookingStatus, LeadStatus, RoomBookingStatus
from app.models.booking import Booking, BookingRoom
from app.models.lead import Lead
from app.services.base import ServiceError, ServiceResult


def count_rows(session, model) -> int:
    return session.execute(select(func.count(model.id))).scalar_one()


class TestSuccessfulCreation:
    def test_two_room_booking_totals(self, seed, create_booking):
        booking = create_booking(
            [(seed.room_a, 2), (seed.room_b, 1)],
            check_in=date(2025, 1, 10),
            check_out=date(2025, 1, 13),
            discount="500",
            tax="12",
        )

        assert booking.status == BookingStatus.PENDING
        assert booking.number_of_nights == 3
        assert booking.total_rooms == 2
        assert [line.total_amount for line in booking.rooms] == [Decimal("6000.00"), Decimal("4500.00")]
        assert [line.rate_per_night for line in booking.rooms] == [Decimal("2000.00"), Decimal("1500.00")]
        assert booking.discount_amount == Decimal("500.00")
        assert booking.tax_amount == Decimal("1200.00")
        assert booking.total_amount == Decimal("11200.00")
        assert booking.paid_amount == Decimal("0.00")
        assert booking.balance_amount == Decimal("11200.00")
        assert booking.is_payment_complete is False

    def test_guest_details_come_from_lead(self, seed, create_booking):
        booking = create_booking([(seed.room_a, 2)])

        assert booking.guest_name == "Meera Nair"
        assert booking.guest_email == "meera@example.com"
        assert booking.number_of_adults == 2
        assert booking.number_of_children == 1

    def test_lines_keep_request_order_and_are_reserved(self, seed, create_booking):
        booking = create_booking([(seed.family_room, 3), (seed.room_a, 1)])

        assert [line.room_id for line in booking.rooms] == [seed.family_room.id, seed.room_a.id]
        assert [line.line_number for line in booking.rooms] == [1, 2]
        assert [line.room_number for line in booking.rooms] == ["103", "101"]
        assert all(line.status == RoomBookingStatus.RESERVED for line in booking.rooms)

    def test_full_room_is_marked_fully_occupied(self, seed, create_booking):
        booking = create_booking([(seed.room_a, 2), (seed.family_room, 1)])

        assert [line.is_fully_occupied for line in booking.rooms] == [True, False]

    def test_reference_format(self, seed, create_booking):
        booking = create_booking([(seed.room_a, 1)])

        prefix, year, suffix = booking.booking_reference.split("-")
        assert prefix == "BKG"
        assert year.isdigit() and len(year) == 4
        assert len(suffix) == 6

    def test_round_trip_by_id_and_reference(self, seed, create_booking, booking_service):
        created = create_booking([(seed.room_a, 2), (seed.room_b, 2)], discount="100", tax="5")

        by_id = booking_service.get_booking(created.id)
        by_reference = booking_service.get_booking_by_reference(created.booking_reference)

        assert by_id.is_success and by_reference.is_success
        for fetched in (by_id.data, by_reference.data):
            assert fetched.id == created.id
            assert fetched.status == BookingStatus.PENDING
            assert fetched.total_amount == created.total_amount
            assert fetched.balance_amount == created.balance_amount
            assert [(l.room_id, l.number_of_guests, l.total_amount) for l in fetched.rooms] == [
                (l.room_id, l.number_of_guests, l.total_amount) for l in created.rooms
            ]

    def test_lead_is_marked_converted(self, seed, create_booking, db_session):
        booking = create_booking([(seed.room_a, 1)])

        lead = db_session.get(Lead, seed.lead.id)
        db_session.refresh(lead)
        assert lead.status == LeadStatus.CONVERTED
        assert lead.booking_id == booking.id
        assert lead.converted_at is not None

    def test_lead_notification_failure_does_not_fail_booking(
        self, seed, booking_service, make_request, db_session
    ):
        def broken(lead_id, booking_id):
            raise RuntimeError("lead store offline")

        booking_service.lead_service.mark_converted = broken

        result = booking_service.create_booking(make_request([(seed.room_a, 1)]))

        assert result.is_success
        assert count_rows(db_session, Booking) == 1

    def test_failed_lead_result_does_not_fail_booking(self, seed, booking_service, make_request, db_session):
        failure = ServiceResult.failure(ServiceError(code=ErrorCode.PERSISTENCE_FAILURE, message="write failed"))
        booking_service.lead_service.mark_converted = lambda lead_id, booking_id: failure

        result = booking_service.create_booking(make_request([(seed.room_a, 1)]))

        assert result.is_success

    def test_default_tax_rate_is_used_when_omitted(self, seed, booking_service, make_request, monkeypatch):
        from app.config.settings import settings

        monkeypatch.setattr(settings, "DEFAULT_TAX_PERCENTAGE", 10.0)

        result = booking_service.create_booking(make_request([(seed.room_a, 1)], tax=None))

        assert result.is_success
        assert result.data.tax_percentage == Decimal("10.00")
        assert result.data.tax_amount == Decimal("500.00")


class TestRejectedCreation:
    def assert_nothing_written(self, session):
        assert count_rows(session, Booking) == 0
        assert count_rows(session, BookingRoom) == 0

    def test_capacity_exceeded(self, seed, booking_service, make_request, db_session):
        result = booking_service.create_booking(make_request([(seed.room_a, 3)]))

        assert not result.is_success
        assert result.error_code == ErrorCode.CAPACITY_EXCEEDED
        assert result.error.details["room_id"] == seed.room_a.id
        assert result.error.details["capacity"] == 2
        self.assert_nothing_written(db_session)

    def test_second_room_unavailable_writes_nothing(self, seed, booking_service, make_request, db_session):
        result = booking_service.create_booking(make_request([(seed.room_a, 1), (seed.blocked_room, 1)]))

        assert result.error_code == ErrorCode.ROOM_UNAVAILABLE
        assert result.error.details["room_id"] == seed.blocked_room.id
        assert result.error.details["reason"] == "blocked"
        self.assert_nothing_written(db_session)

    def test_overlap_with_existing_booking(self, seed, create_booking, booking_service, make_request, db_session):
        create_booking([(seed.room_a, 1)], check_in=date(2025, 1, 10), check_out=date(2025, 1, 15))

        result = booking_service.create_booking(
            make_request([(seed.room_a, 1)], check_in=date(2025, 1, 14), check_out=date(2025, 1, 16))
        )
        assert result.error_code == ErrorCode.ROOM_UNAVAILABLE
        assert result.error.details["reason"] == "already_booked"

        touching = booking_service.create_booking(
            make_request([(seed.room_a, 1)], check_in=date(2025, 1, 15), check_out=date(2025, 1, 18))
        )
        assert touching.is_success
        assert count_rows(db_session, Booking) == 2

    def test_room_from_another_homestay(self, seed, booking_service, make_request, db_session):
        result = booking_service.create_booking(make_request([(seed.foreign_room, 1)]))

        assert result.error_code == ErrorCode.ROOM_HOMESTAY_MISMATCH
        self.assert_nothing_written(db_session)

    def test_lines_are_checked_in_request_order(self, seed, booking_service, make_request):
        result = booking_service.create_booking(
            make_request([(seed.maintenance_room, 1), (seed.room_a, 5)])
        )

        assert result.error_code == ErrorCode.ROOM_UNAVAILABLE
        assert result.error.details["reason"] == "maintenance"

    def test_unknown_room(self, seed, booking_service, make_request, db_session):
        request = make_request([(seed.room_a, 1)])
        request.rooms[0].room_id = "no-such-room"

        result = booking_service.create_booking(request)

        assert result.error_code == ErrorCode.ROOM_NOT_FOUND
        self.assert_nothing_written(db_session)

    def test_unknown_lead(self, seed, booking_service, make_request):
        result = booking_service.create_booking(make_request([(seed.room_a, 1)], lead_id="no-such-lead"))

        assert result.error_code == ErrorCode.LEAD_NOT_FOUND

    def test_unknown_homestay(self, seed, booking_service, make_request):
        request = make_request([(seed.room_a, 1)])
        request.homestay_id = "no-such-homestay"

        result = booking_service.create_booking(request)

        assert result.error_code == ErrorCode.HOMESTAY_NOT_FOUND

    def test_invalid_date_range(self, seed, booking_service, make_request, db_session):
        result = booking_service.create_booking(
            make_request([(seed.room_a, 1)], check_in=date(2025, 1, 15), check_out=date(2025, 1, 15))
        )

        assert result.error_code == ErrorCode.INVALID_DATE_RANGE
        self.assert_nothing_written(db_session)

    def test_discount_above_line_total(self, seed, booking_service, make_request, db_session):
        # 1 guest x 1000 x 5 nights = 5000
        result = booking_service.create_booking(make_request([(seed.room_a, 1)], discount="5000.01"))

        assert result.error_code == ErrorCode.INVALID_DISCOUNT
        assert result.error.details["gross_total"] == "5000.00"
        self.assert_nothing_written(db_session)

    def test_discount_equal_to_line_total_is_allowed(self, seed, booking_service, make_request):
        result = booking_service.create_booking(make_request([(seed.room_a, 1)], discount="5000"))

        assert result.is_success
        assert result.data.total_amount == Decimal("0.00")
        assert result.data.is_payment_complete is True

    def test_rejected_booking_leaves_lead_untouched(self, seed, booking_service, make_request, db_session):
        booking_service.create_booking(make_request([(seed.room_a, 3)]))

        lead = db_session.get(Lead, seed.lead.id)
        db_session.refresh(lead)
        assert lead.status == LeadStatus.NEW
        assert lead.booking_id is None

    def test_failed_write_leaves_no_partial_booking(self, seed, booking_service, make_request, db_session, monkeypatch):
        repository = booking_service.repository
        flush_then_fail = repository.create

        def create(booking):
            flush_then_fail(booking)
            assert count_rows(db_session, BookingRoom) == 2
            raise PersistenceError("Booking create failed", operation="create", table="bookings")

        monkeypatch.setattr(repository, "create", create)

        result = booking_service.create_booking(make_request([(seed.room_a, 1), (seed.room_b, 1)]))

        assert result.error_code == ErrorCode.PERSISTENCE_FAILURE
        self.assert_nothing_written(db_session)
        lead = db_session.get(Lead, seed.lead.id)
        db_session.refresh(lead)
        assert lead.status == LeadStatus.NEW
        assert lead.booking_id is None

    def test_database_error_during_write_is_a_persistence_failure(
        self, seed, booking_service, make_request, db_session, monkeypatch
    ):
        def failing_flush(*args, **kwargs):
            raise OperationalError("INSERT INTO bookings", {}, Exception("disk I/O error"))

        monkeypatch.setattr(db_session, "flush", failing_flush)

        result = booking_service.create_booking(make_request([(seed.room_a, 1)]))
        monkeypatch.undo()

        assert result.error_code == ErrorCode.PERSISTENCE_FAILURE
        self.assert_nothing_written(db_session)
