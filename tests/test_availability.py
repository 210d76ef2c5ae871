"""Room availability over half-open stay ranges."""

from datetime import date

import pytest

from app.core.exceptions import ErrorCode, RoomNotFoundError, RoomUnavailableError
from app.models.base.enums import BookingStatus
from app.schemas.booking import BookingStatusUpdate


class TestRoomStatus:
    def test_free_room_is_available(self, seed, availability_service):
        assert availability_service.is_available(seed.room_a, date(2025, 3, 1), date(2025, 3, 4))

    @pytest.mark.parametrize(
        "check_in,check_out",
        [
            (date(2025, 1, 1), date(2025, 1, 2)),
            (date(2026, 6, 1), date(2026, 6, 30)),
        ],
    )
    def test_blocked_room_is_never_available(self, seed, availability_service, check_in, check_out):
        assert not availability_service.is_available(seed.blocked_room, check_in, check_out)

    def test_unavailability_reason_distinguishes_maintenance(self, seed, availability_service):
        with pytest.raises(RoomUnavailableError) as exc_info:
            availability_service.assert_available(seed.maintenance_room, date(2025, 1, 1), date(2025, 1, 2))

        assert exc_info.value.reason == RoomUnavailableError.MAINTENANCE
        assert exc_info.value.error_code == ErrorCode.ROOM_UNAVAILABLE

    def test_unknown_room_raises_not_found(self, seed, availability_service):
        with pytest.raises(RoomNotFoundError):
            availability_service.is_available("missing-room", date(2025, 1, 1), date(2025, 1, 2))


class TestBookedRanges:
    @pytest.fixture
    def existing(self, seed, create_booking):
        return create_booking([(seed.room_a, 2)], check_in=date(2025, 1, 10), check_out=date(2025, 1, 15))

    def test_touching_range_is_available(self, seed, existing, availability_service):
        assert availability_service.is_available(seed.room_a, date(2025, 1, 15), date(2025, 1, 18))
        assert availability_service.is_available(seed.room_a, date(2025, 1, 5), date(2025, 1, 10))

    def test_overlapping_range_is_already_booked(self, seed, existing, availability_service):
        error = availability_service.find_unavailability(seed.room_a, date(2025, 1, 14), date(2025, 1, 16))

        assert error is not None
        assert error.reason == RoomUnavailableError.ALREADY_BOOKED
        assert error.details["conflicting_booking_ids"] == [existing.id]

    def test_other_rooms_are_unaffected(self, seed, existing, availability_service):
        assert availability_service.is_available(seed.room_b, date(2025, 1, 10), date(2025, 1, 15))

    def test_cancelled_booking_releases_room(self, seed, existing, booking_service, availability_service):
        result = booking_service.update_status(
            existing.id,
            BookingStatusUpdate(status=BookingStatus.CANCELLED, reason="Guest changed plans"),
        )

        assert result.is_success
        assert availability_service.is_available(seed.room_a, date(2025, 1, 12), date(2025, 1, 14))

    def test_available_rooms_listing(self, seed, existing, availability_service):
        rooms = availability_service.find_available_rooms(seed.homestay.id, date(2025, 1, 12), date(2025, 1, 13))

        assert {room.room_number for room in rooms} == {"102", "103"}

    def test_result_object_for_http_layer(self, seed, existing, availability_service):
        result = availability_service.check_room_availability(seed.room_a.id, date(2025, 1, 14), date(2025, 1, 16))

        assert result.is_success
        assert result.data.is_available is False
        assert result.data.reason == "already_booked"
        assert result.data.conflicting_booking_ids == [existing.id]

    def test_result_object_rejects_invalid_range(self, seed, availability_service):
        result = availability_service.check_room_availability(seed.room_a.id, date(2025, 1, 16), date(2025, 1, 14))

        assert not result.is_success
        assert result.error_code == ErrorCode.INVALID_DATE_RANGE
