"""Stay-range helpers."""

from datetime import date, datetime, timezone

import pytest

from app.core.exceptions import ErrorCode, InvalidDateRangeError
from app.utils.date_utils import calculate_nights, ranges_overlap, validate_stay_range


class TestCalculateNights:
    def test_dates_count_whole_days(self):
        assert calculate_nights(date(2025, 1, 10), date(2025, 1, 15)) == 5

    def test_datetimes_round_partial_days_up(self):
        check_in = datetime(2025, 1, 10, 14, 0, tzinfo=timezone.utc)
        check_out = datetime(2025, 1, 12, 11, 0, tzinfo=timezone.utc)
        assert calculate_nights(check_in, check_out) == 2


class TestValidateStayRange:
    def test_returns_nights(self):
        assert validate_stay_range(date(2025, 1, 10), date(2025, 1, 11)) == 1

    @pytest.mark.parametrize(
        "check_in,check_out",
        [
            (date(2025, 1, 10), date(2025, 1, 10)),
            (date(2025, 1, 10), date(2025, 1, 9)),
        ],
    )
    def test_rejects_empty_or_inverted_range(self, check_in, check_out):
        with pytest.raises(InvalidDateRangeError) as exc_info:
            validate_stay_range(check_in, check_out)

        assert exc_info.value.error_code == ErrorCode.INVALID_DATE_RANGE
        assert exc_info.value.details["check_in_date"] == check_in.isoformat()


class TestRangesOverlap:
    def test_touching_ranges_do_not_overlap(self):
        assert not ranges_overlap(date(2025, 1, 10), date(2025, 1, 15), date(2025, 1, 15), date(2025, 1, 18))

    def test_shared_night_overlaps(self):
        assert ranges_overlap(date(2025, 1, 10), date(2025, 1, 15), date(2025, 1, 14), date(2025, 1, 16))

    def test_contained_range_overlaps(self):
        assert ranges_overlap(date(2025, 1, 10), date(2025, 1, 15), date(2025, 1, 11), date(2025, 1, 12))
