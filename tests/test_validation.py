"""Tests for validity predicates and the raising validators."""

import pytest

from timeshield._internal.validation import (
    validate_date,
    validate_offset,
    validate_range,
    validate_time,
)
from timeshield.errors import InvalidDateTime, InvalidTimeZone
from timeshield.validation import (
    is_leap_year_ts,
    is_valid_date,
    is_valid_date_time,
    is_valid_time,
    is_valid_time_zone,
    is_valid_time_zone_offset,
    is_weekend,
    is_weekend_day,
    is_workday,
    is_workday_date,
    is_workday_ms,
)

# 2024-06-03, a Monday
MONDAY_TS = 1717372800


class TestDateValidity:
    """Tests for is_valid_date and is_valid_date_time."""

    def test_valid_dates(self) -> None:
        """Ordinary and leap dates are accepted."""
        assert is_valid_date(2024, 2, 29)
        assert is_valid_date(2000, 2, 29)
        assert is_valid_date(1970, 1, 1)
        assert is_valid_date(2023, 12, 31)

    def test_invalid_dates(self) -> None:
        """Out-of-range months and days are rejected."""
        assert not is_valid_date(2023, 2, 29)
        assert not is_valid_date(1900, 2, 29)
        assert not is_valid_date(2024, 13, 1)
        assert not is_valid_date(2024, 0, 1)
        assert not is_valid_date(2024, 4, 31)
        assert not is_valid_date(2024, 1, 0)

    def test_swapped_day_and_year(self) -> None:
        """A (day, month, year) triple is recognised."""
        assert is_valid_date(29, 2, 2024)
        assert not is_valid_date(29, 2, 2023)

    def test_year_above_max(self) -> None:
        """Years past MAX_YEAR are rejected."""
        assert not is_valid_date(292_277_022_001, 1, 1)

    def test_date_time(self) -> None:
        """Date and time parts are both checked."""
        assert is_valid_date_time(2024, 2, 29, 23, 59, 59, 999)
        assert not is_valid_date_time(2024, 2, 29, 24, 0, 0)
        assert not is_valid_date_time(2024, 2, 30, 12, 0, 0)
        assert not is_valid_date_time(2024, 2, 29, 12, 0, 0, 1000)


class TestTimeValidity:
    """Tests for time-of-day and offset predicates."""

    def test_time(self) -> None:
        """Leap seconds and negative fields are rejected."""
        assert is_valid_time(0, 0, 0)
        assert is_valid_time(23, 59, 59, 999)
        assert not is_valid_time(23, 59, 60)
        assert not is_valid_time(-1, 0, 0)

    def test_time_zone_fields(self) -> None:
        """Offset hour and minute fields."""
        assert is_valid_time_zone(5, 30)
        assert not is_valid_time_zone(24, 0)
        assert not is_valid_time_zone(0, 60)

    def test_time_zone_offset(self) -> None:
        """Offsets lie in [-12h, +14h] and are whole minutes."""
        assert is_valid_time_zone_offset(0)
        assert is_valid_time_zone_offset(14 * 3600)
        assert is_valid_time_zone_offset(-12 * 3600)
        assert not is_valid_time_zone_offset(14 * 3600 + 60)
        assert not is_valid_time_zone_offset(-12 * 3600 - 60)
        assert not is_valid_time_zone_offset(90)
        assert not is_valid_time_zone_offset(30)


class TestWeekdayPredicates:
    """Tests for weekend and workday predicates."""

    def test_week_of_june_2024(self) -> None:
        """Monday to Friday are workdays, Saturday and Sunday are not."""
        for offset in range(5):
            assert is_workday(MONDAY_TS + offset * 86400)
            assert not is_weekend(MONDAY_TS + offset * 86400)
        assert is_weekend(MONDAY_TS + 5 * 86400)
        assert is_weekend(MONDAY_TS + 6 * 86400)

    def test_before_epoch(self) -> None:
        """1969-12-31 was a Wednesday; 1969-12-28 a Sunday."""
        assert is_workday(-1)
        assert is_weekend(-4 * 86400)
        assert is_weekend_day(-4)

    def test_ms_and_date_variants(self) -> None:
        """Millisecond and civil-date forms agree with seconds."""
        assert is_workday_ms(MONDAY_TS * 1000 + 999)
        assert not is_workday_ms((MONDAY_TS + 5 * 86400) * 1000)
        assert is_workday_date(2024, 6, 3)
        assert not is_workday_date(2024, 6, 8)
        assert not is_workday_date(2024, 2, 30)

    def test_workday_date_day_month_year_order(self) -> None:
        """Swapped fields give the same weekday as year-month-day order."""
        assert not is_workday_date(1, 6, 2024)
        assert is_workday_date(3, 6, 2024)
        for day in range(1, 31):
            assert is_workday_date(day, 6, 2024) == is_workday_date(2024, 6, day)

    def test_leap_year_ts(self) -> None:
        """Leap-year check on the year containing a timestamp."""
        assert is_leap_year_ts(951782400)
        assert not is_leap_year_ts(0)
        assert not is_leap_year_ts(-1)


class TestValidators:
    """Tests for the raising validators."""

    def test_validate_date(self) -> None:
        """Messages name the field and the offending value."""
        with pytest.raises(InvalidDateTime, match="month must be between 1 and 12, got 13"):
            validate_date(2024, 13, 1)
        with pytest.raises(InvalidDateTime, match="day must be between 1 and 29"):
            validate_date(2024, 2, 30)
        validate_date(2024, 2, 29)

    def test_validate_time(self) -> None:
        """Hour 24 is rejected."""
        with pytest.raises(InvalidDateTime, match="hour must be between 0 and 23, got 24"):
            validate_time(24, 0, 0)
        with pytest.raises(InvalidDateTime, match="ms must be between 0 and 999"):
            validate_time(0, 0, 0, 1000)

    def test_validate_offset(self) -> None:
        """Range and minute granularity."""
        with pytest.raises(InvalidTimeZone, match="outside valid range"):
            validate_offset(15 * 3600)
        with pytest.raises(InvalidTimeZone, match="multiple of 60"):
            validate_offset(45)
        validate_offset(-12 * 3600)

    def test_validate_range_decorator(self) -> None:
        """Positional and keyword arguments are both checked."""

        @validate_range(hour=(0, 23))
        def hour_seconds(hour: int) -> int:
            return hour * 3600

        assert hour_seconds(2) == 7200
        with pytest.raises(InvalidDateTime, match="hour must be between 0 and 23, got 25"):
            hour_seconds(25)
        with pytest.raises(InvalidDateTime, match="got -1"):
            hour_seconds(hour=-1)
