"""Tests for start/end boundaries and field projections."""

import random

import pytest

from timeshield._internal.fast_date import days_from_date
from timeshield.core.boundaries import (
    day_of_month,
    day_of_week_date,
    day_of_year,
    days_between,
    end_of_day,
    end_of_day_ms,
    end_of_hour,
    end_of_min,
    end_of_month,
    end_of_month_ms,
    end_of_period,
    end_of_week,
    end_of_year,
    end_of_year_ms,
    hour_of_day,
    last_sunday_month_day,
    last_sunday_of_month,
    min_of_day,
    month_of_year,
    next_day,
    num_days_in_month,
    num_days_in_month_ts,
    num_days_in_year_ts,
    sec_of_day,
    sec_of_day_hms,
    start_of_day,
    start_of_day_ms,
    start_of_hour,
    start_of_min,
    start_of_month,
    start_of_month_ms,
    start_of_next_day,
    start_of_period,
    start_of_prev_day,
    start_of_saturday,
    start_of_week,
    start_of_year,
    start_of_year_date,
    start_of_year_ms,
    weekday_of_ts,
    weekday_of_ts_ms,
    year_of,
    year_of_ms,
    years_since_epoch,
)
from timeshield.errors import InvalidDateTime
from timeshield.units.names import Weekday

LEAP_DAY_TS = 1709210096  # 2024-02-29T12:34:56Z


class TestDayBoundaries:
    """Tests for day, hour and minute boundaries."""

    def test_day(self) -> None:
        """Start and end of the UTC day."""
        assert start_of_day(LEAP_DAY_TS) == 1709164800
        assert end_of_day(LEAP_DAY_TS) == 1709251199
        assert start_of_day(-1) == -86400
        assert end_of_day(-1) == -1

    def test_day_ms(self) -> None:
        """Millisecond forms."""
        assert start_of_day_ms(LEAP_DAY_TS * 1000 + 5) == 1709164800000
        assert end_of_day_ms(0) == 86_399_999
        assert start_of_day_ms(-1) == -86_400_000

    def test_day_shifts(self) -> None:
        """Previous and next days."""
        assert start_of_next_day(LEAP_DAY_TS) == 1709251200
        assert start_of_prev_day(LEAP_DAY_TS, 2) == 1709164800 - 2 * 86400
        assert next_day(LEAP_DAY_TS) == LEAP_DAY_TS + 86400

    def test_hour_and_minute(self) -> None:
        """Hour and minute buckets."""
        assert start_of_hour(LEAP_DAY_TS) == 1709208000
        assert end_of_hour(LEAP_DAY_TS) == 1709211599
        assert start_of_min(LEAP_DAY_TS) == 1709210040
        assert end_of_min(LEAP_DAY_TS) == 1709210099
        assert start_of_hour(-1) == -3600

    def test_period(self) -> None:
        """Epoch-aligned buckets of arbitrary length."""
        assert start_of_period(900, 1000) == 900
        assert end_of_period(900, 1000) == 1799
        assert start_of_period(900, -1) == -900
        with pytest.raises(ValueError, match="divisor must be positive"):
            start_of_period(0, 10)


class TestWeekBoundaries:
    """Tests for weekday projection and Sunday-anchored weeks."""

    def test_weekday_anchor(self) -> None:
        """1970-01-01 is a Thursday."""
        assert weekday_of_ts(0) is Weekday.THURSDAY
        assert weekday_of_ts(86400) is Weekday.FRIDAY
        assert weekday_of_ts(-1) is Weekday.WEDNESDAY
        assert weekday_of_ts(LEAP_DAY_TS) is Weekday.THURSDAY
        assert weekday_of_ts_ms(-1) is Weekday.WEDNESDAY

    def test_day_of_week_date(self) -> None:
        """Civil-date weekday."""
        assert day_of_week_date(2024, 6, 3) is Weekday.MONDAY
        assert day_of_week_date(2000, 1, 1) is Weekday.SATURDAY

    def test_week(self) -> None:
        """Weeks run Sunday to Saturday."""
        start = start_of_week(LEAP_DAY_TS)
        assert start == 1708819200  # Sunday 2024-02-25
        assert weekday_of_ts(start) is Weekday.SUNDAY
        assert end_of_week(LEAP_DAY_TS) == start + 7 * 86400 - 1
        assert start_of_saturday(LEAP_DAY_TS) == start + 6 * 86400


class TestMonthAndYear:
    """Tests for month and year boundaries."""

    def test_month(self) -> None:
        """February 2024 has 29 days."""
        assert start_of_month(LEAP_DAY_TS) == 1706745600
        assert end_of_month(LEAP_DAY_TS) == 1709251199
        assert start_of_month(-1) == -86400 * 31
        assert start_of_month_ms(LEAP_DAY_TS * 1000) == 1706745600000
        assert end_of_month_ms(LEAP_DAY_TS * 1000) == 1709251199999

    def test_year(self) -> None:
        """2024 starts 1704067200 and ends 1735689599."""
        assert start_of_year(LEAP_DAY_TS) == 1704067200
        assert end_of_year(LEAP_DAY_TS) == 1735689599
        assert start_of_year_ms(LEAP_DAY_TS * 1000) == 1704067200000
        assert end_of_year_ms(LEAP_DAY_TS * 1000) == 1735689599999
        assert start_of_year_date(2024) == 1704067200

    def test_year_outside_fast_path(self) -> None:
        """Years before 1970 and from 2100 on."""
        assert start_of_year(-1) == -31536000
        assert start_of_year(4102444800) == 4102444800
        assert end_of_year(4102444800) == 4102444800 + 365 * 86400 - 1

    def test_year_fast_path_matches_kernel(self, rng: random.Random) -> None:
        """The 4-year block shortcut agrees with the date kernel."""
        for _ in range(20_000):
            ts = rng.randint(0, 4102444799)
            assert start_of_year(ts) == days_from_date(year_of(ts), 1, 1) * 86400

    def test_last_sunday(self) -> None:
        """Last Sunday of March and October 2024."""
        assert last_sunday_month_day(2024, 3) == 31
        assert last_sunday_month_day(2024, 10) == 27
        assert last_sunday_of_month(1709210096 + 86400 * 20) == days_from_date(2024, 3, 31) * 86400

    def test_lengths(self) -> None:
        """Month and year lengths."""
        assert num_days_in_month(2024, 2) == 29
        assert num_days_in_month(2023, 2) == 28
        assert num_days_in_month(2024, 13) == 0
        assert num_days_in_month_ts(LEAP_DAY_TS) == 29
        assert num_days_in_year_ts(LEAP_DAY_TS) == 366


class TestFields:
    """Tests for field projections."""

    def test_date_fields(self) -> None:
        """Year, month, day and day of year."""
        assert year_of(LEAP_DAY_TS) == 2024
        assert year_of(-1) == 1969
        assert year_of_ms(-1) == 1969
        assert years_since_epoch(LEAP_DAY_TS) == 54
        assert month_of_year(LEAP_DAY_TS) == 2
        assert day_of_month(LEAP_DAY_TS) == 29
        assert day_of_year(LEAP_DAY_TS) == 60
        assert day_of_year(0) == 1

    def test_time_fields(self) -> None:
        """Second, minute and hour of the day."""
        assert sec_of_day(LEAP_DAY_TS) == 45296
        assert sec_of_day(-1) == 86399
        assert min_of_day(LEAP_DAY_TS) == 754
        assert hour_of_day(LEAP_DAY_TS) == 12

    def test_sec_of_day_hms(self) -> None:
        """Explicit time of day with range checks."""
        assert sec_of_day_hms(12, 34, 56) == 45296
        with pytest.raises(InvalidDateTime, match="hour must be between 0 and 23"):
            sec_of_day_hms(24, 0, 0)

    def test_days_between(self) -> None:
        """Day boundaries crossed."""
        assert days_between(-1, 0) == 1
        assert days_between(0, 86399) == 0
        assert days_between(86400, 0) == -1


class TestBoundaryLaws:
    """Idempotence and duality of the boundaries."""

    STARTS = (
        start_of_min,
        start_of_hour,
        start_of_day,
        start_of_week,
        start_of_month,
        start_of_year,
    )

    def test_idempotence(self, rng: random.Random) -> None:
        """Taking a start twice changes nothing."""
        for _ in range(5_000):
            ts = rng.randint(-(1 << 40), 1 << 40)
            for start in self.STARTS:
                once = start(ts)
                assert once <= ts
                assert start(once) == once
            period = rng.randint(1, 1 << 20)
            assert start_of_period(period, start_of_period(period, ts)) == start_of_period(period, ts)

    def test_duality(self, rng: random.Random) -> None:
        """end_of_X is one second before the next start_of_X."""
        for _ in range(5_000):
            ts = rng.randint(-(1 << 40), 1 << 40)
            assert end_of_day(ts) == start_of_day(ts + 86400) - 1
            assert end_of_hour(ts) == start_of_hour(ts + 3600) - 1
            assert end_of_min(ts) == start_of_min(ts + 60) - 1
            assert end_of_month(ts) + 1 == start_of_month(end_of_month(ts) + 1)
            assert end_of_year(ts) + 1 == start_of_year(end_of_year(ts) + 1)
            assert year_of(end_of_year(ts) + 1) == year_of(ts) + 1
