"""Tests for timestamp <-> DateTime conversion."""

import random

import pytest

from timeshield._internal.constants import ERROR_TIMESTAMP
from timeshield.core.datetime import (
    DateTime,
    get_ts,
    to_date_time,
    to_date_time_ms,
    to_ftimestamp,
    to_timestamp,
    to_timestamp_ms,
)
from timeshield.errors import InvalidDateTime


class TestToTimestamp:
    """Tests for to_timestamp and its variants."""

    def test_epoch(self) -> None:
        """The epoch is timestamp 0."""
        assert to_timestamp(1970, 1, 1, 0, 0, 0) == 0
        assert to_timestamp(1970, 1, 1) == 0

    def test_leap_day(self) -> None:
        """2024-02-29T12:34:56Z."""
        assert to_timestamp(2024, 2, 29, 12, 34, 56) == 1709210096

    def test_before_epoch(self) -> None:
        """Instants before 1970 are negative."""
        assert to_timestamp(1969, 12, 31, 23, 59, 59) == -1
        assert to_timestamp(1900, 1, 1) == -2208988800

    def test_swapped_day_and_year(self) -> None:
        """A (day, month, year) call is recognised."""
        assert to_timestamp(29, 2, 2024, 12, 34, 56) == 1709210096
        assert to_timestamp(1, 1, 1900) == -2208988800

    def test_invalid_fields(self) -> None:
        """Invalid dates and times raise InvalidDateTime."""
        with pytest.raises(InvalidDateTime, match="day must be between 1 and 28"):
            to_timestamp(2023, 2, 29)
        with pytest.raises(InvalidDateTime, match="month must be between 1 and 12"):
            to_timestamp(2024, 13, 1)
        with pytest.raises(InvalidDateTime, match="hour must be between 0 and 23"):
            to_timestamp(2024, 1, 1, 24, 0, 0)
        with pytest.raises(InvalidDateTime, match="second must be between 0 and 59"):
            to_timestamp(2024, 1, 1, 0, 0, 60)

    def test_ms(self) -> None:
        """Milliseconds are added and carry with floor semantics."""
        assert to_timestamp_ms(1970, 1, 1, 0, 0, 1, 500) == 1500
        assert to_timestamp_ms(1970, 1, 1, 0, 0, 0, 1500) == 1500
        assert to_timestamp_ms(1970, 1, 1, 0, 0, 0, -1) == -1
        assert to_timestamp_ms(2024, 2, 29, 12, 34, 56, 789) == 1709210096789

    def test_ms_overflow(self) -> None:
        """Results outside the signed 64-bit range collapse to ERROR_TIMESTAMP."""
        assert to_timestamp_ms(300_000_000, 1, 1) == ERROR_TIMESTAMP

    def test_ftimestamp(self) -> None:
        """Float seconds with a millisecond fraction."""
        assert to_ftimestamp(1970, 1, 1, 0, 0, 1, 500) == 1.5
        with pytest.raises(InvalidDateTime, match="ms must be between 0 and 999"):
            to_ftimestamp(1970, 1, 1, 0, 0, 0, 1000)

    def test_get_ts_is_deprecated(self) -> None:
        """The old name still works but warns."""
        with pytest.warns(DeprecationWarning, match="use to_timestamp"):
            assert get_ts(2024, 2, 29, 12, 34, 56) == 1709210096


class TestToDateTime:
    """Tests for to_date_time and to_date_time_ms."""

    def test_epoch(self) -> None:
        """The epoch breaks down to 1970-01-01T00:00:00.000."""
        assert to_date_time(0) == (1970, 1, 1, 0, 0, 0, 0)
        assert to_date_time(0) == DateTime(1970, 1, 1)

    def test_leap_day(self) -> None:
        """2024-02-29T12:34:56Z."""
        dt = to_date_time(1709210096)
        assert (dt.year, dt.month, dt.day) == (2024, 2, 29)
        assert (dt.hour, dt.minute, dt.second, dt.ms) == (12, 34, 56, 0)

    def test_negative(self) -> None:
        """One second before the epoch."""
        assert to_date_time(-1) == DateTime(1969, 12, 31, 23, 59, 59, 0)
        assert to_date_time_ms(-1) == DateTime(1969, 12, 31, 23, 59, 59, 999)

    def test_float(self) -> None:
        """Float input rounds to the nearest millisecond."""
        assert to_date_time(1.25) == DateTime(1970, 1, 1, 0, 0, 1, 250)
        assert to_date_time(-0.5) == DateTime(1969, 12, 31, 23, 59, 59, 500)

    def test_float_fraction_not_representable(self) -> None:
        """Binary noise in the fraction does not lose a millisecond."""
        assert to_date_time(1709210096.123).ms == 123
        assert to_date_time(0.001).ms == 1
        assert to_date_time(-0.001) == DateTime(1969, 12, 31, 23, 59, 59, 999)

    def test_float_rounding_carries(self) -> None:
        """A fraction that rounds up to a full second carries."""
        assert to_date_time(0.9996) == DateTime(1970, 1, 1, 0, 0, 1, 0)
        assert to_date_time(86399.9999) == DateTime(1970, 1, 2, 0, 0, 0, 0)

    def test_ms(self) -> None:
        """Millisecond timestamps keep the millisecond field."""
        assert to_date_time_ms(1500) == DateTime(1970, 1, 1, 0, 0, 1, 500)
        assert to_date_time_ms(1709210096789).ms == 789

    def test_date_time_methods(self) -> None:
        """DateTime converts back in all three units."""
        dt = DateTime(1970, 1, 1, 0, 0, 1, 250)
        assert dt.to_timestamp() == 1
        assert dt.to_timestamp_ms() == 1250
        assert dt.to_ftimestamp() == 1.25


class TestRoundTrip:
    """ts -> DateTime -> ts is the identity."""

    def test_seconds(self, rng: random.Random) -> None:
        """Round trip over [-2**62, 2**62]."""
        for _ in range(20_000):
            ts = rng.randint(-(1 << 62), 1 << 62)
            assert to_date_time(ts).to_timestamp() == ts

    def test_milliseconds(self, rng: random.Random) -> None:
        """Round trip of millisecond timestamps."""
        for _ in range(20_000):
            ts_ms = rng.randint(-(1 << 62), 1 << 62)
            assert to_date_time_ms(ts_ms).to_timestamp_ms() == ts_ms

    def test_near_epoch(self) -> None:
        """Every hour across the epoch."""
        for ts in range(-86400 * 3, 86400 * 3, 3600):
            assert to_timestamp(*to_date_time(ts)[:6]) == ts
