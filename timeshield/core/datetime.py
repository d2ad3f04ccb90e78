"""Conversion between timestamps and broken-down date-times.

The canonical instant is ``ts``: signed seconds since
1970-01-01T00:00:00Z, proleptic Gregorian, no leap seconds. ``ts_ms`` is
the same in milliseconds and ``fts`` is a float in seconds.
"""

from __future__ import annotations

import math
from typing import NamedTuple

from timeshield._internal.calendar import normalize_date_order
from timeshield._internal.constants import (
    ERROR_TIMESTAMP,
    MS_PER_SEC,
    SEC_PER_DAY,
    SEC_PER_HOUR,
    SEC_PER_MIN,
)
from timeshield._internal.decorators import deprecated
from timeshield._internal.fast_date import date_from_days, days_from_date, split_unix_day
from timeshield._internal.floor_math import fits_int64
from timeshield._internal.validation import validate_date, validate_time
from timeshield.errors import InvalidDateTime


class DateTime(NamedTuple):
    """Broken-down UTC date and time with millisecond precision.

    Examples:
        >>> DateTime(2024, 2, 29, 12, 34, 56).to_timestamp()
        1709210096
        >>> to_date_time(0)
        DateTime(year=1970, month=1, day=1, hour=0, minute=0, second=0, ms=0)
    """

    year: int
    month: int
    day: int
    hour: int = 0
    minute: int = 0
    second: int = 0
    ms: int = 0

    def to_timestamp(self) -> int:
        """Seconds since the epoch; milliseconds are dropped."""
        return to_timestamp(self.year, self.month, self.day, self.hour, self.minute, self.second)

    def to_timestamp_ms(self) -> int:
        """Milliseconds since the epoch."""
        return to_timestamp_ms(
            self.year, self.month, self.day, self.hour, self.minute, self.second, self.ms
        )

    def to_ftimestamp(self) -> float:
        """Floating-point seconds since the epoch."""
        return self.to_timestamp() + self.ms / MS_PER_SEC


def _fields_from_seconds(ts: int, ms: int) -> DateTime:
    days, sec_of_day = split_unix_day(ts)
    date = date_from_days(days)
    hour, rem = divmod(sec_of_day, SEC_PER_HOUR)
    minute, second = divmod(rem, SEC_PER_MIN)
    return DateTime(date.year, date.month, date.day, hour, minute, second, ms)


def to_date_time(ts: int | float) -> DateTime:
    """Break a timestamp in seconds into UTC date-time fields.

    For float input the fractional part is rounded to the nearest
    millisecond, carrying into the seconds, so -0.5 is
    1969-12-31T23:59:59.500 and 0.9996 is 1970-01-01T00:00:01.000.

    Examples:
        >>> to_date_time(-1)
        DateTime(year=1969, month=12, day=31, hour=23, minute=59, second=59, ms=0)
        >>> to_date_time(1.25).ms
        250
    """
    if isinstance(ts, float):
        whole = math.floor(ts)
        carry, ms = divmod(round((ts - whole) * MS_PER_SEC), MS_PER_SEC)
        return _fields_from_seconds(whole + carry, ms)
    return _fields_from_seconds(ts, 0)


def to_date_time_ms(ts_ms: int) -> DateTime:
    """Break a timestamp in milliseconds into UTC date-time fields.

    Examples:
        >>> to_date_time_ms(-1)
        DateTime(year=1969, month=12, day=31, hour=23, minute=59, second=59, ms=999)
    """
    seconds, ms = divmod(ts_ms, MS_PER_SEC)
    return _fields_from_seconds(seconds, ms)


def to_timestamp(
    year: int,
    month: int,
    day: int,
    hour: int = 0,
    minute: int = 0,
    second: int = 0,
) -> int:
    """Build a timestamp in seconds from UTC date-time fields.

    Arguments given as (day, month, year) with day > 31 and year <= 31
    are recognised and swapped.

    Raises:
        InvalidDateTime: If the fields do not form a valid date-time.

    Examples:
        >>> to_timestamp(1970, 1, 1)
        0
        >>> to_timestamp(2024, 2, 29, 12, 34, 56)
        1709210096
        >>> to_timestamp(29, 2, 2024, 12, 34, 56)
        1709210096
    """
    year, month, day = normalize_date_order(year, month, day)
    validate_date(year, month, day)
    validate_time(hour, minute, second)
    return (
        days_from_date(year, month, day) * SEC_PER_DAY
        + hour * SEC_PER_HOUR
        + minute * SEC_PER_MIN
        + second
    )


def to_timestamp_ms(
    year: int,
    month: int,
    day: int,
    hour: int = 0,
    minute: int = 0,
    second: int = 0,
    ms: int = 0,
) -> int:
    """Build a timestamp in milliseconds from UTC date-time fields.

    Millisecond values outside 0-999 carry into the seconds with floor
    semantics. Results that do not fit a signed 64-bit integer are
    reported as ERROR_TIMESTAMP.

    Raises:
        InvalidDateTime: If the date or the hour/minute/second fields are invalid.
    """
    seconds = to_timestamp(year, month, day, hour, minute, second)
    carry, ms = divmod(ms, MS_PER_SEC)
    result = (seconds + carry) * MS_PER_SEC + ms
    if not fits_int64(result):
        return ERROR_TIMESTAMP
    return result


def to_ftimestamp(
    year: int,
    month: int,
    day: int,
    hour: int = 0,
    minute: int = 0,
    second: int = 0,
    ms: int = 0,
) -> float:
    """Build a floating-point timestamp in seconds from UTC date-time fields."""
    if ms < 0 or ms >= MS_PER_SEC:
        raise InvalidDateTime(f"ms must be between 0 and 999, got {ms}")
    return to_timestamp(year, month, day, hour, minute, second) + ms / MS_PER_SEC


@deprecated("use to_timestamp() instead")
def get_ts(
    year: int,
    month: int,
    day: int,
    hour: int = 0,
    minute: int = 0,
    second: int = 0,
) -> int:
    """Deprecated alias of to_timestamp."""
    return to_timestamp(year, month, day, hour, minute, second)


__all__ = [
    "DateTime",
    "to_date_time",
    "to_date_time_ms",
    "to_timestamp",
    "to_timestamp_ms",
    "to_ftimestamp",
    "get_ts",
]
