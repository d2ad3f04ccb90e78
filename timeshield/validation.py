"""Validity predicates for calendar and clock values.

Every function here is a pure predicate: it returns a bool and never
raises. The raising counterparts used by constructors live in
timeshield._internal.validation.
"""

from __future__ import annotations

from timeshield._internal.calendar import days_in_month, is_leap_year, normalize_date_order
from timeshield._internal.constants import (
    MAX_UTC_OFFSET,
    MAX_YEAR,
    MIN_UTC_OFFSET,
    SEC_PER_DAY,
    SEC_PER_MIN,
)
from timeshield._internal.fast_date import days_from_date, year_from_days


def is_leap_year_ts(ts: int) -> bool:
    """Check whether the year containing a timestamp is a leap year.

    Examples:
        >>> is_leap_year_ts(951782400)  # 2000-02-29
        True
    """
    return is_leap_year(year_from_days(ts // SEC_PER_DAY))


def is_valid_time_zone(hour: int, minute: int) -> bool:
    """Check the hour and minute fields of a UTC offset."""
    return 0 <= hour <= 23 and 0 <= minute <= 59


def is_valid_time_zone_offset(offset: int) -> bool:
    """Check a UTC offset in seconds.

    The offset must lie in [-12h, +14h] and be a whole number of minutes.

    Examples:
        >>> is_valid_time_zone_offset(19800)
        True
        >>> is_valid_time_zone_offset(-13 * 3600)
        False
        >>> is_valid_time_zone_offset(30)
        False
    """
    return MIN_UTC_OFFSET <= offset <= MAX_UTC_OFFSET and offset % SEC_PER_MIN == 0


def is_valid_time(hour: int, minute: int, second: int, ms: int = 0) -> bool:
    """Check a time of day. Leap seconds (second == 60) are rejected."""
    return 0 <= hour <= 23 and 0 <= minute <= 59 and 0 <= second <= 59 and 0 <= ms <= 999


def is_valid_date(year: int, month: int, day: int) -> bool:
    """Check a civil date in the proleptic Gregorian calendar.

    A day-month-year triple passed in year-month-day order (day > 31 and
    year <= 31) is recognised and validated as if it had been swapped.

    Examples:
        >>> is_valid_date(2024, 2, 29)
        True
        >>> is_valid_date(2023, 2, 29)
        False
        >>> is_valid_date(29, 2, 2024)
        True
    """
    year, month, day = normalize_date_order(year, month, day)
    if year > MAX_YEAR:
        return False
    if month < 1 or month > 12:
        return False
    return 1 <= day <= days_in_month(year, month)


def is_valid_date_time(
    year: int,
    month: int,
    day: int,
    hour: int = 0,
    minute: int = 0,
    second: int = 0,
    ms: int = 0,
) -> bool:
    """Check both the date and the time-of-day parts."""
    return is_valid_date(year, month, day) and is_valid_time(hour, minute, second, ms)


def is_weekend_day(unix_day: int) -> bool:
    """Check whether a day count since 1970-01-01 is a Saturday or Sunday."""
    return (unix_day + 4) % 7 in (0, 6)


def is_weekend(ts: int) -> bool:
    """Check whether a timestamp falls on a Saturday or Sunday.

    Examples:
        >>> is_weekend(0)  # Thursday
        False
        >>> is_weekend(2 * 86400)  # Saturday
        True
        >>> is_weekend(-1)  # Wednesday 23:59:59
        False
    """
    return is_weekend_day(ts // SEC_PER_DAY)


def is_workday_day(unix_day: int) -> bool:
    """Check whether a day count since 1970-01-01 is Monday to Friday."""
    return not is_weekend_day(unix_day)


def is_workday(ts: int) -> bool:
    """Check whether a timestamp falls on Monday to Friday."""
    return not is_weekend(ts)


def is_workday_ms(ts_ms: int) -> bool:
    """Millisecond variant of is_workday."""
    return is_workday(ts_ms // 1000)


def is_workday_date(year: int, month: int, day: int) -> bool:
    """Check whether a valid civil date is Monday to Friday; False if invalid.

    Examples:
        >>> is_workday_date(2024, 6, 3)  # Monday
        True
        >>> is_workday_date(1, 6, 2024)  # Saturday, day-month-year order
        False
    """
    year, month, day = normalize_date_order(year, month, day)
    if not is_valid_date(year, month, day):
        return False
    return is_workday_day(days_from_date(year, month, day))


__all__ = [
    "is_leap_year",
    "is_leap_year_ts",
    "is_valid_time_zone",
    "is_valid_time_zone_offset",
    "is_valid_time",
    "is_valid_date",
    "is_valid_date_time",
    "is_weekend_day",
    "is_weekend",
    "is_workday_day",
    "is_workday",
    "is_workday_ms",
    "is_workday_date",
]
