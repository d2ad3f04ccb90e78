"""Calendar utilities for TimeShield.

This module provides internal functions for leap-year logic and
month lengths in the proleptic Gregorian calendar.

This module is not part of the public API.
"""

from __future__ import annotations

from bisect import bisect_right

from timeshield._internal.constants import (
    DAYS_BEFORE_MONTH,
    DAYS_BEFORE_MONTH_LEAP,
    DAYS_IN_MONTH,
)


def is_leap_year(year: int) -> bool:
    """Gregorian leap-year rule for an astronomical year (0 is 1 BCE).

    Written as ``y % 4 == 0 and (y % 25 != 0 or y % 16 == 0)``. For a
    multiple of 4, divisibility by 25 means divisibility by 100, and a
    multiple of 100 is a multiple of 400 exactly when it is one of 16.

    Examples:
        >>> [is_leap_year(y) for y in (2000, 1900, 2024, 2023, 0, -4)]
        [True, False, True, False, True, True]
    """
    return (year & 3) == 0 and (year % 25 != 0 or (year & 15) == 0)


def days_in_month(year: int, month: int) -> int:
    """Return the number of days in a given month.

    Args:
        year: The year (needed for February in leap years).
        month: The month (1-12).

    Returns:
        Number of days in the month, or 0 if month is not in 1-12.
    """
    if month < 1 or month > 12:
        return 0
    if month == 2 and is_leap_year(year):
        return 29
    return DAYS_IN_MONTH[month]


def days_in_year(year: int) -> int:
    """Return 366 for leap years, 365 otherwise."""
    return 366 if is_leap_year(year) else 365


def days_before_month(year: int, month: int) -> int:
    """Return the number of days in the year before the first of the month."""
    table = DAYS_BEFORE_MONTH_LEAP if is_leap_year(year) else DAYS_BEFORE_MONTH
    return table[month - 1]


def doy_to_month_day(year: int, doy: int) -> tuple[int, int]:
    """Convert a zero-based day of year to (month, day).

    Args:
        year: The year (for leap year calculation).
        doy: Day of year, 0 for January 1.

    Returns:
        Tuple of (month, day).
    """
    table = DAYS_BEFORE_MONTH_LEAP if is_leap_year(year) else DAYS_BEFORE_MONTH
    month = bisect_right(table, doy)
    return month, doy - table[month - 1] + 1


def normalize_date_order(year: int, month: int, day: int) -> tuple[int, int, int]:
    """Undo a (day, month, year) triple passed in (year, month, day) order.

    A day field above 31 cannot be a day of the month, so when it comes
    with a year field of 31 or less the two are swapped.

    Examples:
        >>> normalize_date_order(29, 2, 2024)
        (2024, 2, 29)
        >>> normalize_date_order(2024, 2, 29)
        (2024, 2, 29)
    """
    if day > 31 and year <= 31:
        return day, month, year
    return year, month, day


__all__ = [
    "is_leap_year",
    "days_in_month",
    "days_in_year",
    "days_before_month",
    "doy_to_month_day",
    "normalize_date_order",
]
