"""Julian Date conversions.

This module provides conversions from Unix timestamps and Gregorian
calendar fields to the Julian Date (JD), the Modified Julian Date (MJD)
and the integer Julian Day Number (JDN).

The Unix epoch is JD 2440587.5 and MJD 40587.

Examples:
    >>> ts_to_jd(0)
    2440587.5
    >>> ts_to_mjd(0)
    40587.0
    >>> gregorian_to_jdn(1, 1, 1970)
    2440588
"""

from __future__ import annotations

import math

from timeshield._internal.constants import JD_UNIX_EPOCH, MJD_OFFSET, SEC_PER_DAY


def fts_to_jd(fts: float) -> float:
    """Julian Date of a floating-point timestamp in seconds."""
    return JD_UNIX_EPOCH + fts / SEC_PER_DAY


def ts_to_jd(ts: int) -> float:
    return fts_to_jd(float(ts))


def fts_to_mjd(fts: float) -> float:
    """Modified Julian Date of a floating-point timestamp in seconds."""
    return fts_to_jd(fts) - MJD_OFFSET


def ts_to_mjd(ts: int) -> float:
    return fts_to_mjd(float(ts))


def gregorian_to_jd(
    day: float,
    month: int,
    year: int,
    hour: int = 0,
    minute: int = 0,
    second: int = 0,
    millisecond: int = 0,
) -> float:
    """Julian Date of a Gregorian calendar instant.

    ``day`` may carry a fraction of a day; the time fields are added to it.

    Args:
        day: Day of the month, optionally fractional.
        month: Month, 1-12.
        year: Year.
        hour: Hour of the day.
        minute: Minute of the hour.
        second: Second of the minute.
        millisecond: Millisecond of the second.

    Returns:
        The Julian Date.

    Examples:
        >>> gregorian_to_jd(1, 1, 2000, 12)
        2451545.0
        >>> gregorian_to_jd(1.5, 1, 2000)
        2451545.0
    """
    day = (
        day
        + hour / 24.0
        + minute / (24.0 * 60.0)
        + (second + millisecond / 1000.0) / SEC_PER_DAY
    )
    if month <= 2:
        year -= 1
        month += 12
    a = math.floor(year / 100.0)
    b = 2.0 - a + math.floor(a / 4.0)
    return (
        math.floor(365.25 * (year + 4716.0))
        + math.floor(30.6000001 * (month + 1.0))
        + day
        + b
        - 1524.5
    )


def gregorian_to_jdn(day: int, month: int, year: int) -> int:
    """Julian Day Number (the JD at noon) of a Gregorian date.

    Examples:
        >>> gregorian_to_jdn(1, 1, 2000)
        2451545
    """
    a = (14 - month) // 12
    y = year + 4800 - a
    m = month + 12 * a - 3
    return day + (153 * m + 2) // 5 + 365 * y + y // 4 - y // 100 + y // 400 - 32045


__all__ = [
    "fts_to_jd",
    "ts_to_jd",
    "fts_to_mjd",
    "ts_to_mjd",
    "gregorian_to_jd",
    "gregorian_to_jdn",
]
