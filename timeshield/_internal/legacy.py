"""Block-peeling calendar conversion kept as a cross-check oracle.

These functions walk 400-, 100-, 4- and 1-year blocks backwards from
MAX_YEAR (a multiple of 400, so block boundaries line up with 2000).
They are slow and only valid for instants up to MAX_TIMESTAMP; the fast
kernel in timeshield._internal.fast_date is what the library uses.

This module is not part of the public API.
"""

from __future__ import annotations

from timeshield._internal.calendar import days_before_month, doy_to_month_day, is_leap_year
from timeshield._internal.constants import (
    BIAS_2000,
    BIAS_292277022000,
    MAX_YEAR,
    SEC_PER_100_YEARS,
    SEC_PER_400_YEARS,
    SEC_PER_4_YEARS,
    SEC_PER_DAY,
    SEC_PER_HOUR,
    SEC_PER_LEAP_YEAR,
    SEC_PER_MIN,
    SEC_PER_YEAR,
)


def legacy_to_date_time(ts: int) -> tuple[int, int, int, int, int, int]:
    """Convert a timestamp to (year, month, day, hour, minute, second).

    Only valid for ts <= MAX_TIMESTAMP.
    """
    y = MAX_YEAR
    secs = BIAS_292277022000 + BIAS_2000 - ts

    n_400_years, secs = divmod(secs, SEC_PER_400_YEARS)
    y -= n_400_years * 400
    # The earliest century of a 400-year cycle and the earliest year of
    # a 4-year cycle are one day longer than the blocks peeled here.
    n_100_years = min(secs // SEC_PER_100_YEARS, 3)
    secs -= n_100_years * SEC_PER_100_YEARS
    y -= n_100_years * 100
    n_4_years, secs = divmod(secs, SEC_PER_4_YEARS)
    y -= n_4_years * 4
    n_1_years = min(secs // SEC_PER_YEAR, 3)
    secs -= n_1_years * SEC_PER_YEAR
    y -= n_1_years

    if secs == 0:
        return (y, 1, 1, 0, 0, 0)

    year = y - 1
    secs = (SEC_PER_LEAP_YEAR if is_leap_year(year) else SEC_PER_YEAR) - secs
    month, day = doy_to_month_day(year, secs // SEC_PER_DAY)

    day_secs = secs % SEC_PER_DAY
    hour = day_secs // SEC_PER_HOUR
    minute = (day_secs - hour * SEC_PER_HOUR) // SEC_PER_MIN
    second = day_secs - hour * SEC_PER_HOUR - minute * SEC_PER_MIN
    return (year, month, day, hour, minute, second)


def legacy_to_timestamp(
    year: int,
    month: int,
    day: int,
    hour: int = 0,
    minute: int = 0,
    second: int = 0,
) -> int:
    """Convert civil fields to a timestamp without validation."""
    years = MAX_YEAR - year
    n_400_years, years = divmod(years, 400)
    n_100_years, years = divmod(years, 100)
    n_4_years, years = divmod(years, 4)
    secs = (
        n_400_years * SEC_PER_400_YEARS
        + n_100_years * SEC_PER_100_YEARS
        + n_4_years * SEC_PER_4_YEARS
        + years * SEC_PER_YEAR
    )
    secs = BIAS_292277022000 - secs + BIAS_2000
    secs += (days_before_month(year, month) + day - 1) * SEC_PER_DAY
    return secs + hour * SEC_PER_HOUR + minute * SEC_PER_MIN + second


def legacy_days_from_date(year: int, month: int, day: int) -> int:
    """Day count since 1970-01-01 using the (153 * m + 2) // 5 month formula."""
    y = year - 1 if month <= 2 else year
    era = y // 400
    yoe = y - era * 400
    m = month - 3 if month > 2 else month + 9
    doy = (153 * m + 2) // 5 + day - 1
    doe = yoe * 365 + yoe // 4 - yoe // 100 + doy
    return era * 146097 + doe - 719468


__all__ = [
    "legacy_to_date_time",
    "legacy_to_timestamp",
    "legacy_days_from_date",
]
