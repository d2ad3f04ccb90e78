"""Fast conversion between day counts and civil dates.

Day counts are signed days since 1970-01-01 in the proleptic Gregorian
calendar. ``date_from_days`` uses a branch-free multiply-by-reciprocal
sequence (after Ben Joffe) over the day range that covers every signed
64-bit second timestamp, and the textbook era/year-of-era formula
(after Howard Hinnant) outside it. ``days_from_date`` is exact for any
integer year.

The reciprocal sequence is written against unsigned 64-bit registers,
so every intermediate value is reduced modulo 2**64 explicitly.

This module is not part of the public API.
"""

from __future__ import annotations

from typing import NamedTuple

from timeshield._internal.constants import DAYS_PER_400_YEARS, SEC_PER_DAY
from timeshield._internal.floor_math import mul_hi_u64, to_signed64, wrap_u64

# Day of year for the first of each month, counting from March
MARCH_DOY: tuple[int, ...] = (0, 31, 61, 92, 122, 153, 184, 214, 245, 275, 306, 337)

# Days from 0000-03-01 to 1970-01-01
_EPOCH_SHIFT = 719_468

_ERAS = 4_726_498_270
_D_SHIFT = DAYS_PER_400_YEARS * _ERAS - 719_469
_Y_SHIFT = 400 * _ERAS - 1
_C1 = 505_054_698_555_331
_C2 = 50_504_432_782_230_121
_C3 = 8_619_973_866_219_416
_YPT_SCALE = 782_432
_YPT_BUMP = 126_464
_SHIFT_JAN_FEB = 191_360
_SHIFT_OTHER = 977_792

# Every signed 64-bit second count falls within +/- 2**47 days
FAST_DAYS_LIMIT: int = 1 << 47


class DaySplit(NamedTuple):
    """A timestamp split into whole days and the second of that day."""

    days: int
    sec_of_day: int


class CivilDate(NamedTuple):
    """A proleptic Gregorian calendar date."""

    year: int
    month: int
    day: int


def split_unix_day(ts: int) -> DaySplit:
    """Split seconds since the epoch into (days, sec_of_day).

    sec_of_day is always in [0, 86399], including for negative input.

    Examples:
        >>> split_unix_day(-1)
        DaySplit(days=-1, sec_of_day=86399)
        >>> split_unix_day(86400)
        DaySplit(days=1, sec_of_day=0)
    """
    days, sec_of_day = divmod(ts, SEC_PER_DAY)
    return DaySplit(days, sec_of_day)


def days_from_date(year: int, month: int, day: int) -> int:
    """Return the signed number of days from 1970-01-01 to a civil date.

    Months are shifted so that March is month zero; January and February
    then belong to the previous year, which puts the leap day last.

    Args:
        year: Any integer year (astronomical numbering, 0 is 1 BCE).
        month: Month 1-12.
        day: Day of month; not range checked.

    Returns:
        Days since the Unix epoch.

    Examples:
        >>> days_from_date(1970, 1, 1)
        0
        >>> days_from_date(2000, 2, 29)
        11016
        >>> days_from_date(1969, 12, 31)
        -1
    """
    y = year - 1 if month <= 2 else year
    m = month - 3
    if m < 0:
        m += 12
    era = y // 400
    yoe = y - era * 400
    doy = MARCH_DOY[m] + day - 1
    doe = yoe * 365 + yoe // 4 - yoe // 100 + doy
    return era * DAYS_PER_400_YEARS + doe - _EPOCH_SHIFT


def _fast_year_parts(days: int) -> tuple[int, int, bool]:
    rev = wrap_u64(_D_SHIFT - days)
    cen = mul_hi_u64(rev, _C1)
    jul = wrap_u64(rev + cen - cen // 4)
    num_hi = mul_hi_u64(jul, _C2)
    num_low = wrap_u64(jul * _C2)
    yrs = wrap_u64(_Y_SHIFT - num_hi)
    ypt = mul_hi_u64(_YPT_SCALE, num_low)
    return yrs, ypt, ypt < _YPT_BUMP


def _fast_date_from_days(days: int) -> CivilDate:
    yrs, ypt, bump = _fast_year_parts(days)
    shift = _SHIFT_JAN_FEB if bump else _SHIFT_OTHER
    n = wrap_u64((yrs & 3) * 512 + shift - ypt)
    d = mul_hi_u64(n & 0xFFFF, _C3)
    return CivilDate(to_signed64(yrs + (1 if bump else 0)), n >> 16, d + 1)


def _textbook_date_from_days(days: int) -> CivilDate:
    z = days + _EPOCH_SHIFT
    era = z // DAYS_PER_400_YEARS
    doe = z - era * DAYS_PER_400_YEARS
    yoe = (doe - doe // 1460 + doe // 36524 - doe // 146096) // 365
    doy = doe - (365 * yoe + yoe // 4 - yoe // 100)
    mp = (5 * doy + 2) // 153
    day = doy - (153 * mp + 2) // 5 + 1
    month = mp + 3 if mp < 10 else mp - 9
    year = yoe + era * 400 + (1 if month <= 2 else 0)
    return CivilDate(year, month, day)


def date_from_days(days: int) -> CivilDate:
    """Return the civil date for a signed day count since 1970-01-01.

    Examples:
        >>> date_from_days(0)
        CivilDate(year=1970, month=1, day=1)
        >>> date_from_days(11016)
        CivilDate(year=2000, month=2, day=29)
        >>> date_from_days(-1)
        CivilDate(year=1969, month=12, day=31)
    """
    if -FAST_DAYS_LIMIT <= days <= FAST_DAYS_LIMIT:
        return _fast_date_from_days(days)
    return _textbook_date_from_days(days)


def year_from_days(days: int) -> int:
    """Return only the year of date_from_days(days).

    Examples:
        >>> year_from_days(-1)
        1969
    """
    if -FAST_DAYS_LIMIT <= days <= FAST_DAYS_LIMIT:
        yrs, _, bump = _fast_year_parts(days)
        return to_signed64(yrs + (1 if bump else 0))
    return _textbook_date_from_days(days).year


__all__ = [
    "MARCH_DOY",
    "FAST_DAYS_LIMIT",
    "DaySplit",
    "CivilDate",
    "split_unix_day",
    "days_from_date",
    "date_from_days",
    "year_from_days",
]
