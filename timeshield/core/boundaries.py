"""Boundary algebra over Unix timestamps.

This module provides start/end of minute, hour, day, week, month, year
and arbitrary periods, together with the field projections (weekday,
day of year, month, day of month) that are derived from the date kernel.

All arithmetic uses floor division, so instants before 1970 bucket the
same way as instants after it: the day containing -1 starts at -86400.
Weeks are Sunday-anchored.
"""

from __future__ import annotations

from timeshield._internal.calendar import days_in_month, days_in_year, is_leap_year
from timeshield._internal.constants import (
    DAYS_PER_WEEK,
    MS_PER_DAY,
    MS_PER_HOUR,
    MS_PER_MIN,
    MS_PER_SEC,
    SEC_PER_DAY,
    SEC_PER_HOUR,
    SEC_PER_MIN,
    SEC_PER_YEAR,
    TS_2100,
    UNIX_EPOCH_YEAR,
)
from timeshield._internal.fast_date import date_from_days, days_from_date, year_from_days
from timeshield._internal.floor_math import floor_div, floor_mod
from timeshield._internal.validation import validate_range
from timeshield.units.names import Weekday

# 1968-01-01 starts the 4-year cycle that covers 1970..2099 without a gap.
_DAYS_1968_TO_1970 = 731
_DAYS_PER_4_YEARS = 1461


# --- Day ---------------------------------------------------------------


def start_of_day(ts: int) -> int:
    """First second of the UTC day containing ts.

    Examples:
        >>> start_of_day(1709210096)
        1709164800
        >>> start_of_day(-1)
        -86400
    """
    return ts - floor_mod(ts, SEC_PER_DAY)


def end_of_day(ts: int) -> int:
    """Last second of the UTC day containing ts."""
    return start_of_day(ts) + SEC_PER_DAY - 1


def start_of_day_ms(ts_ms: int) -> int:
    return ts_ms - floor_mod(ts_ms, MS_PER_DAY)


def end_of_day_ms(ts_ms: int) -> int:
    return start_of_day_ms(ts_ms) + MS_PER_DAY - 1


def start_of_prev_day(ts: int, days: int = 1) -> int:
    """Start of the day ``days`` days before the one containing ts."""
    return start_of_day(ts) - days * SEC_PER_DAY


def start_of_next_day(ts: int, days: int = 1) -> int:
    """Start of the day ``days`` days after the one containing ts."""
    return start_of_day(ts) + days * SEC_PER_DAY


def start_of_next_day_ms(ts_ms: int, days: int = 1) -> int:
    return start_of_day_ms(ts_ms) + days * MS_PER_DAY


def next_day(ts: int, days: int = 1) -> int:
    """Shift ts by whole days, keeping the time of day."""
    return ts + days * SEC_PER_DAY


def next_day_ms(ts_ms: int, days: int = 1) -> int:
    return ts_ms + days * MS_PER_DAY


# --- Hour, minute, period ---------------------------------------------


def start_of_hour(ts: int) -> int:
    return ts - floor_mod(ts, SEC_PER_HOUR)


def end_of_hour(ts: int) -> int:
    return start_of_hour(ts) + SEC_PER_HOUR - 1


def start_of_hour_ms(ts_ms: int) -> int:
    return ts_ms - floor_mod(ts_ms, MS_PER_HOUR)


def end_of_hour_ms(ts_ms: int) -> int:
    return start_of_hour_ms(ts_ms) + MS_PER_HOUR - 1


def start_of_min(ts: int) -> int:
    return ts - floor_mod(ts, SEC_PER_MIN)


def end_of_min(ts: int) -> int:
    return start_of_min(ts) + SEC_PER_MIN - 1


def start_of_min_ms(ts_ms: int) -> int:
    return ts_ms - floor_mod(ts_ms, MS_PER_MIN)


def end_of_min_ms(ts_ms: int) -> int:
    return start_of_min_ms(ts_ms) + MS_PER_MIN - 1


def start_of_period(period: int, ts: int) -> int:
    """Start of the ``period``-second bucket containing ts.

    Buckets are aligned to the epoch.

    Raises:
        ValueError: If period is not positive.

    Examples:
        >>> start_of_period(900, 1000)
        900
        >>> start_of_period(900, -1)
        -900
    """
    return ts - floor_mod(ts, period)


def end_of_period(period: int, ts: int) -> int:
    """Last second of the ``period``-second bucket containing ts."""
    return start_of_period(period, ts) + period - 1


# --- Week --------------------------------------------------------------


def weekday_of_ts(ts: int) -> Weekday:
    """Day of the week of a timestamp, Sunday == 0.

    Examples:
        >>> weekday_of_ts(0)
        <Weekday.THURSDAY: 4>
        >>> weekday_of_ts(-1)
        <Weekday.WEDNESDAY: 3>
    """
    return Weekday(floor_mod(floor_div(ts, SEC_PER_DAY) + 4, DAYS_PER_WEEK))


def weekday_of_ts_ms(ts_ms: int) -> Weekday:
    return weekday_of_ts(floor_div(ts_ms, MS_PER_SEC))


def day_of_week_date(year: int, month: int, day: int) -> Weekday:
    """Day of the week of a civil date, Sunday == 0."""
    return Weekday(floor_mod(days_from_date(year, month, day) + 4, DAYS_PER_WEEK))


def start_of_week(ts: int) -> int:
    """Start of the Sunday that opens the week containing ts."""
    return start_of_day(ts) - weekday_of_ts(ts) * SEC_PER_DAY


def end_of_week(ts: int) -> int:
    """Last second of the Saturday that closes the week containing ts."""
    return start_of_week(ts) + DAYS_PER_WEEK * SEC_PER_DAY - 1


def start_of_saturday(ts: int) -> int:
    """Start of the Saturday of the week containing ts."""
    return start_of_day(ts) + (Weekday.SATURDAY - weekday_of_ts(ts)) * SEC_PER_DAY


# --- Fields ------------------------------------------------------------


def days_since_epoch(ts: int) -> int:
    """Whole days since 1970-01-01, flooring for negative instants."""
    return floor_div(ts, SEC_PER_DAY)


def unix_day_to_ts(unix_day: int) -> int:
    return unix_day * SEC_PER_DAY


def days_between(start: int, end: int) -> int:
    """Signed number of day boundaries crossed going from start to end."""
    return days_since_epoch(end) - days_since_epoch(start)


def year_of(ts: int) -> int:
    """Calendar year containing ts.

    Examples:
        >>> year_of(0)
        1970
        >>> year_of(-1)
        1969
    """
    return year_from_days(floor_div(ts, SEC_PER_DAY))


def year_of_ms(ts_ms: int) -> int:
    return year_of(floor_div(ts_ms, MS_PER_SEC))


def years_since_epoch(ts: int) -> int:
    return year_of(ts) - UNIX_EPOCH_YEAR


def month_of_year(ts: int) -> int:
    """Month (1-12) containing ts."""
    return date_from_days(floor_div(ts, SEC_PER_DAY)).month


def day_of_month(ts: int) -> int:
    """Day of the month (1-31) containing ts."""
    return date_from_days(floor_div(ts, SEC_PER_DAY)).day


def day_of_year(ts: int) -> int:
    """Day of the year, January 1 == 1.

    Examples:
        >>> day_of_year(1709210096)  # 2024-02-29
        60
    """
    days = floor_div(ts, SEC_PER_DAY)
    return days - days_from_date(year_from_days(days), 1, 1) + 1


def num_days_in_month(year: int, month: int) -> int:
    """Length of a month; 0 for a month outside 1-12."""
    return days_in_month(year, month)


def num_days_in_month_ts(ts: int) -> int:
    date = date_from_days(floor_div(ts, SEC_PER_DAY))
    return days_in_month(date.year, date.month)


def num_days_in_year(year: int) -> int:
    return days_in_year(year)


def num_days_in_year_ts(ts: int) -> int:
    return days_in_year(year_of(ts))


# --- Month -------------------------------------------------------------


def start_of_month(ts: int) -> int:
    """First second of the month containing ts."""
    date = date_from_days(floor_div(ts, SEC_PER_DAY))
    return days_from_date(date.year, date.month, 1) * SEC_PER_DAY


def end_of_month(ts: int) -> int:
    """Last second of the month containing ts."""
    date = date_from_days(floor_div(ts, SEC_PER_DAY))
    last_day = days_from_date(date.year, date.month, days_in_month(date.year, date.month))
    return (last_day + 1) * SEC_PER_DAY - 1


def start_of_month_ms(ts_ms: int) -> int:
    return start_of_month(floor_div(ts_ms, MS_PER_SEC)) * MS_PER_SEC


def end_of_month_ms(ts_ms: int) -> int:
    return (end_of_month(floor_div(ts_ms, MS_PER_SEC)) + 1) * MS_PER_SEC - 1


def last_sunday_month_day(year: int, month: int) -> int:
    """Day of the month of the last Sunday.

    Examples:
        >>> last_sunday_month_day(2024, 3)
        31
        >>> last_sunday_month_day(2024, 10)
        27
    """
    last = days_in_month(year, month)
    return last - day_of_week_date(year, month, last)


def last_sunday_of_month(ts: int) -> int:
    """Start of the last Sunday of the month containing ts."""
    last_day_start = start_of_day(end_of_month(ts))
    return last_day_start - weekday_of_ts(last_day_start) * SEC_PER_DAY


# --- Year --------------------------------------------------------------


def _start_of_year_fast(ts: int) -> int:
    # Every fourth year from 1968 to 2096 is leap, so 1461-day blocks
    # line up with the calendar until 2100.
    days = ts // SEC_PER_DAY + _DAYS_1968_TO_1970
    cycles, rem = divmod(days, _DAYS_PER_4_YEARS)
    if rem < 366:
        offset = 0
    else:
        offset = 366 + (rem - 366) // 365 * 365
    return (cycles * _DAYS_PER_4_YEARS + offset - _DAYS_1968_TO_1970) * SEC_PER_DAY


def start_of_year(ts: int) -> int:
    """First second of the calendar year containing ts.

    Examples:
        >>> start_of_year(1709210096)
        1704067200
        >>> start_of_year(4102444800)  # 2100-01-01, not a leap year
        4102444800
    """
    if 0 <= ts < TS_2100:
        return _start_of_year_fast(ts)
    return days_from_date(year_of(ts), 1, 1) * SEC_PER_DAY


def start_of_year_date(year: int) -> int:
    """First second of the given calendar year."""
    return days_from_date(year, 1, 1) * SEC_PER_DAY


def start_of_year_ms(ts_ms: int) -> int:
    return start_of_year(floor_div(ts_ms, MS_PER_SEC)) * MS_PER_SEC


def end_of_year(ts: int) -> int:
    """Last second of the calendar year containing ts.

    Examples:
        >>> end_of_year(1709210096)
        1735689599
    """
    start = start_of_year(ts)
    length = SEC_PER_YEAR + (SEC_PER_DAY if is_leap_year(year_of(start)) else 0)
    return start + length - 1


def end_of_year_ms(ts_ms: int) -> int:
    return (end_of_year(floor_div(ts_ms, MS_PER_SEC)) + 1) * MS_PER_SEC - 1


# --- Time of day -------------------------------------------------------


def sec_of_day(ts: int) -> int:
    """Seconds elapsed since the start of the UTC day, 0-86399."""
    return floor_mod(ts, SEC_PER_DAY)


def sec_of_day_ms(ts_ms: int) -> int:
    return sec_of_day(floor_div(ts_ms, MS_PER_SEC))


@validate_range(hour=(0, 23), minute=(0, 59), second=(0, 59))
def sec_of_day_hms(hour: int, minute: int, second: int = 0) -> int:
    """Seconds since midnight for an explicit time of day.

    Raises:
        InvalidDateTime: If a field is out of range.
    """
    return hour * SEC_PER_HOUR + minute * SEC_PER_MIN + second


def sec_of_hour(ts: int) -> int:
    return floor_mod(ts, SEC_PER_HOUR)


def sec_of_min(ts: int) -> int:
    return floor_mod(ts, SEC_PER_MIN)


def min_of_day(ts: int) -> int:
    return sec_of_day(ts) // SEC_PER_MIN


def min_of_hour(ts: int) -> int:
    return sec_of_hour(ts) // SEC_PER_MIN


def hour_of_day(ts: int) -> int:
    return sec_of_day(ts) // SEC_PER_HOUR


__all__ = [
    # Day
    "start_of_day",
    "end_of_day",
    "start_of_day_ms",
    "end_of_day_ms",
    "start_of_prev_day",
    "start_of_next_day",
    "start_of_next_day_ms",
    "next_day",
    "next_day_ms",
    # Hour, minute, period
    "start_of_hour",
    "end_of_hour",
    "start_of_hour_ms",
    "end_of_hour_ms",
    "start_of_min",
    "end_of_min",
    "start_of_min_ms",
    "end_of_min_ms",
    "start_of_period",
    "end_of_period",
    # Week
    "weekday_of_ts",
    "weekday_of_ts_ms",
    "day_of_week_date",
    "start_of_week",
    "end_of_week",
    "start_of_saturday",
    # Fields
    "days_since_epoch",
    "unix_day_to_ts",
    "days_between",
    "year_of",
    "year_of_ms",
    "years_since_epoch",
    "month_of_year",
    "day_of_month",
    "day_of_year",
    "num_days_in_month",
    "num_days_in_month_ts",
    "num_days_in_year",
    "num_days_in_year_ts",
    # Month
    "start_of_month",
    "end_of_month",
    "start_of_month_ms",
    "end_of_month_ms",
    "last_sunday_month_day",
    "last_sunday_of_month",
    # Year
    "start_of_year",
    "start_of_year_date",
    "start_of_year_ms",
    "end_of_year",
    "end_of_year_ms",
    # Time of day
    "sec_of_day",
    "sec_of_day_ms",
    "sec_of_day_hms",
    "sec_of_hour",
    "sec_of_min",
    "min_of_day",
    "min_of_hour",
    "hour_of_day",
]
