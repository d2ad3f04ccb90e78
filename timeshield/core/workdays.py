"""Workday layer.

A workday is any date that is neither a Saturday nor a Sunday. Public
holidays are not modelled. Every locator and predicate here is derived
by walking the days of the month and counting workdays.

Each predicate comes in three forms: (year, month, day), a timestamp in
seconds (``_ts``) and a timestamp in milliseconds (``_ms``).
"""

from __future__ import annotations

import functools

from timeshield._internal.calendar import days_in_month
from timeshield._internal.constants import ERROR_TIMESTAMP, MS_PER_DAY, MS_PER_SEC, SEC_PER_DAY
from timeshield._internal.fast_date import date_from_days, days_from_date
from timeshield._internal.floor_math import floor_div
from timeshield.validation import is_workday_date, is_workday_day


@functools.lru_cache(maxsize=128)
def _workday_days(year: int, month: int) -> tuple[int, ...]:
    """Days of the month that are workdays, ascending."""
    first = days_from_date(year, month, 1) if 1 <= month <= 12 else 0
    return tuple(
        day
        for day in range(1, days_in_month(year, month) + 1)
        if is_workday_day(first + day - 1)
    )


def _ymd(ts: int) -> tuple[int, int, int]:
    date = date_from_days(floor_div(ts, SEC_PER_DAY))
    return date.year, date.month, date.day


def _ymd_ms(ts_ms: int) -> tuple[int, int, int]:
    return _ymd(floor_div(ts_ms, MS_PER_SEC))


# --- Locators ----------------------------------------------------------


def first_workday_day(year: int, month: int) -> int:
    """Day of the month of the first workday; 0 for an invalid month.

    Examples:
        >>> first_workday_day(2024, 6)
        3
    """
    days = _workday_days(year, month)
    return days[0] if days else 0


def last_workday_day(year: int, month: int) -> int:
    """Day of the month of the last workday; 0 for an invalid month.

    Examples:
        >>> last_workday_day(2024, 6)
        28
    """
    days = _workday_days(year, month)
    return days[-1] if days else 0


def count_workdays_in_month(year: int, month: int) -> int:
    """Number of workdays in a month.

    Examples:
        >>> count_workdays_in_month(2024, 6)
        20
    """
    return len(_workday_days(year, month))


def workday_index_in_month(year: int, month: int, day: int) -> int:
    """1-based position of a workday within its month; 0 for a weekend day.

    Examples:
        >>> workday_index_in_month(2024, 6, 3)
        1
        >>> workday_index_in_month(2024, 6, 1)  # Saturday
        0
    """
    if not is_workday_date(year, month, day):
        return 0
    index = 0
    for current in _workday_days(year, month):
        index += 1
        if current == day:
            return index
    return 0


# --- Predicates --------------------------------------------------------


def is_first_workday_of_month(year: int, month: int, day: int) -> bool:
    return is_workday_date(year, month, day) and first_workday_day(year, month) == day


def is_first_workday_of_month_ts(ts: int) -> bool:
    return is_first_workday_of_month(*_ymd(ts))


def is_first_workday_of_month_ms(ts_ms: int) -> bool:
    return is_first_workday_of_month(*_ymd_ms(ts_ms))


def is_last_workday_of_month(year: int, month: int, day: int) -> bool:
    return is_workday_date(year, month, day) and last_workday_day(year, month) == day


def is_last_workday_of_month_ts(ts: int) -> bool:
    return is_last_workday_of_month(*_ymd(ts))


def is_last_workday_of_month_ms(ts_ms: int) -> bool:
    return is_last_workday_of_month(*_ymd_ms(ts_ms))


def is_within_first_workdays_of_month(year: int, month: int, day: int, count: int) -> bool:
    """Check whether a date is one of the first ``count`` workdays of its month.

    A count that is not positive or exceeds the month's workdays matches
    nothing.
    """
    if count <= 0 or count > count_workdays_in_month(year, month):
        return False
    index = workday_index_in_month(year, month, day)
    return 0 < index <= count


def is_within_first_workdays_of_month_ts(ts: int, count: int) -> bool:
    return is_within_first_workdays_of_month(*_ymd(ts), count)


def is_within_first_workdays_of_month_ms(ts_ms: int, count: int) -> bool:
    return is_within_first_workdays_of_month(*_ymd_ms(ts_ms), count)


def is_within_last_workdays_of_month(year: int, month: int, day: int, count: int) -> bool:
    """Check whether a date is one of the last ``count`` workdays of its month."""
    total = count_workdays_in_month(year, month)
    if count <= 0 or count > total:
        return False
    index = workday_index_in_month(year, month, day)
    return index > 0 and index >= total - count + 1


def is_within_last_workdays_of_month_ts(ts: int, count: int) -> bool:
    return is_within_last_workdays_of_month(*_ymd(ts), count)


def is_within_last_workdays_of_month_ms(ts_ms: int, count: int) -> bool:
    return is_within_last_workdays_of_month(*_ymd_ms(ts_ms), count)


# --- Month start/end helpers ------------------------------------------
#
# These return ERROR_TIMESTAMP when the month has no workday, which only
# happens for a month number outside 1-12.


def start_of_first_workday_month(year: int, month: int) -> int:
    """Start of the first workday of a month, in seconds.

    Examples:
        >>> start_of_first_workday_month(2024, 6)  # 2024-06-03
        1717372800
    """
    day = first_workday_day(year, month)
    if day <= 0:
        return ERROR_TIMESTAMP
    return days_from_date(year, month, day) * SEC_PER_DAY


def start_of_first_workday_month_ms(year: int, month: int) -> int:
    start = start_of_first_workday_month(year, month)
    if start == ERROR_TIMESTAMP:
        return ERROR_TIMESTAMP
    return start * MS_PER_SEC


def end_of_first_workday_month(year: int, month: int) -> int:
    start = start_of_first_workday_month(year, month)
    if start == ERROR_TIMESTAMP:
        return ERROR_TIMESTAMP
    return start + SEC_PER_DAY - 1


def end_of_first_workday_month_ms(year: int, month: int) -> int:
    start = start_of_first_workday_month_ms(year, month)
    if start == ERROR_TIMESTAMP:
        return ERROR_TIMESTAMP
    return start + MS_PER_DAY - 1


def start_of_last_workday_month(year: int, month: int) -> int:
    """Start of the last workday of a month, in seconds."""
    day = last_workday_day(year, month)
    if day <= 0:
        return ERROR_TIMESTAMP
    return days_from_date(year, month, day) * SEC_PER_DAY


def start_of_last_workday_month_ms(year: int, month: int) -> int:
    start = start_of_last_workday_month(year, month)
    if start == ERROR_TIMESTAMP:
        return ERROR_TIMESTAMP
    return start * MS_PER_SEC


def end_of_last_workday_month(year: int, month: int) -> int:
    start = start_of_last_workday_month(year, month)
    if start == ERROR_TIMESTAMP:
        return ERROR_TIMESTAMP
    return start + SEC_PER_DAY - 1


def end_of_last_workday_month_ms(year: int, month: int) -> int:
    start = start_of_last_workday_month_ms(year, month)
    if start == ERROR_TIMESTAMP:
        return ERROR_TIMESTAMP
    return start + MS_PER_DAY - 1


def start_of_first_workday_month_ts(ts: int) -> int:
    """start_of_first_workday_month for the month containing ts."""
    year, month, _ = _ymd(ts)
    return start_of_first_workday_month(year, month)


def end_of_first_workday_month_ts(ts: int) -> int:
    year, month, _ = _ymd(ts)
    return end_of_first_workday_month(year, month)


def start_of_last_workday_month_ts(ts: int) -> int:
    year, month, _ = _ymd(ts)
    return start_of_last_workday_month(year, month)


def end_of_last_workday_month_ts(ts: int) -> int:
    year, month, _ = _ymd(ts)
    return end_of_last_workday_month(year, month)


def start_of_first_workday_month_ts_ms(ts_ms: int) -> int:
    year, month, _ = _ymd_ms(ts_ms)
    return start_of_first_workday_month_ms(year, month)


def end_of_first_workday_month_ts_ms(ts_ms: int) -> int:
    year, month, _ = _ymd_ms(ts_ms)
    return end_of_first_workday_month_ms(year, month)


def start_of_last_workday_month_ts_ms(ts_ms: int) -> int:
    year, month, _ = _ymd_ms(ts_ms)
    return start_of_last_workday_month_ms(year, month)


def end_of_last_workday_month_ts_ms(ts_ms: int) -> int:
    year, month, _ = _ymd_ms(ts_ms)
    return end_of_last_workday_month_ms(year, month)


__all__ = [
    "first_workday_day",
    "last_workday_day",
    "count_workdays_in_month",
    "workday_index_in_month",
    "is_first_workday_of_month",
    "is_first_workday_of_month_ts",
    "is_first_workday_of_month_ms",
    "is_last_workday_of_month",
    "is_last_workday_of_month_ts",
    "is_last_workday_of_month_ms",
    "is_within_first_workdays_of_month",
    "is_within_first_workdays_of_month_ts",
    "is_within_first_workdays_of_month_ms",
    "is_within_last_workdays_of_month",
    "is_within_last_workdays_of_month_ts",
    "is_within_last_workdays_of_month_ms",
    "start_of_first_workday_month",
    "start_of_first_workday_month_ms",
    "end_of_first_workday_month",
    "end_of_first_workday_month_ms",
    "start_of_last_workday_month",
    "start_of_last_workday_month_ms",
    "end_of_last_workday_month",
    "end_of_last_workday_month_ms",
    "start_of_first_workday_month_ts",
    "end_of_first_workday_month_ts",
    "start_of_last_workday_month_ts",
    "end_of_last_workday_month_ts",
    "start_of_first_workday_month_ts_ms",
    "end_of_first_workday_month_ts_ms",
    "start_of_last_workday_month_ts_ms",
    "end_of_last_workday_month_ts_ms",
]
