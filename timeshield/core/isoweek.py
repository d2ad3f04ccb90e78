"""ISO 8601 week dates.

An ISO week starts on Monday and belongs to the year that contains its
Thursday, so 2021-01-03 (a Sunday) is day 7 of week 53 of 2020.
"""

from __future__ import annotations

import re
from typing import NamedTuple

from timeshield._internal.constants import DAYS_PER_WEEK, SEC_PER_DAY
from timeshield._internal.fast_date import date_from_days, days_from_date
from timeshield._internal.floor_math import floor_div, floor_mod
from timeshield.errors import InvalidDateTime, MalformedInput

_ISO_WEEK_PATTERN = re.compile(
    r"^([+-]?\d+)(?:-[Ww](\d{2})(?:-([1-7]))?|[Ww](\d{2})([1-7])?)$"
)


class IsoWeekDate(NamedTuple):
    """ISO week-based year, week number (1-53) and ISO weekday (Monday == 1)."""

    year: int
    week: int
    weekday: int


def _iso_weekday_of_day(unix_day: int) -> int:
    # 1970-01-01 was a Thursday, ISO weekday 4
    return floor_mod(unix_day + 3, DAYS_PER_WEEK) + 1


def _first_thursday(iso_year: int) -> int:
    jan4 = days_from_date(iso_year, 1, 4)
    return jan4 + 4 - _iso_weekday_of_day(jan4)


def _iso_week_of_day(unix_day: int) -> IsoWeekDate:
    weekday = _iso_weekday_of_day(unix_day)
    thursday = unix_day + 4 - weekday
    iso_year = date_from_days(thursday).year
    week = (thursday - _first_thursday(iso_year)) // DAYS_PER_WEEK + 1
    return IsoWeekDate(iso_year, week, weekday)


def iso_week_of(year: int, month: int, day: int) -> IsoWeekDate:
    """ISO week date of a civil date.

    Examples:
        >>> iso_week_of(2021, 1, 3)
        IsoWeekDate(year=2020, week=53, weekday=7)
        >>> iso_week_of(2024, 12, 30)
        IsoWeekDate(year=2025, week=1, weekday=1)
    """
    return _iso_week_of_day(days_from_date(year, month, day))


def iso_week_of_ts(ts: int) -> IsoWeekDate:
    """ISO week date of the UTC day containing ts."""
    return _iso_week_of_day(floor_div(ts, SEC_PER_DAY))


def num_iso_weeks_in_year(iso_year: int) -> int:
    """Number of ISO weeks (52 or 53) in an ISO week-based year.

    Examples:
        >>> num_iso_weeks_in_year(2020)
        53
        >>> num_iso_weeks_in_year(2021)
        52
    """
    return iso_week_of(iso_year, 12, 28).week


def is_valid_iso_week_date(iso_year: int, week: int, weekday: int) -> bool:
    if weekday < 1 or weekday > 7 or week < 1:
        return False
    return week <= num_iso_weeks_in_year(iso_year)


def iso_week_date_to_days(iso_year: int, week: int, weekday: int = 1) -> int:
    """Day count since 1970-01-01 of an ISO week date.

    Raises:
        InvalidDateTime: If the week or weekday does not exist in that year.
    """
    if not is_valid_iso_week_date(iso_year, week, weekday):
        raise InvalidDateTime(f"invalid ISO week date: {iso_year}-W{week:02d}-{weekday}")
    thursday = _first_thursday(iso_year) + (week - 1) * DAYS_PER_WEEK
    return thursday + weekday - 4


def iso_week_start_ts(iso_year: int, week: int) -> int:
    """Timestamp of Monday 00:00 UTC opening the given ISO week.

    Examples:
        >>> iso_week_start_ts(2020, 1)  # 2019-12-30
        1577664000
    """
    return iso_week_date_to_days(iso_year, week, 1) * SEC_PER_DAY


def format_iso_week_date(
    iso_date: IsoWeekDate, extended: bool = True, include_weekday: bool = True
) -> str:
    """Render as "2020-W53-7", "2020W537", "2020-W53" or "2020W53".

    Raises:
        InvalidDateTime: If the week date does not exist.
    """
    if not is_valid_iso_week_date(*iso_date):
        raise InvalidDateTime(f"invalid ISO week date: {iso_date}")
    sep = "-" if extended else ""
    text = f"{iso_date.year}{sep}W{iso_date.week:02d}"
    if include_weekday:
        text += f"{sep}{iso_date.weekday}"
    return text


def parse_iso_week_date(value: str) -> IsoWeekDate:
    """Parse an ISO week date in extended or basic form.

    A missing weekday defaults to Monday.

    Raises:
        MalformedInput: If the text is not a week date.
        InvalidDateTime: If the week does not exist in that year.

    Examples:
        >>> parse_iso_week_date("2020-W53-7")
        IsoWeekDate(year=2020, week=53, weekday=7)
        >>> parse_iso_week_date("2024W01")
        IsoWeekDate(year=2024, week=1, weekday=1)
    """
    match = _ISO_WEEK_PATTERN.match(value.strip())
    if not match:
        raise MalformedInput(f"invalid ISO week date format: {value!r}")
    year_str, ext_week, ext_day, basic_week, basic_day = match.groups()
    week = int(ext_week or basic_week)
    weekday = int(ext_day or basic_day or 1)
    result = IsoWeekDate(int(year_str), week, weekday)
    if not is_valid_iso_week_date(*result):
        raise InvalidDateTime(f"invalid ISO week date: {value!r}")
    return result


__all__ = [
    "IsoWeekDate",
    "iso_week_of",
    "iso_week_of_ts",
    "num_iso_weeks_in_year",
    "is_valid_iso_week_date",
    "iso_week_date_to_days",
    "iso_week_start_ts",
    "format_iso_week_date",
    "parse_iso_week_date",
]
