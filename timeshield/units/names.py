"""Weekday and month enumerations with fixed English names.

This module provides the Weekday and Month enums and the three
name-case variants the formatter renders: uppercase short ("SUN"),
short ("Sun") and full ("Sunday"). Names are not localised.
"""

from __future__ import annotations

from enum import Enum, IntEnum

_WEEKDAY_FULL: tuple[str, ...] = (
    "Sunday",
    "Monday",
    "Tuesday",
    "Wednesday",
    "Thursday",
    "Friday",
    "Saturday",
)

_MONTH_FULL: tuple[str, ...] = (
    "January",
    "February",
    "March",
    "April",
    "May",
    "June",
    "July",
    "August",
    "September",
    "October",
    "November",
    "December",
)


class NameFormat(Enum):
    """Case and length variant of a weekday or month name."""

    UPPERCASE_NAME = "upper"  # "SUN", "JAN"
    SHORT_NAME = "short"  # "Sun", "Jan"
    FULL_NAME = "full"  # "Sunday", "January"


def _render(full: str, fmt: NameFormat) -> str:
    if fmt is NameFormat.FULL_NAME:
        return full
    if fmt is NameFormat.SHORT_NAME:
        return full[:3]
    return full[:3].upper()


class Weekday(IntEnum):
    """Day of the week, Sunday-based (Sunday == 0).

    Examples:
        >>> Weekday.THURSDAY.to_str()
        'THU'
        >>> Weekday(5).to_str(NameFormat.FULL_NAME)
        'Friday'
        >>> Weekday.MONDAY.iso_number
        1
    """

    SUNDAY = 0
    MONDAY = 1
    TUESDAY = 2
    WEDNESDAY = 3
    THURSDAY = 4
    FRIDAY = 5
    SATURDAY = 6

    def to_str(self, fmt: NameFormat = NameFormat.UPPERCASE_NAME) -> str:
        """Return the English name in the requested variant."""
        return _render(_WEEKDAY_FULL[self.value], fmt)

    @property
    def iso_number(self) -> int:
        """ISO 8601 weekday number, Monday == 1 through Sunday == 7."""
        return 7 if self.value == 0 else self.value

    @property
    def is_weekend(self) -> bool:
        """True for Saturday and Sunday."""
        return self in (Weekday.SATURDAY, Weekday.SUNDAY)


class Month(IntEnum):
    """Month of the year, January == 1.

    Examples:
        >>> Month.FEBRUARY.to_str(NameFormat.SHORT_NAME)
        'Feb'
    """

    JANUARY = 1
    FEBRUARY = 2
    MARCH = 3
    APRIL = 4
    MAY = 5
    JUNE = 6
    JULY = 7
    AUGUST = 8
    SEPTEMBER = 9
    OCTOBER = 10
    NOVEMBER = 11
    DECEMBER = 12

    def to_str(self, fmt: NameFormat = NameFormat.UPPERCASE_NAME) -> str:
        """Return the English name in the requested variant."""
        return _render(_MONTH_FULL[self.value - 1], fmt)


def weekday_name(weekday: int, fmt: NameFormat = NameFormat.UPPERCASE_NAME) -> str:
    """Name of a Sunday-based weekday number."""
    return Weekday(weekday).to_str(fmt)


def month_name(month: int, fmt: NameFormat = NameFormat.UPPERCASE_NAME) -> str:
    """Name of a month number 1-12."""
    return Month(month).to_str(fmt)


__all__ = [
    "NameFormat",
    "Weekday",
    "Month",
    "weekday_name",
    "month_name",
]
