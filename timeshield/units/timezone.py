"""Fixed UTC offsets.

This module provides the TimeZoneOffset value type used by the ISO 8601
parser and formatter. Only numeric offsets are modelled; there is no
time-zone database.
"""

from __future__ import annotations

import re
from typing import ClassVar

from timeshield._internal.constants import SEC_PER_HOUR, SEC_PER_MIN
from timeshield._internal.validation import validate_offset
from timeshield.errors import InvalidTimeZone
from timeshield.validation import is_valid_time_zone


class TimeZoneOffset:
    """A UTC offset split into hour, minute and sign.

    Attributes:
        hour: Hour component, 0-23.
        minute: Minute component, 0-59.
        is_positive: True for offsets east of UTC (and for UTC itself).

    Examples:
        >>> tz = TimeZoneOffset.from_string("+05:30")
        >>> tz.to_offset()
        19800

        >>> TimeZoneOffset.from_offset(-7200).to_string()
        '-02:00'

        >>> TimeZoneOffset.utc().is_utc
        True
    """

    __slots__ = ("_hour", "_minute", "_is_positive")

    _utc_instance: ClassVar[TimeZoneOffset | None] = None

    _PATTERN: ClassVar[re.Pattern[str]] = re.compile(r"^([+-])(\d{2}):(\d{2})$")

    def __init__(self, hour: int = 0, minute: int = 0, is_positive: bool = True) -> None:
        """Create an offset from its fields.

        Raises:
            InvalidTimeZone: If hour is outside 0-23 or minute outside 0-59.
        """
        if not is_valid_time_zone(hour, minute):
            raise InvalidTimeZone(
                f"offset must have hour 0-23 and minute 0-59, got {hour:02d}:{minute:02d}"
            )
        self._hour = hour
        self._minute = minute
        self._is_positive = is_positive

    @classmethod
    def utc(cls) -> TimeZoneOffset:
        """Return the +00:00 offset (shared instance)."""
        if cls._utc_instance is None:
            cls._utc_instance = cls(0, 0, True)
        return cls._utc_instance

    @classmethod
    def from_offset(cls, offset: int) -> TimeZoneOffset:
        """Create from a signed offset in seconds.

        Raises:
            InvalidTimeZone: If the offset is outside [-12h, +14h] or is
                not a whole number of minutes.
        """
        validate_offset(offset)
        magnitude = abs(offset)
        return cls(
            magnitude // SEC_PER_HOUR,
            (magnitude % SEC_PER_HOUR) // SEC_PER_MIN,
            offset >= 0,
        )

    @classmethod
    def from_string(cls, value: str) -> TimeZoneOffset:
        """Parse "Z", "" or "+HH:MM" / "-HH:MM".

        Raises:
            InvalidTimeZone: If the string is not a valid offset.
        """
        if value in ("", "Z", "z"):
            return cls.utc()
        match = cls._PATTERN.match(value)
        if not match:
            raise InvalidTimeZone(f"invalid offset format: {value!r}")
        sign, hours, minutes = match.groups()
        return cls(int(hours), int(minutes), sign == "+")

    @property
    def hour(self) -> int:
        return self._hour

    @property
    def minute(self) -> int:
        return self._minute

    @property
    def is_positive(self) -> bool:
        return self._is_positive

    @property
    def is_utc(self) -> bool:
        return self._hour == 0 and self._minute == 0

    def to_offset(self) -> int:
        """Signed offset in seconds."""
        magnitude = self._hour * SEC_PER_HOUR + self._minute * SEC_PER_MIN
        return magnitude if self._is_positive else -magnitude

    def to_string(self) -> str:
        """Render as "+HH:MM" or "-HH:MM"."""
        sign = "+" if self._is_positive else "-"
        return f"{sign}{self._hour:02d}:{self._minute:02d}"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, TimeZoneOffset):
            return NotImplemented
        return self.to_offset() == other.to_offset()

    def __hash__(self) -> int:
        return hash(self.to_offset())

    def __repr__(self) -> str:
        return f"TimeZoneOffset({self._hour}, {self._minute}, is_positive={self._is_positive})"

    def __str__(self) -> str:
        return self.to_string()


def offset_to_string(offset: int) -> str:
    """Render a signed offset in seconds as "+HH:MM" without range checks.

    Examples:
        >>> offset_to_string(10800)
        '+03:00'
        >>> offset_to_string(-(5 * 3600 + 45 * 60))
        '-05:45'
    """
    sign = "+" if offset >= 0 else "-"
    magnitude = abs(offset)
    hours = magnitude // SEC_PER_HOUR
    minutes = (magnitude % SEC_PER_HOUR) // SEC_PER_MIN
    return f"{sign}{hours:02d}:{minutes:02d}"


__all__ = [
    "TimeZoneOffset",
    "offset_to_string",
]
