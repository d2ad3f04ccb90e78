"""ISO 8601 formatting and parsing.

This module provides functions for converting Unix timestamps to and
from ISO 8601 strings.

Formatting:
    - YYYY-MM-DDTHH:MM:SS (local, no zone designator)
    - YYYY-MM-DDTHH:MM:SS.mmm (float input or the _ms variants)
    - YYYY-MM-DDTHH:MM:SSZ (UTC)
    - YYYY-MM-DDTHH:MM:SS+HH:MM (explicit offset)

Parsing accepts:
    - Dates with "-", "/" or "." separators and 2-digit month and day
    - An optional "T" or space followed by HH:MM[:SS[.fraction]]
    - An optional zone, "Z" or +HH:MM / -HH:MM
    - Surrounding whitespace

Fractions longer than three digits are truncated to milliseconds;
shorter ones are right-padded, so ".5" is 500 ms.

When a parsed value is turned into a timestamp, the zone offset is
added to the instant the fields describe in UTC. Formatting with an
offset appends the offset to the UTC fields unchanged, so the two
operations are inverse:

    >>> iso8601_to_ts(to_iso8601(1000, 3600)) == 1000 + 3600
    True

Examples:
    >>> to_iso8601_utc(1709210096)
    '2024-02-29T12:34:56Z'

    >>> dt, tz = parse_iso8601("2024-02-29T12:34:56Z")
    >>> dt.to_timestamp()
    1709210096
"""

from __future__ import annotations

import re

from timeshield._internal.constants import MS_PER_SEC, SEC_PER_DAY
from timeshield._internal.text import zero_pad
from timeshield._internal.validation import validate_date, validate_offset, validate_time
from timeshield.core.boundaries import sec_of_day_hms
from timeshield.core.datetime import DateTime, to_date_time, to_date_time_ms
from timeshield.errors import MalformedInput, TimeShieldError
from timeshield.units.timezone import TimeZoneOffset, offset_to_string

_ISO8601_PATTERN = re.compile(
    r"^\s*"
    r"(?P<year>-?\d{4,})[-/.](?P<month>\d{2})[-/.](?P<day>\d{2})"
    r"(?:[Tt ](?P<hour>\d{2}):(?P<minute>\d{2})"
    r"(?::(?P<second>\d{2})(?:\.(?P<fraction>\d+))?)?"
    r"(?P<zone>[Zz]|[+-]\d{2}:\d{2})?)?"
    r"\s*$"
)

_TIME_OF_DAY_PATTERN = re.compile(r"^(\d+)(?::(\d+))?(?::(\d+))?$")


# --- Formatting --------------------------------------------------------


def _date_part(dt: DateTime) -> str:
    return f"{zero_pad(dt.year, 4)}-{dt.month:02d}-{dt.day:02d}"


def _time_part(dt: DateTime) -> str:
    return f"{dt.hour:02d}:{dt.minute:02d}:{dt.second:02d}"


def to_iso8601(ts: int | float, utc_offset: int | None = None) -> str:
    """Format a timestamp as an ISO 8601 date-time.

    Float input adds a ".mmm" fraction. A utc_offset appends "+HH:MM"
    to the UTC fields without shifting them.

    Examples:
        >>> to_iso8601(1)
        '1970-01-01T00:00:01'
        >>> to_iso8601(1.5)
        '1970-01-01T00:00:01.500'
        >>> to_iso8601(1, 10800)
        '1970-01-01T00:00:01+03:00'
    """
    dt = to_date_time(ts)
    text = f"{_date_part(dt)}T{_time_part(dt)}"
    if isinstance(ts, float):
        text += f".{dt.ms:03d}"
    if utc_offset is not None:
        text += offset_to_string(utc_offset)
    return text


def to_iso8601_utc(ts: int | float) -> str:
    """Format a timestamp as an ISO 8601 UTC date-time ending in "Z"."""
    return to_iso8601(ts) + "Z"


def to_iso8601_ms(ts_ms: int, utc_offset: int | None = None) -> str:
    """Format a millisecond timestamp; the ".mmm" fraction is always present.

    Examples:
        >>> to_iso8601_ms(1500)
        '1970-01-01T00:00:01.500'
        >>> to_iso8601_ms(1500, -7200)
        '1970-01-01T00:00:01.500-02:00'
    """
    dt = to_date_time_ms(ts_ms)
    text = f"{_date_part(dt)}T{_time_part(dt)}.{dt.ms:03d}"
    if utc_offset is not None:
        text += offset_to_string(utc_offset)
    return text


def to_iso8601_utc_ms(ts_ms: int) -> str:
    return to_iso8601_ms(ts_ms) + "Z"


def to_iso8601_date(ts: int | float) -> str:
    """Format the UTC date of a timestamp as YYYY-MM-DD."""
    return _date_part(to_date_time(ts))


def to_iso8601_time(ts: int | float) -> str:
    """Format the UTC time of day of a timestamp as HH:MM:SS."""
    return _time_part(to_date_time(ts))


def to_iso8601_time_utc(ts: int | float) -> str:
    return to_iso8601_time(ts) + "Z"


# --- Parsing -----------------------------------------------------------


def parse_time_zone(value: str) -> TimeZoneOffset:
    """Parse "", "Z" or "+HH:MM" / "-HH:MM".

    Raises:
        InvalidTimeZone: If the fields are out of range or the offset lies
            outside [-12:00, +14:00].
    """
    tz = TimeZoneOffset.from_string(value)
    validate_offset(tz.to_offset())
    return tz


def _fraction_to_ms(fraction: str | None) -> int:
    if not fraction:
        return 0
    return int(fraction[:3].ljust(3, "0"))


def parse_iso8601(value: str) -> tuple[DateTime, TimeZoneOffset]:
    """Parse an ISO 8601 date or date-time with an optional zone.

    Missing time fields default to zero and a missing zone to UTC.

    Args:
        value: The string to parse.

    Returns:
        The parsed fields and the zone offset.

    Raises:
        MalformedInput: If the string does not have the ISO 8601 shape.
        InvalidDateTime: If a date or time field is out of range.
        InvalidTimeZone: If the zone is out of range.

    Examples:
        >>> parse_iso8601("2024.07.08T12:34:00-03:00")[1].to_offset()
        -10800

        >>> parse_iso8601("2024-07-08 12:34")[0]
        DateTime(year=2024, month=7, day=8, hour=12, minute=34, second=0, ms=0)
    """
    match = _ISO8601_PATTERN.match(value)
    if not match:
        raise MalformedInput(f"invalid ISO 8601 format: {value!r}")

    year = int(match.group("year"))
    month = int(match.group("month"))
    day = int(match.group("day"))
    hour = int(match.group("hour") or 0)
    minute = int(match.group("minute") or 0)
    second = int(match.group("second") or 0)
    ms = _fraction_to_ms(match.group("fraction"))

    validate_date(year, month, day)
    validate_time(hour, minute, second, ms)
    tz = parse_time_zone(match.group("zone") or "")
    return DateTime(year, month, day, hour, minute, second, ms), tz


def try_parse_iso8601(value: str) -> tuple[DateTime, TimeZoneOffset] | None:
    """Like parse_iso8601, but return None instead of raising."""
    try:
        return parse_iso8601(value)
    except TimeShieldError:
        return None


def iso8601_to_ts(value: str) -> int:
    """Parse a string into a timestamp in seconds.

    Raises:
        MalformedInput, InvalidDateTime, InvalidTimeZone: As parse_iso8601.

    Examples:
        >>> iso8601_to_ts("2024-02-29T12:34:56Z")
        1709210096
    """
    dt, tz = parse_iso8601(value)
    return dt.to_timestamp() + tz.to_offset()


def iso8601_to_ts_ms(value: str) -> int:
    """Parse a string into a timestamp in milliseconds."""
    dt, tz = parse_iso8601(value)
    return dt.to_timestamp_ms() + tz.to_offset() * MS_PER_SEC


def iso8601_to_fts(value: str) -> float:
    """Parse a string into a floating-point timestamp in seconds."""
    dt, tz = parse_iso8601(value)
    return dt.to_ftimestamp() + tz.to_offset()


def try_iso8601_to_ts(value: str) -> int | None:
    try:
        return iso8601_to_ts(value)
    except TimeShieldError:
        return None


def try_iso8601_to_ts_ms(value: str) -> int | None:
    try:
        return iso8601_to_ts_ms(value)
    except TimeShieldError:
        return None


def try_iso8601_to_fts(value: str) -> float | None:
    try:
        return iso8601_to_fts(value)
    except TimeShieldError:
        return None


def ts(value: str) -> int:
    """Parse a string into seconds, collapsing any failure to 0.

    Use try_iso8601_to_ts to tell a failure from the epoch.

    Examples:
        >>> ts("1970-01-01T00:01:00Z")
        60
        >>> ts("not a date")
        0
    """
    result = try_iso8601_to_ts(value)
    return 0 if result is None else result


def ts_ms(value: str) -> int:
    """Parse a string into milliseconds, collapsing any failure to 0."""
    result = try_iso8601_to_ts_ms(value)
    return 0 if result is None else result


def fts(value: str) -> float:
    """Parse a string into float seconds, collapsing any failure to 0.0."""
    result = try_iso8601_to_fts(value)
    return 0.0 if result is None else result


def sec_of_day_from_str(value: str) -> int:
    """Parse "H", "H:M" or "H:M:S" into seconds since midnight.

    Returns SEC_PER_DAY (86400), which no valid time of day produces,
    when the text is malformed or out of range.

    Examples:
        >>> sec_of_day_from_str("12:30")
        45000
        >>> sec_of_day_from_str("24:00")
        86400
    """
    match = _TIME_OF_DAY_PATTERN.match(value)
    if not match:
        return SEC_PER_DAY
    hour, minute, second = (int(part or 0) for part in match.groups())
    try:
        return sec_of_day_hms(hour, minute, second)
    except TimeShieldError:
        return SEC_PER_DAY


__all__ = [
    # Formatting
    "to_iso8601",
    "to_iso8601_utc",
    "to_iso8601_ms",
    "to_iso8601_utc_ms",
    "to_iso8601_date",
    "to_iso8601_time",
    "to_iso8601_time_utc",
    # Parsing
    "parse_time_zone",
    "parse_iso8601",
    "try_parse_iso8601",
    "iso8601_to_ts",
    "iso8601_to_ts_ms",
    "iso8601_to_fts",
    "try_iso8601_to_ts",
    "try_iso8601_to_ts_ms",
    "try_iso8601_to_fts",
    "ts",
    "ts_ms",
    "fts",
    "sec_of_day_from_str",
]
