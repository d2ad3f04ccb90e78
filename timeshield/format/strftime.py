"""strftime-style formatting of Unix timestamps.

This module provides format_time, a renderer for %-led patterns. A
directive is the run of identical letters after the ``%``; the letter
and the length of the run together select the output, so ``%s`` is the
timestamp in seconds while ``%ssss`` is its millisecond field, and
``%Y``, ``%YY``, ``%YYYY`` and ``%YYYYYY`` all differ.

Supported Directives:
    %a, %A - Short / full weekday name (Sun, Sunday)
    %b, %h - Short month name (Jan)
    %B - Full month name (January)
    %c - Date and time, "Thu Feb 29 12:34:56 2024"
    %C - Century, floor(year / 100), 2 digits
    %d, %DD - Day of month (01-31)
    %D - "%m/%d/%y"
    %e - Day of month, space padded
    %F - "%Y-%m-%d"
    %g, %G, %V - ISO week-based year (2-digit / full) and ISO week number
    %H, %HH, %hh - Hour, 24-hour (00-23)
    %I - Hour, 12-hour (01-12)
    %j - Day of year (001-366)
    %k, %l - Hour, 24-hour / 12-hour, space padded
    %m, %MM - Month (01-12)
    %M, %mm - Minute (00-59)
    %MMM - Uppercase month name (JAN)
    %n, %t - Newline / tab
    %p, %P - AM/PM, am/pm
    %r - "%I:%M:%S AM"
    %R, %T - "%H:%M", "%H:%M:%S"
    %s - Timestamp in seconds
    %ssss - Millisecond field
    %S, %SS - Second (00-59)
    %u, %w - ISO weekday (1-7) / weekday (0-6, Sunday == 0)
    %www, %WWW - Short / uppercase weekday name
    %y - Year modulo 100
    %Y, %YY, %YYYY - Year / 2-digit year / 4-digit year
    %YYYYYY - Year with mega-year (M) and kilo-year (K) prefixes
    %z - UTC offset, +hhmm
    %Z - "UTC"
    %% - Literal %

Unsupported directives (%U, %x, %X, %E, %O, %+) and unknown letters
emit nothing. Names are English and not localised.

Examples:
    >>> format_time("%Y-%m-%d %H:%M:%S", 1709210096)
    '2024-02-29 12:34:56'

    >>> format_time("%a %b %e", 1709210096)
    'Thu Feb 29'
"""

from __future__ import annotations

import math

from timeshield._internal.floor_math import floor_div, floor_mod, trunc_div, trunc_mod
from timeshield._internal.text import zero_pad
from timeshield.core.boundaries import day_of_week_date, day_of_year
from timeshield.core.datetime import DateTime, to_date_time
from timeshield.core.isoweek import iso_week_of
from timeshield.units.conversions import hour24_to_12
from timeshield.units.names import Month, NameFormat


def format_time(pattern: str, ts: int | float, utc_offset: int = 0) -> str:
    """Render a timestamp using a %-pattern.

    Date and time fields are those of ts in UTC; utc_offset only feeds
    the ``%z`` directive.

    Args:
        pattern: Format string with %-directives.
        ts: Timestamp in seconds; a float carries milliseconds.
        utc_offset: Offset in seconds rendered by ``%z``.

    Returns:
        Formatted string.

    Examples:
        >>> format_time("%YYYY.%MM.%DD", 0)
        '1970.01.01'

        >>> format_time("%ssss ms", 1.25)
        '250 ms'

        >>> format_time("%H:%M %z", 0, -(5 * 3600 + 30 * 60))
        '00:00 -0530'

        >>> format_time("100%%", 0)
        '100%'
    """
    seconds = math.floor(ts)
    dt = to_date_time(ts)
    result: list[str] = []
    i = 0
    n = len(pattern)
    while i < n:
        char = pattern[i]
        if char != "%":
            result.append(char)
            i += 1
            continue
        if i + 1 >= n:
            break
        letter = pattern[i + 1]
        if letter == "%":
            result.append("%")
            i += 2
            continue
        j = i + 1
        while j < n and pattern[j] == letter:
            j += 1
        result.append(_format_directive(letter, j - i - 1, seconds, utc_offset, dt))
        i = j
    return "".join(result)


def _format_directive(
    letter: str, count: int, seconds: int, utc_offset: int, dt: DateTime
) -> str:
    """Format a single directive given its letter and repeat count."""
    weekday = day_of_week_date(dt.year, dt.month, dt.day)

    if letter == "a":
        return weekday.to_str(NameFormat.SHORT_NAME) if count == 1 else ""

    elif letter == "A":
        return weekday.to_str(NameFormat.FULL_NAME) if count == 1 else ""

    elif letter == "I":
        return zero_pad(hour24_to_12(dt.hour), 2) if count == 1 else ""

    elif letter == "H":
        return zero_pad(dt.hour, 2) if count <= 2 else ""

    elif letter == "h":
        if count == 2:
            return zero_pad(dt.hour, 2)
        return Month(dt.month).to_str(NameFormat.SHORT_NAME) if count == 1 else ""

    elif letter == "b":
        return Month(dt.month).to_str(NameFormat.SHORT_NAME) if count == 1 else ""

    elif letter == "B":
        return Month(dt.month).to_str(NameFormat.FULL_NAME) if count == 1 else ""

    elif letter == "c":
        if count != 1:
            return ""
        return (
            f"{weekday.to_str(NameFormat.SHORT_NAME)} "
            f"{Month(dt.month).to_str(NameFormat.SHORT_NAME)} "
            f"{dt.day:2d} "
            f"{dt.hour:02d}:{dt.minute:02d}:{dt.second:02d} "
            f"{dt.year}"
        )

    elif letter == "C":
        return zero_pad(floor_div(dt.year, 100), 2) if count == 1 else ""

    elif letter == "d":
        return zero_pad(dt.day, 2) if count == 1 else ""

    elif letter == "D":
        if count == 1:
            return f"{dt.month:02d}/{dt.day:02d}/{zero_pad(trunc_mod(dt.year, 100), 2)}"
        return zero_pad(dt.day, 2) if count == 2 else ""

    elif letter == "e":
        return f"{dt.day:2d}" if count == 1 else ""

    elif letter == "F":
        return f"{zero_pad(dt.year, 4)}-{dt.month:02d}-{dt.day:02d}" if count == 1 else ""

    elif letter in ("g", "G", "V"):
        if count != 1:
            return ""
        iso = iso_week_of(dt.year, dt.month, dt.day)
        if letter == "g":
            return zero_pad(floor_mod(iso.year, 100), 2)
        if letter == "G":
            return str(iso.year)
        return zero_pad(iso.week, 2)

    elif letter == "j":
        return zero_pad(day_of_year(seconds), 3) if count == 1 else ""

    elif letter == "k":
        return f"{dt.hour:2d}" if count == 1 else ""

    elif letter == "l":
        return f"{hour24_to_12(dt.hour):2d}" if count == 1 else ""

    elif letter == "m":
        if count == 1:
            return zero_pad(dt.month, 2)
        return zero_pad(dt.minute, 2) if count == 2 else ""

    elif letter == "M":
        if count == 1:
            return zero_pad(dt.minute, 2)
        if count == 2:
            return zero_pad(dt.month, 2)
        return Month(dt.month).to_str(NameFormat.UPPERCASE_NAME) if count == 3 else ""

    elif letter == "n":
        return "\n"

    elif letter == "t":
        return "\t" if count == 1 else ""

    elif letter == "p":
        return "AM" if dt.hour < 12 else "PM"

    elif letter == "P":
        return "am" if dt.hour < 12 else "pm"

    elif letter == "r":
        if count != 1:
            return ""
        suffix = "AM" if dt.hour < 12 else "PM"
        return f"{hour24_to_12(dt.hour):02d}:{dt.minute:02d}:{dt.second:02d} {suffix}"

    elif letter == "R":
        return f"{dt.hour:02d}:{dt.minute:02d}" if count == 1 else ""

    elif letter == "T":
        return f"{dt.hour:02d}:{dt.minute:02d}:{dt.second:02d}" if count == 1 else ""

    elif letter == "s":
        if count == 1:
            return str(seconds)
        if count == 4:
            return str(dt.ms)
        # %ss and %sss render seconds like %S
        return zero_pad(dt.second, 2) if count <= 3 else ""

    elif letter == "S":
        return zero_pad(dt.second, 2) if count <= 2 else ""

    elif letter == "u":
        return str(weekday.iso_number) if count == 1 else ""

    elif letter == "w":
        if count == 1:
            return str(int(weekday))
        return weekday.to_str(NameFormat.SHORT_NAME) if count == 3 else ""

    elif letter == "W":
        return weekday.to_str(NameFormat.UPPERCASE_NAME) if count == 3 else ""

    elif letter == "y":
        return str(trunc_mod(dt.year, 100)) if count == 1 else ""

    elif letter == "Y":
        if count == 1:
            return str(dt.year)
        if count == 2:
            return zero_pad(trunc_mod(dt.year, 100), 2)
        if count == 4:
            return zero_pad(trunc_mod(dt.year, 10000), 4)
        if count == 6:
            return _format_long_year(dt.year)
        return ""

    elif letter == "z":
        if count != 1:
            return ""
        sign = "+" if utc_offset >= 0 else "-"
        magnitude = abs(utc_offset)
        return f"{sign}{magnitude // 3600:02d}{(magnitude % 3600) // 60:02d}"

    elif letter == "Z":
        return "UTC"

    # %U, %x, %X, %E, %O, %+ and unknown letters
    return ""


def _format_long_year(year: int) -> str:
    """Render a year with mega-year and kilo-year prefixes.

    Examples:
        >>> _format_long_year(2024)
        '2K024'
        >>> _format_long_year(-1_250_300)
        '-1M250K300'
        >>> _format_long_year(999)
        '0999'
    """
    mega = trunc_div(year, 1_000_000)
    kilo = trunc_div(year - mega * 1_000_000, 1000)
    rest = year - mega * 1_000_000 - kilo * 1000
    if mega:
        if kilo:
            return f"{mega}M{abs(kilo)}K{abs(rest):03d}"
        return f"{mega}M{abs(rest):03d}"
    if kilo:
        return f"{kilo}K{abs(rest):03d}"
    return zero_pad(year, 4)


__all__ = ["format_time"]
