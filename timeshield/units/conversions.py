"""Scalar rescaling between seconds, milliseconds, microseconds, minutes and hours.

Up-scaling an ``int`` multiplies exactly. Up-scaling a ``float`` rounds
the product half-to-even (Python's ``round``), so ``sec_to_ms(1.0005)``
and friends are stable across round trips. Down-scaling an ``int`` uses
floor division so that negative instants stay in the bucket they belong
to; the ``f``-prefixed variants return floats.
"""

from __future__ import annotations

from timeshield._internal.constants import (
    MS_PER_HOUR,
    MS_PER_MIN,
    MS_PER_SEC,
    SEC_PER_HOUR,
    SEC_PER_MIN,
    US_PER_MS,
    US_PER_SEC,
)

Number = int | float


def _scale_up(value: Number, factor: int) -> int:
    if isinstance(value, float):
        return round(value * factor)
    return int(value) * factor


def _scale_down(value: int, factor: int) -> int:
    return value // factor


def sec_to_ms(ts: Number) -> int:
    """Convert seconds to milliseconds.

    Examples:
        >>> sec_to_ms(2)
        2000
        >>> sec_to_ms(1.5)
        1500
    """
    return _scale_up(ts, MS_PER_SEC)


def fsec_to_ms(ts: float) -> int:
    """Convert floating-point seconds to rounded milliseconds."""
    return round(ts * MS_PER_SEC)


def ms_to_sec(ts_ms: int) -> int:
    """Convert milliseconds to whole seconds (floor).

    Examples:
        >>> ms_to_sec(1999)
        1
        >>> ms_to_sec(-1)
        -1
    """
    return _scale_down(ts_ms, MS_PER_SEC)


def ms_to_fsec(ts_ms: int) -> float:
    """Convert milliseconds to floating-point seconds."""
    return ts_ms / MS_PER_SEC


def sec_to_us(ts: Number) -> int:
    """Convert seconds to microseconds."""
    return _scale_up(ts, US_PER_SEC)


def us_to_sec(ts_us: int) -> int:
    """Convert microseconds to whole seconds (floor)."""
    return _scale_down(ts_us, US_PER_SEC)


def ms_to_us(ts_ms: Number) -> int:
    """Convert milliseconds to microseconds."""
    return _scale_up(ts_ms, US_PER_MS)


def us_to_ms(ts_us: int) -> int:
    """Convert microseconds to whole milliseconds (floor)."""
    return _scale_down(ts_us, US_PER_MS)


def min_to_sec(minutes: Number) -> int:
    """Convert minutes to seconds."""
    return _scale_up(minutes, SEC_PER_MIN)


def sec_to_min(ts: int) -> int:
    """Convert seconds to whole minutes (floor)."""
    return _scale_down(ts, SEC_PER_MIN)


def sec_to_fmin(ts: int) -> float:
    """Convert seconds to floating-point minutes."""
    return ts / SEC_PER_MIN


def min_to_fsec(minutes: Number) -> float:
    """Convert minutes to floating-point seconds."""
    return float(minutes) * SEC_PER_MIN


def min_to_ms(minutes: Number) -> int:
    """Convert minutes to milliseconds."""
    return _scale_up(minutes, MS_PER_MIN)


def ms_to_min(ts_ms: int) -> int:
    """Convert milliseconds to whole minutes (floor)."""
    return _scale_down(ts_ms, MS_PER_MIN)


def hour_to_sec(hours: Number) -> int:
    """Convert hours to seconds.

    Examples:
        >>> hour_to_sec(0.5)
        1800
    """
    return _scale_up(hours, SEC_PER_HOUR)


def sec_to_hour(ts: int) -> int:
    """Convert seconds to whole hours (floor)."""
    return _scale_down(ts, SEC_PER_HOUR)


def sec_to_fhour(ts: int) -> float:
    """Convert seconds to floating-point hours."""
    return ts / SEC_PER_HOUR


def hour_to_fsec(hours: Number) -> float:
    """Convert hours to floating-point seconds."""
    return float(hours) * SEC_PER_HOUR


def hour_to_ms(hours: Number) -> int:
    """Convert hours to milliseconds."""
    return _scale_up(hours, MS_PER_HOUR)


def ms_to_hour(ts_ms: int) -> int:
    """Convert milliseconds to whole hours (floor)."""
    return _scale_down(ts_ms, MS_PER_HOUR)


def ms_part(ts_ms: int) -> int:
    """Return the millisecond-of-second of a millisecond timestamp, in [0, 999]."""
    return ts_ms % MS_PER_SEC


def fraction_ms(fts: float) -> int:
    """Return the millisecond part of floating-point seconds, rounded.

    The integer part is discarded; the result may be 1000 when the
    fraction rounds up.
    """
    return round((fts - int(fts)) * MS_PER_SEC)


def fraction_us(fts: float) -> int:
    """Return the microsecond part of floating-point seconds, rounded."""
    return round((fts - int(fts)) * US_PER_SEC)


def hour24_to_12(hour: int) -> int:
    """Convert a 24-hour clock hour to the 12-hour clock.

    Examples:
        >>> hour24_to_12(0)
        12
        >>> hour24_to_12(12)
        12
        >>> hour24_to_12(13)
        1
        >>> hour24_to_12(9)
        9
    """
    if hour == 0:
        return 12
    if 13 <= hour <= 23:
        return hour - 12
    return hour


__all__ = [
    "sec_to_ms",
    "fsec_to_ms",
    "ms_to_sec",
    "ms_to_fsec",
    "sec_to_us",
    "us_to_sec",
    "ms_to_us",
    "us_to_ms",
    "min_to_sec",
    "sec_to_min",
    "sec_to_fmin",
    "min_to_fsec",
    "min_to_ms",
    "ms_to_min",
    "hour_to_sec",
    "sec_to_hour",
    "sec_to_fhour",
    "hour_to_fsec",
    "hour_to_ms",
    "ms_to_hour",
    "ms_part",
    "fraction_ms",
    "fraction_us",
    "hour24_to_12",
]
