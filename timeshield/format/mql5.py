"""MQL5 date-time strings.

MetaTrader's MQL5 renders date-times as "YYYY.MM.DD HH:MM:SS" in UTC.

Examples:
    >>> to_mql5(1709210096)
    '2024.02.29 12:34:56'
    >>> to_mql5_date(1709210096)
    '2024.02.29'
    >>> to_mql5_time(1709210096)
    '12:34:56'
"""

from __future__ import annotations

from timeshield._internal.text import zero_pad
from timeshield.core.datetime import to_date_time


def to_mql5_date(ts: int) -> str:
    dt = to_date_time(ts)
    return f"{zero_pad(dt.year, 4)}.{dt.month:02d}.{dt.day:02d}"


def to_mql5_time(ts: int) -> str:
    dt = to_date_time(ts)
    return f"{dt.hour:02d}:{dt.minute:02d}:{dt.second:02d}"


def to_mql5(ts: int) -> str:
    """Format a timestamp as "YYYY.MM.DD HH:MM:SS"."""
    return f"{to_mql5_date(ts)} {to_mql5_time(ts)}"


__all__ = [
    "to_mql5",
    "to_mql5_date",
    "to_mql5_time",
]
