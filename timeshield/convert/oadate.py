"""OLE Automation Date (OADate) conversions.

An OADate is a floating-point day count from 1899-12-30T00:00:00; the
fraction is the time of day. 1970-01-01 is OADate 25569 (OLE_EPOCH).

Conversions to integer timestamps truncate toward zero.

Examples:
    >>> ts_to_oadate(0)
    25569.0
    >>> oadate_to_ts(25569.5)
    43200
    >>> to_oadate(1899, 12, 30)
    0.0
"""

from __future__ import annotations

from timeshield._internal.constants import MS_PER_DAY, OLE_EPOCH, SEC_PER_DAY
from timeshield.core.datetime import to_ftimestamp


def ts_to_oadate(ts: int) -> float:
    """Convert a timestamp in seconds to an OADate."""
    return OLE_EPOCH + ts / SEC_PER_DAY


def fts_to_oadate(fts: float) -> float:
    """Convert a floating-point timestamp in seconds to an OADate."""
    return OLE_EPOCH + fts / SEC_PER_DAY


def ts_ms_to_oadate(ts_ms: int) -> float:
    """Convert a timestamp in milliseconds to an OADate."""
    return OLE_EPOCH + ts_ms / MS_PER_DAY


def oadate_to_ts(oadate: float) -> int:
    """Convert an OADate to whole seconds, truncating toward zero."""
    return int((oadate - OLE_EPOCH) * SEC_PER_DAY)


def oadate_to_fts(oadate: float) -> float:
    return (oadate - OLE_EPOCH) * SEC_PER_DAY


def oadate_to_ts_ms(oadate: float) -> int:
    """Convert an OADate to whole milliseconds, truncating toward zero."""
    return int((oadate - OLE_EPOCH) * MS_PER_DAY)


def to_oadate(
    year: int,
    month: int,
    day: int,
    hour: int = 0,
    minute: int = 0,
    second: int = 0,
    ms: int = 0,
) -> float:
    """Convert UTC date-time fields to an OADate.

    Raises:
        InvalidDateTime: If the fields do not form a valid date-time.
    """
    return fts_to_oadate(to_ftimestamp(year, month, day, hour, minute, second, ms))


__all__ = [
    "ts_to_oadate",
    "fts_to_oadate",
    "ts_ms_to_oadate",
    "oadate_to_ts",
    "oadate_to_fts",
    "oadate_to_ts_ms",
    "to_oadate",
]
