"""Timestamp formatting and parsing.

This module provides functions for converting timestamps to and from
string representations:
    - strftime-style formatting with extended directives
    - ISO 8601 formatting and parsing
    - MQL5 date-time strings
    - Month-name lookup

Examples:
    >>> from timeshield.format import format_time, to_iso8601_utc, iso8601_to_ts

    >>> format_time("%Y-%m-%d", 1709210096)
    '2024-02-29'

    >>> iso8601_to_ts(to_iso8601_utc(1709210096))
    1709210096
"""

from __future__ import annotations

from timeshield.format.iso8601 import (
    fts,
    iso8601_to_fts,
    iso8601_to_ts,
    iso8601_to_ts_ms,
    parse_iso8601,
    parse_time_zone,
    sec_of_day_from_str,
    to_iso8601,
    to_iso8601_date,
    to_iso8601_ms,
    to_iso8601_time,
    to_iso8601_time_utc,
    to_iso8601_utc,
    to_iso8601_utc_ms,
    try_iso8601_to_fts,
    try_iso8601_to_ts,
    try_iso8601_to_ts_ms,
    try_parse_iso8601,
    ts,
    ts_ms,
)
from timeshield.format.mql5 import (
    to_mql5,
    to_mql5_date,
    to_mql5_time,
)
from timeshield.format.names import (
    month_number,
    try_month_number,
)
from timeshield.format.strftime import format_time

__all__: list[str] = [
    # strftime
    "format_time",
    # iso8601
    "to_iso8601",
    "to_iso8601_utc",
    "to_iso8601_ms",
    "to_iso8601_utc_ms",
    "to_iso8601_date",
    "to_iso8601_time",
    "to_iso8601_time_utc",
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
    # mql5
    "to_mql5",
    "to_mql5_date",
    "to_mql5_time",
    # names
    "month_number",
    "try_month_number",
]
