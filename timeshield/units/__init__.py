"""Units, names and offsets.

This module provides:
    - TimeUnit: Fixed-length time units with exact conversion
    - Weekday, Month, NameFormat: Fixed English names
    - TimeZoneOffset: Numeric UTC offsets
    - Scalar conversions between sec, ms, us, min and hour
"""

from __future__ import annotations

from timeshield.units.conversions import (
    fraction_ms,
    fraction_us,
    fsec_to_ms,
    hour24_to_12,
    hour_to_fsec,
    hour_to_ms,
    hour_to_sec,
    min_to_fsec,
    min_to_ms,
    min_to_sec,
    ms_part,
    ms_to_fsec,
    ms_to_hour,
    ms_to_min,
    ms_to_sec,
    ms_to_us,
    sec_to_fhour,
    sec_to_fmin,
    sec_to_hour,
    sec_to_min,
    sec_to_ms,
    sec_to_us,
    us_to_ms,
    us_to_sec,
)
from timeshield.units.names import Month, NameFormat, Weekday, month_name, weekday_name
from timeshield.units.timeunit import TimeUnit
from timeshield.units.timezone import TimeZoneOffset, offset_to_string

__all__: list[str] = [
    "TimeUnit",
    "Weekday",
    "Month",
    "NameFormat",
    "month_name",
    "weekday_name",
    "TimeZoneOffset",
    "offset_to_string",
    "fraction_ms",
    "fraction_us",
    "fsec_to_ms",
    "hour24_to_12",
    "hour_to_fsec",
    "hour_to_ms",
    "hour_to_sec",
    "min_to_fsec",
    "min_to_ms",
    "min_to_sec",
    "ms_part",
    "ms_to_fsec",
    "ms_to_hour",
    "ms_to_min",
    "ms_to_sec",
    "ms_to_us",
    "sec_to_fhour",
    "sec_to_fmin",
    "sec_to_hour",
    "sec_to_min",
    "sec_to_ms",
    "sec_to_us",
    "us_to_ms",
    "us_to_sec",
]
