"""Calendar-adjacent numeric conversions.

This module provides:
    - OLE Automation dates (OADate), days since 1899-12-30 as a float
    - Julian Date and Modified Julian Date
"""

from __future__ import annotations

from timeshield.convert.julian import (
    fts_to_jd,
    fts_to_mjd,
    gregorian_to_jd,
    gregorian_to_jdn,
    ts_to_jd,
    ts_to_mjd,
)
from timeshield.convert.oadate import (
    fts_to_oadate,
    oadate_to_fts,
    oadate_to_ts,
    oadate_to_ts_ms,
    to_oadate,
    ts_ms_to_oadate,
    ts_to_oadate,
)

__all__: list[str] = [
    # oadate
    "ts_to_oadate",
    "fts_to_oadate",
    "ts_ms_to_oadate",
    "oadate_to_ts",
    "oadate_to_fts",
    "oadate_to_ts_ms",
    "to_oadate",
    # julian
    "fts_to_jd",
    "ts_to_jd",
    "fts_to_mjd",
    "ts_to_mjd",
    "gregorian_to_jd",
    "gregorian_to_jdn",
]
