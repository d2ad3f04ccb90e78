"""Internal constants for TimeShield.

These constants define the limits and magic numbers used throughout
the library. This module is not part of the public API; the public
subset is re-exported from timeshield.
"""

from __future__ import annotations

# Time unit conversions
NS_PER_US: int = 1_000
NS_PER_MS: int = 1_000_000
NS_PER_SEC: int = 1_000_000_000
US_PER_MS: int = 1_000
US_PER_SEC: int = 1_000_000
MS_PER_SEC: int = 1_000
MS_PER_MIN: int = 60_000
MS_PER_HOUR: int = 3_600_000
MS_PER_DAY: int = 86_400_000

SEC_PER_MIN: int = 60
SEC_PER_HOUR: int = 60 * SEC_PER_MIN
SEC_PER_DAY: int = 24 * SEC_PER_HOUR  # 86_400
SEC_PER_WEEK: int = 7 * SEC_PER_DAY
MIN_PER_HOUR: int = 60
MIN_PER_DAY: int = 1440
HOURS_PER_DAY: int = 24
DAYS_PER_WEEK: int = 7
MONTHS_PER_YEAR: int = 12

SEC_PER_YEAR: int = 31_536_000
SEC_PER_LEAP_YEAR: int = 31_622_400
SEC_PER_4_YEARS: int = 126_230_400
SEC_PER_FIRST_100_YEARS: int = 3_155_760_000
SEC_PER_100_YEARS: int = 3_155_673_600
SEC_PER_400_YEARS: int = 12_622_780_800
DAYS_PER_400_YEARS: int = 146_097

# Epoch anchors
UNIX_EPOCH_YEAR: int = 1970
TS_2000: int = 946_684_800  # 2000-01-01T00:00:00Z
TS_2100: int = 4_102_444_800  # 2100-01-01T00:00:00Z
BIAS_2000: int = TS_2000
BIAS_292277022000: int = 9_223_371_890_843_040_000

# Sentinels and limits
ERROR_TIMESTAMP: int = 9_223_372_036_854_770_000
ERROR_YEAR: int = ERROR_TIMESTAMP
MAX_TIMESTAMP: int = 9_223_371_890_843_040_000
MAX_YEAR: int = 292_277_022_000
MIN_YEAR: int = -2_967_369_602_200

INT64_MIN: int = -(1 << 63)
INT64_MAX: int = (1 << 63) - 1
UINT64_MASK: int = (1 << 64) - 1

# Offset limits (seconds)
MIN_UTC_OFFSET: int = -12 * SEC_PER_HOUR
MAX_UTC_OFFSET: int = 14 * SEC_PER_HOUR

# OLE Automation date: 1899-12-30 is day zero
OLE_EPOCH: int = 25_569

# NTP era: seconds between 1900-01-01 and 1970-01-01
NTP_TIMESTAMP_DELTA: int = 2_208_988_800

# Julian dates
JD_UNIX_EPOCH: float = 2440587.5
MJD_OFFSET: float = 2400000.5

# Days in each month (non-leap year)
DAYS_IN_MONTH: tuple[int, ...] = (
    0,   # Placeholder for 1-indexed access
    31,  # January
    28,  # February (non-leap)
    31,  # March
    30,  # April
    31,  # May
    30,  # June
    31,  # July
    31,  # August
    30,  # September
    31,  # October
    30,  # November
    31,  # December
)

# Days before the first of each month, indexed from 0 = January
DAYS_BEFORE_MONTH: tuple[int, ...] = (0, 31, 59, 90, 120, 151, 181, 212, 243, 273, 304, 334)
DAYS_BEFORE_MONTH_LEAP: tuple[int, ...] = (0, 31, 60, 91, 121, 152, 182, 213, 244, 274, 305, 335)


__all__ = [
    "NS_PER_US",
    "NS_PER_MS",
    "NS_PER_SEC",
    "US_PER_MS",
    "US_PER_SEC",
    "MS_PER_SEC",
    "MS_PER_MIN",
    "MS_PER_HOUR",
    "MS_PER_DAY",
    "SEC_PER_MIN",
    "SEC_PER_HOUR",
    "SEC_PER_DAY",
    "SEC_PER_WEEK",
    "MIN_PER_HOUR",
    "MIN_PER_DAY",
    "HOURS_PER_DAY",
    "DAYS_PER_WEEK",
    "MONTHS_PER_YEAR",
    "SEC_PER_YEAR",
    "SEC_PER_LEAP_YEAR",
    "SEC_PER_4_YEARS",
    "SEC_PER_FIRST_100_YEARS",
    "SEC_PER_100_YEARS",
    "SEC_PER_400_YEARS",
    "DAYS_PER_400_YEARS",
    "UNIX_EPOCH_YEAR",
    "TS_2000",
    "TS_2100",
    "BIAS_2000",
    "BIAS_292277022000",
    "ERROR_TIMESTAMP",
    "ERROR_YEAR",
    "MAX_TIMESTAMP",
    "MAX_YEAR",
    "MIN_YEAR",
    "INT64_MIN",
    "INT64_MAX",
    "UINT64_MASK",
    "MIN_UTC_OFFSET",
    "MAX_UTC_OFFSET",
    "OLE_EPOCH",
    "NTP_TIMESTAMP_DELTA",
    "JD_UNIX_EPOCH",
    "MJD_OFFSET",
    "DAYS_IN_MONTH",
    "DAYS_BEFORE_MONTH",
    "DAYS_BEFORE_MONTH_LEAP",
]
