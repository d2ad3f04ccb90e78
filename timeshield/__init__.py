"""TimeShield: calendar arithmetic and time utilities on Unix timestamps.

TimeShield works on plain integers and floats: seconds, milliseconds and
microseconds since 1970-01-01T00:00:00Z in the proleptic Gregorian
calendar. There are no leap seconds and no time-zone database; UTC
offsets are plain numbers of seconds.

Core:
    DateTime: Broken-down date and time with milliseconds
    to_date_time, to_timestamp: Conversions between fields and timestamps
    start_of_*, end_of_*: Boundaries of minutes, hours, days, weeks,
        months and years
    first_workday_day, last_workday_day: Monday-Friday workday helpers

Units:
    TimeUnit: Fixed-length units with exact conversion
    Weekday, Month: English names in three letter cases
    TimeZoneOffset: Numeric UTC offset

Format:
    format_time: strftime-style %-patterns
    to_iso8601, parse_iso8601: ISO 8601 rendering and parsing
    to_mql5: MetaTrader "YYYY.MM.DD HH:MM:SS" rendering

Other:
    moon_phase, MoonPhaseCalculator: Moon phase model
    NtpClient, NtpClientPool: SNTP offset measurement
    NtpTimeService: Background-corrected wall clock
    ElapsedTimer, DeadlineTimer: Monotonic timers
    TimerScheduler, Timer: Scheduled callbacks

Exceptions:
    TimeShieldError: Base exception
    ValidationError: Invalid input values
    ParseError: Failed to parse string
    ArithmeticOverflow: Result outside the 64-bit range
    NtpError: NTP exchange failed

Example:
    >>> from timeshield import to_iso8601_utc, start_of_year
    >>> to_iso8601_utc(start_of_year(1709210096))
    '2024-01-01T00:00:00Z'
"""

from __future__ import annotations

__version__ = "0.1.0"

# Constants
from timeshield._internal.constants import (
    ERROR_TIMESTAMP,
    MAX_TIMESTAMP,
    MAX_YEAR,
    MIN_YEAR,
    MS_PER_SEC,
    OLE_EPOCH,
    SEC_PER_DAY,
    SEC_PER_HOUR,
    SEC_PER_MIN,
)

# Core
from timeshield.core.boundaries import (
    day_of_year,
    end_of_day,
    end_of_month,
    end_of_year,
    month_of_year,
    start_of_day,
    start_of_month,
    start_of_week,
    start_of_year,
    weekday_of_ts,
    year_of,
)
from timeshield.core.datetime import DateTime, to_date_time, to_date_time_ms, to_timestamp, to_timestamp_ms
from timeshield.core.workdays import count_workdays_in_month, first_workday_day, last_workday_day

# Units
from timeshield.units.names import Month, NameFormat, Weekday
from timeshield.units.timeunit import TimeUnit
from timeshield.units.timezone import TimeZoneOffset

# Validation
from timeshield.validation import is_leap_year, is_valid_date, is_valid_date_time, is_workday

# Format
from timeshield.format.iso8601 import iso8601_to_ts, parse_iso8601, to_iso8601, to_iso8601_utc
from timeshield.format.mql5 import to_mql5
from timeshield.format.strftime import format_time

# Astronomy
from timeshield.astronomy.moon import MoonPhaseCalculator, moon_illumination, moon_phase

# NTP and timers
from timeshield.ntp.client import NtpClient
from timeshield.ntp.pool import NtpClientPool, NtpPoolConfig
from timeshield.ntp.service import NtpTimeService
from timeshield.timers.deadline import DeadlineTimer
from timeshield.timers.elapsed import ElapsedTimer
from timeshield.timers.scheduler import Timer, TimerScheduler

# Exceptions
from timeshield.errors import (
    ArithmeticOverflow,
    InvalidDateTime,
    InvalidMonthName,
    InvalidTimeZone,
    MalformedInput,
    NtpError,
    ParseError,
    TimeShieldError,
    ValidationError,
)

__all__: list[str] = [
    "__version__",
    # Constants
    "ERROR_TIMESTAMP",
    "MAX_TIMESTAMP",
    "MAX_YEAR",
    "MIN_YEAR",
    "MS_PER_SEC",
    "OLE_EPOCH",
    "SEC_PER_DAY",
    "SEC_PER_HOUR",
    "SEC_PER_MIN",
    # Core
    "DateTime",
    "to_date_time",
    "to_date_time_ms",
    "to_timestamp",
    "to_timestamp_ms",
    "start_of_day",
    "end_of_day",
    "start_of_week",
    "start_of_month",
    "end_of_month",
    "start_of_year",
    "end_of_year",
    "weekday_of_ts",
    "day_of_year",
    "month_of_year",
    "year_of",
    "first_workday_day",
    "last_workday_day",
    "count_workdays_in_month",
    # Units
    "Month",
    "NameFormat",
    "Weekday",
    "TimeUnit",
    "TimeZoneOffset",
    # Validation
    "is_leap_year",
    "is_valid_date",
    "is_valid_date_time",
    "is_workday",
    # Format
    "format_time",
    "to_iso8601",
    "to_iso8601_utc",
    "parse_iso8601",
    "iso8601_to_ts",
    "to_mql5",
    # Astronomy
    "MoonPhaseCalculator",
    "moon_phase",
    "moon_illumination",
    # NTP and timers
    "NtpClient",
    "NtpClientPool",
    "NtpPoolConfig",
    "NtpTimeService",
    "ElapsedTimer",
    "DeadlineTimer",
    "TimerScheduler",
    "Timer",
    # Exceptions
    "TimeShieldError",
    "ValidationError",
    "InvalidDateTime",
    "InvalidTimeZone",
    "ParseError",
    "MalformedInput",
    "InvalidMonthName",
    "ArithmeticOverflow",
    "NtpError",
]
