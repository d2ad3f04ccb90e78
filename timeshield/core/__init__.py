"""Core calendar arithmetic.

This module provides:
    - DateTime and the timestamp <-> date-time conversions
    - Boundary algebra (start/end of minute .. year, arbitrary periods)
    - The workday layer
    - ISO 8601 week dates
    - Clock readers
"""

from __future__ import annotations

from timeshield.core.boundaries import (
    day_of_month,
    day_of_week_date,
    day_of_year,
    days_between,
    days_since_epoch,
    end_of_day,
    end_of_day_ms,
    end_of_hour,
    end_of_hour_ms,
    end_of_min,
    end_of_min_ms,
    end_of_month,
    end_of_month_ms,
    end_of_period,
    end_of_week,
    end_of_year,
    end_of_year_ms,
    hour_of_day,
    last_sunday_month_day,
    last_sunday_of_month,
    min_of_day,
    min_of_hour,
    month_of_year,
    next_day,
    next_day_ms,
    num_days_in_month,
    num_days_in_month_ts,
    num_days_in_year,
    num_days_in_year_ts,
    sec_of_day,
    sec_of_day_hms,
    sec_of_day_ms,
    sec_of_hour,
    sec_of_min,
    start_of_day,
    start_of_day_ms,
    start_of_hour,
    start_of_hour_ms,
    start_of_min,
    start_of_min_ms,
    start_of_month,
    start_of_month_ms,
    start_of_next_day,
    start_of_next_day_ms,
    start_of_period,
    start_of_prev_day,
    start_of_saturday,
    start_of_week,
    start_of_year,
    start_of_year_date,
    start_of_year_ms,
    unix_day_to_ts,
    weekday_of_ts,
    weekday_of_ts_ms,
    year_of,
    year_of_ms,
    years_since_epoch,
)
from timeshield.core.clock import (
    now_fts,
    now_monotonic_ns,
    now_realtime_us,
    now_ts,
    now_ts_ms,
    now_ts_us,
)
from timeshield.core.datetime import (
    DateTime,
    get_ts,
    to_date_time,
    to_date_time_ms,
    to_ftimestamp,
    to_timestamp,
    to_timestamp_ms,
)
from timeshield.core.isoweek import (
    IsoWeekDate,
    format_iso_week_date,
    is_valid_iso_week_date,
    iso_week_date_to_days,
    iso_week_of,
    iso_week_of_ts,
    iso_week_start_ts,
    num_iso_weeks_in_year,
    parse_iso_week_date,
)
from timeshield.core.workdays import (
    count_workdays_in_month,
    end_of_first_workday_month,
    end_of_first_workday_month_ms,
    end_of_first_workday_month_ts,
    end_of_first_workday_month_ts_ms,
    end_of_last_workday_month,
    end_of_last_workday_month_ms,
    end_of_last_workday_month_ts,
    end_of_last_workday_month_ts_ms,
    first_workday_day,
    is_first_workday_of_month,
    is_first_workday_of_month_ms,
    is_first_workday_of_month_ts,
    is_last_workday_of_month,
    is_last_workday_of_month_ms,
    is_last_workday_of_month_ts,
    is_within_first_workdays_of_month,
    is_within_first_workdays_of_month_ms,
    is_within_first_workdays_of_month_ts,
    is_within_last_workdays_of_month,
    is_within_last_workdays_of_month_ms,
    is_within_last_workdays_of_month_ts,
    last_workday_day,
    start_of_first_workday_month,
    start_of_first_workday_month_ms,
    start_of_first_workday_month_ts,
    start_of_first_workday_month_ts_ms,
    start_of_last_workday_month,
    start_of_last_workday_month_ms,
    start_of_last_workday_month_ts,
    start_of_last_workday_month_ts_ms,
    workday_index_in_month,
)

__all__: list[str] = [
    # datetime
    "DateTime",
    "to_date_time",
    "to_date_time_ms",
    "to_timestamp",
    "to_timestamp_ms",
    "to_ftimestamp",
    "get_ts",
    # boundaries
    "start_of_day",
    "end_of_day",
    "start_of_day_ms",
    "end_of_day_ms",
    "start_of_prev_day",
    "start_of_next_day",
    "start_of_next_day_ms",
    "next_day",
    "next_day_ms",
    "start_of_hour",
    "end_of_hour",
    "start_of_hour_ms",
    "end_of_hour_ms",
    "start_of_min",
    "end_of_min",
    "start_of_min_ms",
    "end_of_min_ms",
    "start_of_period",
    "end_of_period",
    "weekday_of_ts",
    "weekday_of_ts_ms",
    "day_of_week_date",
    "start_of_week",
    "end_of_week",
    "start_of_saturday",
    "days_since_epoch",
    "unix_day_to_ts",
    "days_between",
    "year_of",
    "year_of_ms",
    "years_since_epoch",
    "month_of_year",
    "day_of_month",
    "day_of_year",
    "num_days_in_month",
    "num_days_in_month_ts",
    "num_days_in_year",
    "num_days_in_year_ts",
    "start_of_month",
    "end_of_month",
    "start_of_month_ms",
    "end_of_month_ms",
    "last_sunday_month_day",
    "last_sunday_of_month",
    "start_of_year",
    "start_of_year_date",
    "start_of_year_ms",
    "end_of_year",
    "end_of_year_ms",
    "sec_of_day",
    "sec_of_day_ms",
    "sec_of_day_hms",
    "sec_of_hour",
    "sec_of_min",
    "min_of_day",
    "min_of_hour",
    "hour_of_day",
    # workdays
    "first_workday_day",
    "last_workday_day",
    "count_workdays_in_month",
    "workday_index_in_month",
    "is_first_workday_of_month",
    "is_first_workday_of_month_ts",
    "is_first_workday_of_month_ms",
    "is_last_workday_of_month",
    "is_last_workday_of_month_ts",
    "is_last_workday_of_month_ms",
    "is_within_first_workdays_of_month",
    "is_within_first_workdays_of_month_ts",
    "is_within_first_workdays_of_month_ms",
    "is_within_last_workdays_of_month",
    "is_within_last_workdays_of_month_ts",
    "is_within_last_workdays_of_month_ms",
    "start_of_first_workday_month",
    "start_of_first_workday_month_ms",
    "end_of_first_workday_month",
    "end_of_first_workday_month_ms",
    "start_of_last_workday_month",
    "start_of_last_workday_month_ms",
    "end_of_last_workday_month",
    "end_of_last_workday_month_ms",
    "start_of_first_workday_month_ts",
    "end_of_first_workday_month_ts",
    "start_of_last_workday_month_ts",
    "end_of_last_workday_month_ts",
    "start_of_first_workday_month_ts_ms",
    "end_of_first_workday_month_ts_ms",
    "start_of_last_workday_month_ts_ms",
    "end_of_last_workday_month_ts_ms",
    # isoweek
    "IsoWeekDate",
    "iso_week_of",
    "iso_week_of_ts",
    "num_iso_weeks_in_year",
    "is_valid_iso_week_date",
    "iso_week_date_to_days",
    "iso_week_start_ts",
    "format_iso_week_date",
    "parse_iso_week_date",
    # clock
    "now_realtime_us",
    "now_monotonic_ns",
    "now_ts",
    "now_ts_ms",
    "now_ts_us",
    "now_fts",
]
