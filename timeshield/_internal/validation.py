"""Validation utilities for TimeShield.

This module provides validation helpers that raise on bad input, for
use by constructors and by the timestamp builders. The boolean
predicates live in timeshield.validation.

This module is not part of the public API.
"""

from __future__ import annotations

import functools
import inspect
from typing import Callable, ParamSpec, TypeVar

from timeshield._internal.calendar import days_in_month
from timeshield._internal.constants import MAX_UTC_OFFSET, MAX_YEAR, MIN_UTC_OFFSET, SEC_PER_MIN
from timeshield.errors import InvalidDateTime, InvalidTimeZone

P = ParamSpec("P")
T = TypeVar("T")


def validate_range(
    **limits: tuple[int, int],
) -> Callable[[Callable[P, T]], Callable[P, T]]:
    """Decorator to validate that parameters are within specified ranges.

    Raises InvalidDateTime naming the first parameter that is out of its
    inclusive (min, max) range.

    Examples:
        >>> @validate_range(hour=(0, 23), minute=(0, 59))
        ... def sec_of_day_hms(hour: int, minute: int, second: int) -> int:
        ...     return hour * 3600 + minute * 60 + second

        >>> sec_of_day_hms(24, 0, 0)
        Traceback (most recent call last):
        ...
        timeshield.errors.InvalidDateTime: hour must be between 0 and 23, got 24
    """

    def decorator(func: Callable[P, T]) -> Callable[P, T]:
        param_names = list(inspect.signature(func).parameters.keys())

        @functools.wraps(func)
        def wrapper(*args: P.args, **kwargs: P.kwargs) -> T:
            all_args = dict(zip(param_names, args))
            all_args.update(kwargs)

            for param_name, (min_val, max_val) in limits.items():
                value = all_args.get(param_name)
                if value is not None and (value < min_val or value > max_val):
                    raise InvalidDateTime(
                        f"{param_name} must be between {min_val} and {max_val}, "
                        f"got {value}"
                    )

            return func(*args, **kwargs)

        return wrapper

    return decorator


def validate_date(year: int, month: int, day: int) -> None:
    """Validate that year, month, day form a valid date.

    Raises:
        InvalidDateTime: If any component is out of range.
    """
    if year > MAX_YEAR:
        raise InvalidDateTime(f"year must be at most {MAX_YEAR}, got {year}")
    if month < 1 or month > 12:
        raise InvalidDateTime(f"month must be between 1 and 12, got {month}")
    max_day = days_in_month(year, month)
    if day < 1 or day > max_day:
        raise InvalidDateTime(
            f"day must be between 1 and {max_day} for {year}-{month:02d}, got {day}"
        )


def validate_time(hour: int, minute: int, second: int, ms: int = 0) -> None:
    """Validate a time of day.

    Raises:
        InvalidDateTime: If any component is out of range.
    """
    for name, value, upper in (
        ("hour", hour, 23),
        ("minute", minute, 59),
        ("second", second, 59),
        ("ms", ms, 999),
    ):
        if value < 0 or value > upper:
            raise InvalidDateTime(f"{name} must be between 0 and {upper}, got {value}")


def validate_offset(offset: int) -> None:
    """Validate a UTC offset in seconds.

    Raises:
        InvalidTimeZone: If the offset is outside [-12h, +14h] or is not
            a whole number of minutes.
    """
    if offset < MIN_UTC_OFFSET or offset > MAX_UTC_OFFSET:
        raise InvalidTimeZone(
            f"offset {offset} is outside valid range [{MIN_UTC_OFFSET}, {MAX_UTC_OFFSET}]"
        )
    if offset % SEC_PER_MIN != 0:
        raise InvalidTimeZone(f"offset must be a multiple of 60 seconds, got {offset}")


__all__ = [
    "validate_range",
    "validate_date",
    "validate_time",
    "validate_offset",
]
