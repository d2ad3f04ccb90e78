"""Custom decorators for TimeShield.

This module provides:
    - @deprecated(message): Warn on every call of a legacy alias

This module is not part of the public API.
"""

from __future__ import annotations

import functools
import warnings
from typing import Callable, TypeVar

F = TypeVar("F", bound=Callable)


def deprecated(message: str) -> Callable[[F], F]:
    """Keep a legacy name working while steering callers elsewhere.

    Args:
        message: What to use instead; appended to the warning text.

    Examples:
        >>> import warnings
        >>> @deprecated("use double() instead")
        ... def twice(x):
        ...     return 2 * x
        >>> with warnings.catch_warnings(record=True) as caught:
        ...     warnings.simplefilter("always")
        ...     twice(4)
        8
        >>> str(caught[0].message)
        'twice is deprecated: use double() instead'
    """

    def decorator(func: F) -> F:
        text = f"{func.__name__} is deprecated: {message}"

        @functools.wraps(func)
        def wrapper(*args, **kwargs):
            warnings.warn(text, DeprecationWarning, stacklevel=2)
            return func(*args, **kwargs)

        wrapper.__deprecated__ = text  # type: ignore[attr-defined]
        return wrapper  # type: ignore[return-value]

    return decorator


__all__ = [
    "deprecated",
]
