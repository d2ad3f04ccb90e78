"""Readers for the operating-system clocks.

Wall-clock readers return the instant as seconds, milliseconds or
microseconds since 1970-01-01T00:00:00Z. The monotonic reader is the
time base of the timers and has an arbitrary origin.
"""

from __future__ import annotations

import time

from timeshield._internal.constants import NS_PER_MS, NS_PER_SEC, NS_PER_US


def now_realtime_us() -> int:
    """Wall-clock time in microseconds since the epoch."""
    return time.time_ns() // NS_PER_US


def now_monotonic_ns() -> int:
    """Monotonic clock reading in nanoseconds."""
    return time.monotonic_ns()


def now_ts() -> int:
    """Wall-clock time in whole seconds since the epoch."""
    return time.time_ns() // NS_PER_SEC


def now_ts_ms() -> int:
    return time.time_ns() // NS_PER_MS


def now_ts_us() -> int:
    return now_realtime_us()


def now_fts() -> float:
    """Wall-clock time in floating-point seconds since the epoch."""
    return time.time_ns() / NS_PER_SEC


__all__ = [
    "now_realtime_us",
    "now_monotonic_ns",
    "now_ts",
    "now_ts_ms",
    "now_ts_us",
    "now_fts",
]
