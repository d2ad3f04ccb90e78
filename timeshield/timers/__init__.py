"""Monotonic timers.

This module provides:
    - ElapsedTimer: Time elapsed since a start point
    - DeadlineTimer: Whether a deadline has passed
    - TimerScheduler and Timer: Single-shot and repeating callbacks
"""

from __future__ import annotations

from timeshield.timers.deadline import (
    DeadlineTimer,
    FOREVER_NS,
)
from timeshield.timers.elapsed import ElapsedTimer
from timeshield.timers.scheduler import Timer, TimerScheduler

__all__: list[str] = [
    # elapsed
    "ElapsedTimer",
    # deadline
    "FOREVER_NS",
    "DeadlineTimer",
    # scheduler
    "TimerScheduler",
    "Timer",
]
