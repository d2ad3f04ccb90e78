"""Stopwatch over the monotonic clock.

All instants are nanoseconds on the clock returned by
time.monotonic_ns(). The *_ms and *_sec variants that take an explicit
"now" interpret it on the same clock in the named unit, and results are
truncated toward zero into that unit.

Examples:
    >>> timer = ElapsedTimer()
    >>> timer.is_running()
    False
    >>> timer.restart_ms(1_000)
    0
    >>> timer.elapsed_ms(1_750)
    750
"""

from __future__ import annotations

from timeshield._internal.constants import NS_PER_MS, NS_PER_SEC
from timeshield._internal.floor_math import trunc_div
from timeshield.core.clock import now_monotonic_ns


class ElapsedTimer:
    """Measures time elapsed since a start point.

    Not thread-safe; use an instance from one thread at a time.

    Args:
        start_immediately: Start the timer on construction.
    """

    __slots__ = ("_start_ns", "_is_running")

    def __init__(self, start_immediately: bool = False) -> None:
        self._start_ns = 0
        self._is_running = False
        if start_immediately:
            self.start()

    def start(self) -> None:
        self._start_ns = now_monotonic_ns()
        self._is_running = True

    def _restart_at(self, now_ns: int) -> int:
        delta = self.elapsed(now_ns)
        self._start_ns = now_ns
        self._is_running = True
        return delta

    def restart(self) -> int:
        """Restart now and return the nanoseconds elapsed before the restart.

        A timer that was not running reports 0.
        """
        return self._restart_at(now_monotonic_ns())

    def restart_ms(self, now_ms: int) -> int:
        """Restart at now_ms and return the elapsed milliseconds before it."""
        return trunc_div(self._restart_at(now_ms * NS_PER_MS), NS_PER_MS)

    def restart_sec(self, now_sec: int) -> int:
        return trunc_div(self._restart_at(now_sec * NS_PER_SEC), NS_PER_SEC)

    def invalidate(self) -> None:
        """Stop the timer; elapsed values read 0 until it is started again."""
        self._is_running = False

    def is_running(self) -> bool:
        return self._is_running

    def is_valid(self) -> bool:
        return self._is_running

    def start_time(self) -> int:
        """Start point in monotonic nanoseconds."""
        return self._start_ns

    def elapsed(self, now_ns: int | None = None) -> int:
        """Nanoseconds from the start point to now_ns (default: the clock).

        Returns 0 for a timer that is not running or a now_ns before the
        start point.
        """
        if not self._is_running:
            return 0
        if now_ns is None:
            now_ns = now_monotonic_ns()
        return max(now_ns - self._start_ns, 0)

    def elapsed_ns(self, now_ns: int | None = None) -> int:
        return self.elapsed(now_ns)

    def elapsed_ms(self, now_ms: int | None = None) -> int:
        now_ns = None if now_ms is None else now_ms * NS_PER_MS
        return trunc_div(self.elapsed(now_ns), NS_PER_MS)

    def elapsed_sec(self, now_sec: int | None = None) -> int:
        now_ns = None if now_sec is None else now_sec * NS_PER_SEC
        return trunc_div(self.elapsed(now_ns), NS_PER_SEC)

    def has_expired(self, timeout_ms: int) -> bool:
        """Check whether at least timeout_ms have elapsed.

        A stopped timer never expires; a running one with a timeout of 0
        or less has always expired.
        """
        if not self._is_running:
            return False
        if timeout_ms <= 0:
            return True
        return self.elapsed_ms() >= timeout_ms

    def has_expired_sec(self, timeout_sec: int) -> bool:
        if not self._is_running:
            return False
        if timeout_sec <= 0:
            return True
        return self.elapsed() >= timeout_sec * NS_PER_SEC

    def ms_since_reference(self) -> int:
        """Start point in monotonic milliseconds, or 0 if not running."""
        if not self._is_running:
            return 0
        return trunc_div(self._start_ns, NS_PER_MS)

    def __repr__(self) -> str:
        state = "running" if self._is_running else "stopped"
        return f"ElapsedTimer({state}, start_ns={self._start_ns})"


__all__ = ["ElapsedTimer"]
