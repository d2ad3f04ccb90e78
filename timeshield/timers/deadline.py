"""Deadline tracking over the monotonic clock.

A DeadlineTimer is idle, running towards a deadline, or running forever.
Deadlines are nanoseconds on the time.monotonic_ns() clock and saturate
at FOREVER_NS instead of overflowing.

Examples:
    >>> timer = DeadlineTimer()
    >>> timer.start_at(5_000_000)
    >>> timer.has_expired_ms(4)
    False
    >>> timer.has_expired_ms(5)
    True
    >>> timer.remaining_time(2_000_000)
    3000000
"""

from __future__ import annotations

from timeshield._internal.constants import INT64_MAX, NS_PER_MS, NS_PER_SEC
from timeshield._internal.floor_math import trunc_div
from timeshield.core.clock import now_monotonic_ns

FOREVER_NS: int = INT64_MAX


class DeadlineTimer:
    """Tracks whether a deadline has passed.

    Not thread-safe; use an instance from one thread at a time.

    Args:
        timeout_ns: If given, start with a deadline this far from now.
    """

    __slots__ = ("_deadline_ns", "_is_running")

    def __init__(self, timeout_ns: int | None = None) -> None:
        self._deadline_ns = 0
        self._is_running = False
        if timeout_ns is not None:
            self.start(timeout_ns)

    # --- Factories -------------------------------------------------------

    @classmethod
    def from_timeout(cls, timeout_ns: int) -> DeadlineTimer:
        timer = cls()
        timer.start(timeout_ns)
        return timer

    @classmethod
    def from_timeout_ms(cls, timeout_ms: int) -> DeadlineTimer:
        timer = cls()
        timer.start_ms(timeout_ms)
        return timer

    @classmethod
    def from_timeout_sec(cls, timeout_sec: int) -> DeadlineTimer:
        timer = cls()
        timer.start_sec(timeout_sec)
        return timer

    # --- Control ---------------------------------------------------------

    def start_at(self, deadline_ns: int) -> None:
        """Run towards an absolute monotonic deadline."""
        self._deadline_ns = min(deadline_ns, FOREVER_NS)
        self._is_running = True

    def start(self, timeout_ns: int) -> None:
        """Run towards now + timeout_ns.

        A timeout of 0 or less expires immediately; a timeout beyond the
        clock range saturates at FOREVER_NS.
        """
        now = now_monotonic_ns()
        if timeout_ns <= 0:
            self.start_at(now)
            return
        if timeout_ns >= FOREVER_NS - now:
            self.start_at(FOREVER_NS)
            return
        self.start_at(now + timeout_ns)

    def start_ms(self, timeout_ms: int) -> None:
        self.start(timeout_ms * NS_PER_MS)

    def start_sec(self, timeout_sec: int) -> None:
        self.start(timeout_sec * NS_PER_SEC)

    def stop(self) -> None:
        self._is_running = False
        self._deadline_ns = 0

    def set_forever(self) -> None:
        self._is_running = True
        self._deadline_ns = FOREVER_NS

    def add(self, extend_by_ns: int) -> None:
        """Move a running deadline by extend_by_ns.

        The shift applies to the later of the deadline and now, so an
        expired timer is extended from the present. A negative shift
        moves the deadline earlier and may expire the timer at once.
        """
        if not self._is_running:
            return
        base = max(self._deadline_ns, now_monotonic_ns())
        self._deadline_ns = min(max(base + extend_by_ns, 0), FOREVER_NS)

    def add_ms(self, extend_by_ms: int) -> None:
        self.add(extend_by_ms * NS_PER_MS)

    def add_sec(self, extend_by_sec: int) -> None:
        self.add(extend_by_sec * NS_PER_SEC)

    # --- State -----------------------------------------------------------

    def is_running(self) -> bool:
        return self._is_running

    def is_forever(self) -> bool:
        return self._is_running and self._deadline_ns == FOREVER_NS

    def deadline(self) -> int:
        """Deadline in monotonic nanoseconds."""
        return self._deadline_ns

    def deadline_ms(self) -> int:
        return trunc_div(self._deadline_ns, NS_PER_MS)

    def deadline_sec(self) -> int:
        return trunc_div(self._deadline_ns, NS_PER_SEC)

    def has_expired(self, now_ns: int | None = None) -> bool:
        """True once a running timer reaches its deadline."""
        if not self._is_running:
            return False
        if now_ns is None:
            now_ns = now_monotonic_ns()
        return now_ns >= self._deadline_ns

    def has_expired_ms(self, now_ms: int) -> bool:
        return self.has_expired(now_ms * NS_PER_MS)

    def has_expired_sec(self, now_sec: int) -> bool:
        return self.has_expired(now_sec * NS_PER_SEC)

    def remaining_time(self, now_ns: int | None = None) -> int:
        """Nanoseconds left before the deadline.

        Returns 0 when idle or expired and FOREVER_NS when running forever.
        """
        if not self._is_running:
            return 0
        if self._deadline_ns == FOREVER_NS:
            return FOREVER_NS
        if now_ns is None:
            now_ns = now_monotonic_ns()
        if now_ns >= self._deadline_ns:
            return 0
        return self._deadline_ns - now_ns

    def remaining_time_ms(self, now_ns: int | None = None) -> int:
        return trunc_div(self.remaining_time(now_ns), NS_PER_MS)

    def remaining_time_sec(self, now_ns: int | None = None) -> int:
        return trunc_div(self.remaining_time(now_ns), NS_PER_SEC)

    def __repr__(self) -> str:
        if not self._is_running:
            return "DeadlineTimer(stopped)"
        if self._deadline_ns == FOREVER_NS:
            return "DeadlineTimer(forever)"
        return f"DeadlineTimer(deadline_ns={self._deadline_ns})"


__all__ = ["FOREVER_NS", "DeadlineTimer"]
