"""Callback timers driven by the monotonic clock.

A TimerScheduler keeps a queue of pending firings. Either run() starts a
worker thread that sleeps until the next one is due, or the owner calls
process() from its own loop to run whatever is due now.

Timer is a handle on one scheduled callback: single-shot or repeating,
restartable, and stopped for good by close() (or when the handle is
garbage collected). A repeating timer is rescheduled from the instant
it was due, not from when its callback returned, so it does not drift.

Examples:
    >>> clock = iter(range(0, 10**10, 1_000_000)).__next__
    >>> scheduler = TimerScheduler(monotonic_ns=clock)
    >>> fired = []
    >>> timer = Timer(scheduler, lambda: fired.append("tick"))
    >>> timer.start(2)
    >>> scheduler.process()
    >>> fired
    []
    >>> scheduler.process()
    >>> fired
    ['tick']
"""

from __future__ import annotations

import heapq
import itertools
import logging
import threading
import weakref
from dataclasses import dataclass
from typing import Callable

from timeshield._internal.constants import NS_PER_MS, NS_PER_SEC
from timeshield.core.clock import now_monotonic_ns

logger = logging.getLogger(__name__)

Callback = Callable[[], None]

_current = threading.local()


@dataclass(eq=False)
class _TimerState:
    id: int
    callback: Callback | None = None
    interval_ms: int = 0
    is_single_shot: bool = False
    is_active: bool = False
    is_running: bool = False
    generation: int = 0
    has_owner: bool = False


def _running_state() -> _TimerState | None:
    return getattr(_current, "state", None)


class TimerScheduler:
    """Queue of timer firings on a monotonic nanosecond clock.

    Args:
        monotonic_ns: Clock used for due times. Tests pass a fake and
            drive the scheduler with process().
    """

    def __init__(self, monotonic_ns: Callable[[], int] = now_monotonic_ns) -> None:
        self._clock = monotonic_ns
        self._cond = threading.Condition()
        self._queue: list[tuple[int, int, int, int]] = []
        self._order = itertools.count()
        self._timers: dict[int, _TimerState] = {}
        self._next_id = 1
        self._thread: threading.Thread | None = None
        self._stop_requested = False

    def __repr__(self) -> str:
        with self._cond:
            state = "running" if self._thread is not None else "manual"
            return f"TimerScheduler({state}, timers={len(self._timers)})"

    # --- Driving ---------------------------------------------------------

    def run(self) -> None:
        """Start the worker thread; does nothing if it is already running."""
        with self._cond:
            if self._thread is not None:
                return
            self._stop_requested = False
            self._thread = threading.Thread(
                target=self._worker_loop, name="timer-scheduler", daemon=True
            )
            self._thread.start()

    def stop(self) -> None:
        """Stop the worker thread and drop timers nobody holds a handle to.

        Timers owned by a Timer handle stay registered and keep their
        schedule; run() or process() picks them up again.
        """
        with self._cond:
            thread = self._thread
            if thread is not None:
                self._stop_requested = True
                self._cond.notify_all()
            for state in [s for s in self._timers.values() if not s.has_owner]:
                del self._timers[state.id]
                state.callback = None
                state.is_active = False
        if thread is not None and thread is not threading.current_thread():
            thread.join()

    def process(self) -> None:
        """Run every callback that is due now on the calling thread.

        Raises:
            RuntimeError: If the worker thread is running.
        """
        with self._cond:
            if self._thread is not None:
                raise RuntimeError("process() cannot be used while the worker thread is running")
            due = self._collect_due_locked(self._clock())
        self._execute(due)

    def active_timer_count(self) -> int:
        """Registered timers, active or not."""
        with self._cond:
            return len(self._timers)

    # --- Timer bookkeeping -----------------------------------------------

    def _now_ns(self) -> int:
        return self._clock()

    def _create_state(self) -> _TimerState:
        with self._cond:
            state = _TimerState(id=self._next_id)
            self._next_id += 1
            self._timers[state.id] = state
            return state

    def _destroy_state(self, state: _TimerState) -> None:
        with self._cond:
            state.callback = None
            state.is_active = False
            state.generation += 1
            self._timers.pop(state.id, None)

    def _start_timer(self, state: _TimerState, fire_ns: int) -> None:
        with self._cond:
            state.is_active = True
            state.generation += 1
            heapq.heappush(self._queue, (fire_ns, next(self._order), state.id, state.generation))
            self._cond.notify_all()

    def _stop_timer(self, state: _TimerState) -> None:
        with self._cond:
            state.is_active = False
            state.generation += 1
            self._cond.notify_all()

    def _wait_idle(self, state: _TimerState) -> None:
        with self._cond:
            self._cond.wait_for(lambda: not state.is_running)

    # --- Firing ----------------------------------------------------------

    def _worker_loop(self) -> None:
        with self._cond:
            while not self._stop_requested:
                if not self._queue:
                    self._cond.wait()
                    continue
                delay_ns = self._queue[0][0] - self._clock()
                if delay_ns > 0:
                    self._cond.wait(timeout=delay_ns / NS_PER_SEC)
                    continue
                due = self._collect_due_locked(self._clock())
                self._cond.release()
                try:
                    self._execute(due)
                finally:
                    self._cond.acquire()
            if self._thread is threading.current_thread():
                self._thread = None
            self._stop_requested = False

    def _collect_due_locked(self, now_ns: int) -> list[tuple[int, int, _TimerState]]:
        due = []
        while self._queue and self._queue[0][0] <= now_ns:
            fire_ns, _, timer_id, generation = heapq.heappop(self._queue)
            state = self._timers.get(timer_id)
            if state is None or not state.is_active or state.generation != generation:
                continue
            state.is_running = True
            due.append((fire_ns, generation, state))
        return due

    def _execute(self, due: list[tuple[int, int, _TimerState]]) -> None:
        for fire_ns, generation, state in due:
            callback = state.callback
            if callback is not None:
                previous = _running_state()
                _current.state = state
                try:
                    callback()
                except Exception:
                    logger.exception("Timer %d callback raised", state.id)
                finally:
                    _current.state = previous
            self._finalize(fire_ns, generation, state)

    def _finalize(self, fire_ns: int, generation: int, state: _TimerState) -> None:
        with self._cond:
            state.is_running = False
            self._cond.notify_all()
            if not state.is_active:
                return
            if state.is_single_shot:
                state.is_active = False
                state.generation += 1
                return
            if state.generation != generation:
                return
            state.generation += 1
            next_fire_ns = fire_ns + state.interval_ms * NS_PER_MS
            heapq.heappush(
                self._queue, (next_fire_ns, next(self._order), state.id, state.generation)
            )


class Timer:
    """Handle on one scheduled callback.

    Args:
        scheduler: The scheduler that fires the callback.
        callback: Called with no arguments each time the timer fires.
            Exceptions it raises are logged and do not stop the timer.
    """

    __slots__ = ("_scheduler", "_state", "_finalizer", "__weakref__")

    def __init__(self, scheduler: TimerScheduler, callback: Callback | None = None) -> None:
        self._scheduler = scheduler
        self._state = scheduler._create_state()
        self._state.has_owner = True
        self._state.callback = callback
        self._finalizer = weakref.finalize(self, scheduler._destroy_state, self._state)

    def __repr__(self) -> str:
        kind = "single-shot" if self.is_single_shot() else "repeating"
        state = "active" if self.is_active() else "idle"
        return f"Timer({kind}, {state}, interval_ms={self.interval()})"

    def __enter__(self) -> Timer:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def set_interval(self, interval_ms: int) -> None:
        """Set the period; negative values become 0."""
        self._state.interval_ms = max(int(interval_ms), 0)

    def interval(self) -> int:
        return self._state.interval_ms

    def set_single_shot(self, is_single_shot: bool) -> None:
        self._state.is_single_shot = is_single_shot

    def is_single_shot(self) -> bool:
        return self._state.is_single_shot

    def is_active(self) -> bool:
        """True while a firing is scheduled."""
        return self._state.is_active

    def is_running(self) -> bool:
        """True while the callback is executing."""
        return self._state.is_running

    def set_callback(self, callback: Callback | None) -> None:
        self._state.callback = callback

    def start(self, interval_ms: int | None = None) -> None:
        """(Re)schedule the first firing one interval from now.

        A pending firing from an earlier start() is cancelled.
        """
        if interval_ms is not None:
            self.set_interval(interval_ms)
        fire_ns = self._scheduler._now_ns() + self._state.interval_ms * NS_PER_MS
        self._scheduler._start_timer(self._state, fire_ns)

    def stop(self) -> None:
        """Cancel pending firings; a callback already running finishes."""
        self._scheduler._stop_timer(self._state)

    def stop_and_wait(self) -> None:
        """Cancel pending firings and wait for a running callback to return.

        Raises:
            RuntimeError: If called from this timer's own callback.
        """
        if _running_state() is self._state:
            raise RuntimeError("stop_and_wait() cannot be called from the timer's own callback")
        self.stop()
        self._scheduler._wait_idle(self._state)

    def close(self) -> None:
        """Stop the timer and unregister it from the scheduler."""
        if not self._finalizer.alive:
            return
        if _running_state() is self._state:
            self.stop()
        else:
            self.stop_and_wait()
        self._state.has_owner = False
        self._finalizer()

    @staticmethod
    def single_shot(scheduler: TimerScheduler, interval_ms: int, callback: Callback) -> None:
        """Fire callback once after interval_ms without keeping a handle."""
        state = scheduler._create_state()
        state.is_single_shot = True
        state.interval_ms = max(int(interval_ms), 0)

        def fire() -> None:
            try:
                callback()
            finally:
                scheduler._destroy_state(state)

        state.callback = fire
        scheduler._start_timer(state, scheduler._now_ns() + state.interval_ms * NS_PER_MS)


__all__ = [
    "Callback",
    "TimerScheduler",
    "Timer",
]
