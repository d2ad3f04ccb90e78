"""Background measurement for an NtpClientPool.

NtpClientPoolRunner owns a pool and a daemon thread that calls
pool.measure() every interval. Readers on other threads see the offset
the pool last published, never a half-finished cycle.

Examples:
    >>> runner = NtpClientPoolRunner(NtpClientPool())
    >>> runner.running()
    False
    >>> runner.force_measure()
    False
"""

from __future__ import annotations

import logging
import threading
from typing import Protocol

from timeshield._internal.constants import US_PER_SEC
from timeshield._internal.floor_math import trunc_div
from timeshield.core.clock import now_realtime_us
from timeshield.ntp.pool import NtpClientPool, NtpSample

logger = logging.getLogger(__name__)

DEFAULT_INTERVAL_MS: int = 30_000


class MeasurablePool(Protocol):
    """The part of NtpClientPool the runner relies on."""

    def measure(self) -> bool: ...

    def offset_us(self) -> int: ...

    def utc_time_us(self) -> int: ...

    def utc_time_ms(self) -> int: ...

    def last_samples(self) -> list[NtpSample]: ...


class NtpClientPoolRunner:
    """Runs pool measurements periodically on a background thread.

    Args:
        pool: The pool to drive. Defaults to an NtpClientPool with the
            default settings and no servers.
    """

    def __init__(self, pool: MeasurablePool | None = None) -> None:
        self._pool = pool if pool is not None else NtpClientPool()
        self._pool_lock = threading.Lock()
        self._cond = threading.Condition()
        self._thread: threading.Thread | None = None
        self._is_running = False
        self._stop_requested = False
        self._force_requested = False

        self._stats_lock = threading.Lock()
        self._last_measure_ok = False
        self._measure_count = 0
        self._fail_count = 0
        self._last_update_realtime_us = 0
        self._last_success_realtime_us = 0

    def __repr__(self) -> str:
        state = "running" if self.running() else "stopped"
        return f"NtpClientPoolRunner({state}, measures={self.measure_count()})"

    def __enter__(self) -> NtpClientPoolRunner:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.stop()

    # --- Lifecycle -------------------------------------------------------

    def start(self, interval_ms: int = DEFAULT_INTERVAL_MS, measure_immediately: bool = True) -> bool:
        """Start the background thread.

        Args:
            interval_ms: Pause between measurements; values below 1 ms
                are raised to 1 ms.
            measure_immediately: Measure as soon as the thread starts
                instead of after the first interval.

        Returns:
            False if the runner is already running or the thread could
            not be started.
        """
        with self._cond:
            if self._is_running:
                return False
            interval_ms = max(interval_ms, 1)
            self._stop_requested = False
            self._force_requested = False
            self._is_running = True
            thread = threading.Thread(
                target=self._run_loop,
                args=(interval_ms / 1000.0, measure_immediately),
                name="ntp-pool-runner",
                daemon=True,
            )
            self._thread = thread
        try:
            thread.start()
        except RuntimeError:
            logger.exception("Could not start NTP pool runner thread")
            with self._cond:
                self._is_running = False
                self._thread = None
            return False
        logger.info("NTP pool runner started, interval %d ms", interval_ms)
        return True

    def stop(self) -> None:
        """Ask the thread to finish and wait for it. Safe to call twice."""
        with self._cond:
            self._stop_requested = True
            self._cond.notify_all()
            thread = self._thread
            self._thread = None
        if thread is not None and thread is not threading.current_thread():
            thread.join()
        with self._cond:
            self._is_running = False
        if thread is not None:
            logger.info("NTP pool runner stopped")

    def running(self) -> bool:
        with self._cond:
            return self._is_running

    def force_measure(self) -> bool:
        """Wake the thread for an early measurement.

        Returns:
            False if the runner is not running.
        """
        with self._cond:
            if not self._is_running:
                return False
            self._force_requested = True
            self._cond.notify_all()
            return True

    def measure_now(self) -> bool:
        """Measure on the calling thread and update the statistics."""
        return self._do_measure()

    # --- Readers ---------------------------------------------------------

    def offset_us(self) -> int:
        return self._pool.offset_us()

    def utc_time_us(self) -> int:
        return self._pool.utc_time_us()

    def utc_time_ms(self) -> int:
        return self._pool.utc_time_ms()

    def utc_time_sec(self) -> int:
        return trunc_div(self.utc_time_us(), US_PER_SEC)

    def last_samples(self) -> list[NtpSample]:
        return self._pool.last_samples()

    def last_measure_ok(self) -> bool:
        with self._stats_lock:
            return self._last_measure_ok

    def measure_count(self) -> int:
        with self._stats_lock:
            return self._measure_count

    def fail_count(self) -> int:
        with self._stats_lock:
            return self._fail_count

    def last_update_realtime_us(self) -> int:
        """Wall-clock µs of the last measurement, 0 if none has run."""
        with self._stats_lock:
            return self._last_update_realtime_us

    def last_success_realtime_us(self) -> int:
        """Wall-clock µs of the last successful measurement, 0 if none."""
        with self._stats_lock:
            return self._last_success_realtime_us

    # --- Internals -------------------------------------------------------

    def _wake_requested(self) -> bool:
        return self._stop_requested or self._force_requested

    def _run_loop(self, interval_sec: float, measure_immediately: bool) -> None:
        if measure_immediately:
            self._do_measure()
        while True:
            with self._cond:
                self._cond.wait_for(self._wake_requested, timeout=interval_sec)
                if self._stop_requested:
                    break
                self._force_requested = False
            self._do_measure()
        with self._cond:
            self._is_running = False

    def _do_measure(self) -> bool:
        try:
            with self._pool_lock:
                is_ok = self._pool.measure()
        except Exception:
            logger.exception("NTP pool measurement raised")
            is_ok = False

        now = now_realtime_us()
        with self._stats_lock:
            self._measure_count += 1
            if not is_ok:
                self._fail_count += 1
            self._last_measure_ok = is_ok
            self._last_update_realtime_us = now
            if is_ok:
                self._last_success_realtime_us = now
        logger.debug("NTP pool measurement %s", "succeeded" if is_ok else "failed")
        return is_ok


__all__ = [
    "DEFAULT_INTERVAL_MS",
    "MeasurablePool",
    "NtpClientPoolRunner",
]
