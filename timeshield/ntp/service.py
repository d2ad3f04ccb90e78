"""Process-wide NTP time.

NtpTimeService keeps one NtpClientPoolRunner alive and hands out
corrected wall-clock readings. The first reader starts it on demand;
configuration changes are accepted only while it is stopped, or applied
at once with apply_config_now().

The module-level functions forward to NtpTimeService.instance().

Examples:
    >>> service = NtpTimeService()
    >>> service.running()
    False
    >>> service.stale(60_000)
    True
"""

from __future__ import annotations

import logging
import threading
from dataclasses import replace
from typing import Callable, ClassVar

from timeshield._internal.constants import US_PER_MS, US_PER_SEC
from timeshield._internal.floor_math import trunc_div
from timeshield.core.clock import now_realtime_us
from timeshield.ntp.pool import NtpClientPool, NtpPoolConfig, NtpSample, NtpServerConfig
from timeshield.ntp.runner import DEFAULT_INTERVAL_MS, NtpClientPoolRunner

logger = logging.getLogger(__name__)


class NtpTimeService:
    """Owns a background pool runner and its configuration.

    Args:
        runner_factory: Builds a runner around a freshly configured pool.
            Tests pass factories that return runners over fake pools.
    """

    _instance: ClassVar[NtpTimeService | None] = None
    _instance_lock: ClassVar[threading.Lock] = threading.Lock()

    def __init__(
        self,
        runner_factory: Callable[[NtpClientPool], NtpClientPoolRunner] = NtpClientPoolRunner,
    ) -> None:
        self._runner_factory = runner_factory
        self._lock = threading.Lock()
        self._interval_ms = DEFAULT_INTERVAL_MS
        self._measure_immediately = True
        self._servers: list[NtpServerConfig] | None = None
        self._pool_config: NtpPoolConfig | None = None
        self._runner: NtpClientPoolRunner | None = None

    @classmethod
    def instance(cls) -> NtpTimeService:
        """The shared service, created on first use."""
        with cls._instance_lock:
            if cls._instance is None:
                cls._instance = cls()
            return cls._instance

    def __repr__(self) -> str:
        state = "running" if self.running() else "stopped"
        return f"NtpTimeService({state}, interval_ms={self._interval_ms})"

    # --- Lifecycle -------------------------------------------------------

    def init(self, interval_ms: int | None = None, measure_immediately: bool | None = None) -> bool:
        """Start the background runner and take one measurement.

        Arguments left as None keep the values from the previous call
        (30 s and True initially).

        Returns:
            True if the service was already running or the first
            measurement succeeded.
        """
        with self._lock:
            if self._is_running_locked():
                return True
            if interval_ms is not None:
                self._interval_ms = max(interval_ms, 1)
            if measure_immediately is not None:
                self._measure_immediately = measure_immediately
            runner = self._build_runner_locked()
            interval_ms = self._interval_ms
            measure_immediately = self._measure_immediately
        return self._start_runner(runner, interval_ms, measure_immediately)

    def shutdown(self) -> None:
        """Stop and drop the runner. Published readings revert to the local clock."""
        with self._lock:
            runner = self._runner
            self._runner = None
        if runner is not None:
            runner.stop()
            logger.info("NTP time service shut down")

    def running(self) -> bool:
        with self._lock:
            return self._is_running_locked()

    def ensure_started(self) -> None:
        if not self.running():
            self.init()

    def apply_config_now(self) -> bool:
        """Replace the runner with one built from the current configuration."""
        with self._lock:
            runner = self._build_runner_locked()
            old_runner = self._runner
            self._runner = None
            interval_ms = self._interval_ms
            measure_immediately = self._measure_immediately
        if old_runner is not None:
            old_runner.stop()
        return self._start_runner(runner, interval_ms, measure_immediately)

    # --- Readers ---------------------------------------------------------

    def offset_us(self) -> int:
        """Published offset in µs; starts the service if needed."""
        self.ensure_started()
        with self._lock:
            return self._runner.offset_us() if self._runner is not None else 0

    def utc_time_us(self) -> int:
        """Corrected wall clock in µs; the local clock if the service is down."""
        self.ensure_started()
        with self._lock:
            if self._runner is None:
                return now_realtime_us()
            return self._runner.utc_time_us()

    def utc_time_ms(self) -> int:
        return trunc_div(self.utc_time_us(), US_PER_MS)

    def utc_time_sec(self) -> int:
        return trunc_div(self.utc_time_us(), US_PER_SEC)

    def last_measure_ok(self) -> bool:
        with self._lock:
            return self._runner.last_measure_ok() if self._runner is not None else False

    def measure_count(self) -> int:
        with self._lock:
            return self._runner.measure_count() if self._runner is not None else 0

    def fail_count(self) -> int:
        with self._lock:
            return self._runner.fail_count() if self._runner is not None else 0

    def last_update_realtime_us(self) -> int:
        with self._lock:
            return self._runner.last_update_realtime_us() if self._runner is not None else 0

    def last_success_realtime_us(self) -> int:
        with self._lock:
            return self._runner.last_success_realtime_us() if self._runner is not None else 0

    def last_samples(self) -> list[NtpSample]:
        with self._lock:
            return self._runner.last_samples() if self._runner is not None else []

    def stale(self, max_age_ms: int) -> bool:
        """True if no measurement has run within max_age_ms."""
        last = self.last_update_realtime_us()
        if last == 0:
            return True
        return now_realtime_us() - last > max_age_ms * US_PER_MS

    # --- Configuration ---------------------------------------------------

    def set_servers(self, servers: list[NtpServerConfig]) -> bool:
        """Use these servers from the next start; False while running."""
        with self._lock:
            if self._is_running_locked():
                return False
            self._servers = list(servers)
            return True

    def set_default_servers(self) -> bool:
        return self.set_servers(NtpClientPool.build_default_servers())

    def clear_servers(self) -> bool:
        """Forget custom servers so the next start uses the defaults."""
        with self._lock:
            if self._is_running_locked():
                return False
            self._servers = None
            return True

    def set_pool_config(self, config: NtpPoolConfig) -> bool:
        """Use these pool settings from the next start; False while running."""
        with self._lock:
            if self._is_running_locked():
                return False
            self._pool_config = replace(config, servers=list(config.servers))
            return True

    def pool_config(self) -> NtpPoolConfig:
        """Copy of the custom pool settings, or the defaults."""
        with self._lock:
            if self._pool_config is None:
                return NtpPoolConfig()
            return replace(self._pool_config, servers=list(self._pool_config.servers))

    # --- Internals -------------------------------------------------------

    def _is_running_locked(self) -> bool:
        return self._runner is not None and self._runner.running()

    def _build_runner_locked(self) -> NtpClientPoolRunner:
        config = self._pool_config if self._pool_config is not None else NtpPoolConfig()
        if self._servers is not None:
            servers = list(self._servers)
        elif config.servers:
            servers = list(config.servers)
        else:
            servers = NtpClientPool.build_default_servers()
        return self._runner_factory(NtpClientPool(replace(config, servers=servers)))

    def _start_runner(
        self, runner: NtpClientPoolRunner, interval_ms: int, measure_immediately: bool
    ) -> bool:
        if not runner.start(interval_ms, measure_immediately):
            return False
        is_ok = runner.measure_now()
        with self._lock:
            self._runner = runner
        logger.info("NTP time service started, first measurement %s", "ok" if is_ok else "failed")
        return is_ok


def init(interval_ms: int | None = None, measure_immediately: bool | None = None) -> bool:
    return NtpTimeService.instance().init(interval_ms, measure_immediately)


def shutdown() -> None:
    NtpTimeService.instance().shutdown()


def offset_us() -> int:
    return NtpTimeService.instance().offset_us()


def utc_time_us() -> int:
    return NtpTimeService.instance().utc_time_us()


def utc_time_ms() -> int:
    return NtpTimeService.instance().utc_time_ms()


def utc_time_sec() -> int:
    return NtpTimeService.instance().utc_time_sec()


def last_measure_ok() -> bool:
    return NtpTimeService.instance().last_measure_ok()


def stale(max_age_ms: int) -> bool:
    return NtpTimeService.instance().stale(max_age_ms)


__all__ = [
    "NtpTimeService",
    "init",
    "shutdown",
    "offset_us",
    "utc_time_us",
    "utc_time_ms",
    "utc_time_sec",
    "last_measure_ok",
    "stale",
]
