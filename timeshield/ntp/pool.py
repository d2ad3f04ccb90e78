"""Multi-server NTP offset estimation.

NtpClientPool queries a random subset of configured servers, discards
failed or slow samples, aggregates the remaining offsets and publishes
a (optionally smoothed) clock offset.

Each server is rate limited: it is not queried again before its
min_interval has passed, and a failed query pushes it back by an
exponential backoff that a successful query resets.

Measurement cycles (measure, measure_n, apply_samples) are serialized;
readers always observe either the state before a cycle or after it.

Examples:
    >>> pool = NtpClientPool(NtpPoolConfig(min_valid_samples=1))
    >>> pool.apply_samples([NtpSample("a", is_ok=True, offset_us=250, delay_us=900)])
    True
    >>> pool.offset_us()
    250
"""

from __future__ import annotations

import enum
import logging
import random
import threading
import time
from dataclasses import dataclass, field, replace
from typing import Callable, Protocol

from timeshield._internal.constants import NS_PER_MS, US_PER_MS
from timeshield._internal.floor_math import trunc_div
from timeshield.core.clock import now_monotonic_ns, now_realtime_us
from timeshield.errors import NtpError
from timeshield.ntp.client import NtpClient
from timeshield.ntp.packet import NTP_PORT, NtpErrorCode

logger = logging.getLogger(__name__)

MAD_TRIM_FACTOR: int = 3

_SEED_MIX = 0x9E3779B97F4A7C15


class Aggregation(enum.Enum):
    """How the offsets of one measurement cycle are combined."""

    MEDIAN = "median"
    MEDIAN_MAD_TRIM = "median_mad_trim"
    BEST_DELAY = "best_delay"


@dataclass(frozen=True)
class NtpServerConfig:
    """One upstream server and its rate limits (all durations in ms)."""

    host: str
    port: int = NTP_PORT
    min_interval_ms: int = 15_000
    max_delay_ms: int = 250
    backoff_initial_ms: int = 15_000
    backoff_max_ms: int = 600_000


@dataclass
class NtpPoolConfig:
    """Pool settings.

    Attributes:
        servers: Upstream servers.
        sample_servers: Servers queried per measurement cycle.
        min_valid_samples: Minimum usable samples for a cycle to count.
        aggregation: Offset aggregation method.
        smoothing_alpha: EWMA weight of a new estimate; 1.0 adopts it
            as is, 0.0 or less keeps the old offset.
        rng_seed: Seed of the server-selection RNG; 0 seeds from the clock.
        max_delay_us: Pool-wide delay cap in microseconds; 0 disables it.
    """

    servers: list[NtpServerConfig] = field(default_factory=list)
    sample_servers: int = 5
    min_valid_samples: int = 3
    aggregation: Aggregation = Aggregation.MEDIAN
    smoothing_alpha: float = 1.0
    rng_seed: int = 0
    max_delay_us: int = 0


@dataclass
class NtpSample:
    """Result of querying one server in a measurement cycle."""

    host: str
    port: int = NTP_PORT
    is_ok: bool = False
    error_code: int = 0
    stratum: int = -1
    offset_us: int = 0
    delay_us: int = 0
    max_delay_us: int = 0


class PoolClient(Protocol):
    """The part of NtpClient the pool relies on."""

    def query(self) -> bool: ...

    def last_error_code(self) -> int: ...

    def offset_us(self) -> int: ...

    def delay_us(self) -> int: ...

    def stratum(self) -> int: ...


@dataclass(frozen=True)
class NtpServerStatus:
    """Read-only view of one server's rate-limit state and last result.

    Attributes:
        host: Server host name.
        port: Server UDP port.
        next_allowed_ms: Monotonic ms before which the server is skipped.
        backoff_ms: Current failure backoff; 0 after a success.
        fail_count: Consecutive failed queries.
        last_error_code: NtpErrorCode of the last query, 0 on success.
        last_offset_us: Offset reported by the last successful query.
        last_delay_us: Round-trip delay of the last query.
        last_stratum: Stratum of the last query, -1 if never answered.
        query_count: Queries sent to this server.
    """

    host: str
    port: int
    next_allowed_ms: int
    backoff_ms: int
    fail_count: int
    last_error_code: int
    last_offset_us: int
    last_delay_us: int
    last_stratum: int
    query_count: int


@dataclass
class _ServerState:
    cfg: NtpServerConfig
    next_allowed_ms: int = 0
    backoff_ms: int = 0
    fail_count: int = 0
    last_error_code: int = 0
    last_offset_us: int = 0
    last_delay_us: int = 0
    last_stratum: int = -1
    query_count: int = 0

    def status(self) -> NtpServerStatus:
        return NtpServerStatus(
            host=self.cfg.host,
            port=self.cfg.port,
            next_allowed_ms=self.next_allowed_ms,
            backoff_ms=self.backoff_ms,
            fail_count=self.fail_count,
            last_error_code=self.last_error_code,
            last_offset_us=self.last_offset_us,
            last_delay_us=self.last_delay_us,
            last_stratum=self.last_stratum,
            query_count=self.query_count,
        )


def _monotonic_ms() -> int:
    return now_monotonic_ns() // NS_PER_MS


def _init_seed(seed: int) -> int:
    if seed != 0:
        return seed
    return time.time_ns() ^ _SEED_MIX


def median(values: list[int]) -> int:
    """Integer median; an even count averages the middle pair toward zero.

    Examples:
        >>> median([300, 100, 200])
        200
        >>> median([-3, 0])
        -1
    """
    ordered = sorted(values)
    mid = len(ordered) // 2
    if len(ordered) % 2 == 1:
        return ordered[mid]
    return trunc_div(ordered[mid - 1] + ordered[mid], 2)


def median_mad_trim(values: list[int]) -> int:
    """Mean of the values within 3 MAD of the median.

    Falls back to the median when the MAD is zero or nothing survives.

    Examples:
        >>> median_mad_trim([100, 105, 100000])
        102
    """
    med = median(values)
    mad = median([abs(value - med) for value in values])
    if mad == 0:
        return med
    threshold = mad * MAD_TRIM_FACTOR
    kept = [value for value in values if abs(value - med) <= threshold]
    if not kept:
        return med
    return trunc_div(sum(kept), len(kept))


def best_delay_offset(samples: list[NtpSample]) -> int:
    """Offset of the sample with the smallest delay; ties go to lower stratum."""
    best = min(samples, key=lambda sample: (sample.delay_us, sample.stratum), default=None)
    return best.offset_us if best is not None else 0


class NtpClientPool:
    """Estimates the local clock offset from several NTP servers.

    Args:
        config: Pool settings; servers listed there become the server set.
        client_factory: Builds a client for (host, port). Defaults to
            NtpClient; tests pass fakes.
        monotonic_ms: Monotonic clock in milliseconds used for rate limits.
    """

    def __init__(
        self,
        config: NtpPoolConfig | None = None,
        client_factory: Callable[[str, int], PoolClient] = NtpClient,
        monotonic_ms: Callable[[], int] = _monotonic_ms,
    ) -> None:
        self._cfg = config if config is not None else NtpPoolConfig()
        self._client_factory = client_factory
        self._monotonic_ms = monotonic_ms
        self._lock = threading.Lock()
        self._cycle_lock = threading.Lock()
        self._servers = [_ServerState(server) for server in self._cfg.servers]
        self._last_samples: list[NtpSample] = []
        self._offset_us = 0
        self._rng = random.Random(_init_seed(self._cfg.rng_seed))

    # --- Server set ------------------------------------------------------

    def set_servers(self, servers: list[NtpServerConfig]) -> None:
        """Replace the server set; rate-limit state starts fresh."""
        with self._lock:
            self._servers = [_ServerState(server) for server in servers]

    def add_server(self, server: NtpServerConfig) -> None:
        with self._lock:
            self._servers.append(_ServerState(server))

    def clear_servers(self) -> None:
        with self._lock:
            self._servers = []

    def set_default_servers(self) -> None:
        self.set_servers(self.build_default_servers())

    @staticmethod
    def build_default_servers() -> list[NtpServerConfig]:
        """Public NTP servers with conservative rate limits.

        Each entry uses a 60 s minimum interval, a 500 ms delay cap and a
        backoff from 120 s up to 10 minutes.
        """
        return [
            NtpServerConfig(
                host,
                min_interval_ms=60_000,
                max_delay_ms=500,
                backoff_initial_ms=120_000,
                backoff_max_ms=600_000,
            )
            for host in _DEFAULT_HOSTS
        ]

    # --- Configuration ---------------------------------------------------

    def config(self) -> NtpPoolConfig:
        """Copy of the current settings, including the current server set."""
        with self._lock:
            return replace(self._cfg, servers=[state.cfg for state in self._servers])

    def set_config(self, config: NtpPoolConfig) -> None:
        """Replace the settings and the server set.

        The selection RNG is kept; rng_seed only applies at construction.
        """
        with self._lock:
            self._cfg = config
            self._servers = [_ServerState(server) for server in config.servers]

    # --- Readers ---------------------------------------------------------

    def offset_us(self) -> int:
        with self._lock:
            return self._offset_us

    def utc_time_us(self) -> int:
        """Local wall clock corrected by the published offset."""
        return now_realtime_us() + self.offset_us()

    def utc_time_ms(self) -> int:
        return trunc_div(self.utc_time_us(), US_PER_MS)

    def last_samples(self) -> list[NtpSample]:
        with self._lock:
            return [replace(sample) for sample in self._last_samples]

    def server_status(self) -> list[NtpServerStatus]:
        """Snapshot of every configured server, in configuration order."""
        with self._lock:
            return [state.status() for state in self._servers]

    def server_status_for(self, host: str, port: int = NTP_PORT) -> NtpServerStatus | None:
        """Snapshot of one server, or None if it is not configured."""
        with self._lock:
            for state in self._servers:
                if state.cfg.host == host and state.cfg.port == port:
                    return state.status()
        return None

    # --- Measurement -----------------------------------------------------

    def measure(self) -> bool:
        """Run one cycle over config().sample_servers servers."""
        with self._lock:
            count = self._cfg.sample_servers
        return self.measure_n(count)

    def measure_n(self, servers_to_sample: int) -> bool:
        """Query up to servers_to_sample eligible servers and publish the result.

        Returns:
            True if enough usable samples were collected and the offset
            was published.
        """
        with self._cycle_lock:
            with self._lock:
                cfg = self._cfg
                picked = self._pick_servers_locked(servers_to_sample)
            samples = [self._query_one(state) for state in picked]
            return self._publish(samples, cfg)

    def apply_samples(self, samples: list[NtpSample]) -> bool:
        """Aggregate externally collected samples as if measured now."""
        with self._cycle_lock:
            with self._lock:
                cfg = self._cfg
            return self._publish(list(samples), cfg)

    def _pick_servers_locked(self, servers_to_sample: int) -> list[_ServerState]:
        now = self._monotonic_ms()
        eligible = [state for state in self._servers if now >= state.next_allowed_ms]
        self._rng.shuffle(eligible)
        picked = eligible[: max(servers_to_sample, 0)]
        logger.debug(
            "NTP pool picked %d of %d eligible servers: %s",
            len(picked),
            len(eligible),
            [state.cfg.host for state in picked],
        )
        return picked

    def _query_one(self, state: _ServerState) -> NtpSample:
        cfg = state.cfg
        with self._lock:
            state.next_allowed_ms = self._monotonic_ms() + cfg.min_interval_ms

        sample = NtpSample(
            host=cfg.host,
            port=cfg.port,
            max_delay_us=cfg.max_delay_ms * US_PER_MS if cfg.max_delay_ms > 0 else 0,
        )
        client = self._client_factory(cfg.host, cfg.port)
        is_ok = False
        try:
            is_ok = client.query()
        except (NtpError, OSError) as exc:
            logger.warning("NTP query to %s:%d raised: %s", cfg.host, cfg.port, exc)
            sample.error_code = getattr(exc, "code", 0) or client.last_error_code()

        if sample.error_code == 0:
            sample.error_code = client.last_error_code()
        if sample.error_code == 0 and not is_ok:
            sample.error_code = NtpErrorCode.GENERIC
        sample.is_ok = is_ok
        sample.offset_us = client.offset_us()
        sample.delay_us = client.delay_us()
        sample.stratum = client.stratum()

        self._update_server_state(state, sample)
        return sample

    def _update_server_state(self, state: _ServerState, sample: NtpSample) -> None:
        with self._lock:
            state.query_count += 1
            state.last_error_code = sample.error_code if not sample.is_ok else 0
            state.last_delay_us = sample.delay_us
            state.last_stratum = sample.stratum
            if sample.is_ok:
                state.last_offset_us = sample.offset_us
                state.fail_count = 0
                state.backoff_ms = 0
                return
            state.fail_count += 1
            if state.backoff_ms == 0:
                state.backoff_ms = state.cfg.backoff_initial_ms
            else:
                state.backoff_ms = min(state.cfg.backoff_max_ms, state.backoff_ms * 2)
            state.next_allowed_ms = self._monotonic_ms() + state.backoff_ms
            logger.warning(
                "NTP server %s:%d failed (code %d), backing off %d ms",
                state.cfg.host,
                state.cfg.port,
                sample.error_code,
                state.backoff_ms,
            )

    @staticmethod
    def _is_usable(sample: NtpSample, cfg: NtpPoolConfig) -> bool:
        if not sample.is_ok:
            return False
        if sample.max_delay_us > 0 and sample.delay_us > sample.max_delay_us:
            return False
        if cfg.max_delay_us > 0 and sample.delay_us > cfg.max_delay_us:
            return False
        return True

    def _publish(self, samples: list[NtpSample], cfg: NtpPoolConfig) -> bool:
        usable = [sample for sample in samples if self._is_usable(sample, cfg)]
        if len(usable) < cfg.min_valid_samples or not usable:
            logger.warning(
                "NTP cycle discarded: %d usable samples, %d required",
                len(usable),
                cfg.min_valid_samples,
            )
            with self._lock:
                self._last_samples = samples
            return False

        offsets = [sample.offset_us for sample in usable]
        if cfg.aggregation is Aggregation.BEST_DELAY:
            estimate = best_delay_offset(usable)
        elif cfg.aggregation is Aggregation.MEDIAN_MAD_TRIM:
            estimate = median_mad_trim(offsets)
        else:
            estimate = median(offsets)

        alpha = min(max(cfg.smoothing_alpha, 0.0), 1.0)
        with self._lock:
            if alpha >= 1.0:
                self._offset_us = estimate
            elif alpha > 0.0:
                self._offset_us = int((1.0 - alpha) * self._offset_us + alpha * estimate)
            self._last_samples = samples
            logger.debug(
                "NTP cycle estimate=%dus published=%dus from %d samples",
                estimate,
                self._offset_us,
                len(usable),
            )
        return True


_DEFAULT_HOSTS: tuple[str, ...] = (
    "time.google.com",
    "time1.google.com",
    "time2.google.com",
    "time3.google.com",
    "time4.google.com",
    "time.cloudflare.com",
    "time.facebook.com",
    "time1.facebook.com",
    "time2.facebook.com",
    "time3.facebook.com",
    "time4.facebook.com",
    "time5.facebook.com",
    "time.windows.com",
    "time.apple.com",
    "time1.apple.com",
    "time2.apple.com",
    "time3.apple.com",
    "time4.apple.com",
    "time5.apple.com",
    "time6.apple.com",
    "time7.apple.com",
    "time.euro.apple.com",
    "time-a-g.nist.gov",
    "time-b-g.nist.gov",
    "time-c-g.nist.gov",
    "time-d-g.nist.gov",
    "time-a-wwv.nist.gov",
    "time-b-wwv.nist.gov",
    "time-c-wwv.nist.gov",
    "time-d-wwv.nist.gov",
    "time-a-b.nist.gov",
    "time-b-b.nist.gov",
    "time-c-b.nist.gov",
    "time-d-b.nist.gov",
    "time.nist.gov",
    "utcnist.colorado.edu",
    "utcnist2.colorado.edu",
    "ts1.aco.net",
    "ts2.aco.net",
    "ntp1.net.berkeley.edu",
    "ntp2.net.berkeley.edu",
    "ntp.gsu.edu",
    "tick.usask.ca",
    "tock.usask.ca",
    "ntp.nict.jp",
    "clock.nyc.he.net",
    "clock.sjc.he.net",
    "gbg1.ntp.se",
    "gbg2.ntp.se",
    "mmo1.ntp.se",
    "mmo2.ntp.se",
    "sth1.ntp.se",
    "sth2.ntp.se",
    "svl1.ntp.se",
    "svl2.ntp.se",
    "clock.isc.org",
    "pool.ntp.org",
    "0.pool.ntp.org",
    "1.pool.ntp.org",
    "2.pool.ntp.org",
    "3.pool.ntp.org",
    "europe.pool.ntp.org",
    "asia.pool.ntp.org",
    "north-america.pool.ntp.org",
)


__all__ = [
    "MAD_TRIM_FACTOR",
    "Aggregation",
    "NtpServerConfig",
    "NtpPoolConfig",
    "NtpSample",
    "NtpServerStatus",
    "PoolClient",
    "NtpClientPool",
    "median",
    "median_mad_trim",
    "best_delay_offset",
]
