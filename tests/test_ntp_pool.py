"""Tests for NtpClientPool aggregation, rate limiting and configuration."""

import errno
from dataclasses import FrozenInstanceError, dataclass

import pytest

from timeshield.core.clock import now_realtime_us
from timeshield.errors import NtpError
from timeshield.ntp.packet import NtpErrorCode
from timeshield.ntp.pool import (
    Aggregation,
    NtpClientPool,
    NtpPoolConfig,
    NtpSample,
    NtpServerConfig,
    best_delay_offset,
    median,
    median_mad_trim,
)


@dataclass
class FakeReply:
    is_ok: bool = True
    offset_us: int = 0
    delay_us: int = 0
    stratum: int = 2
    error_code: int = 0
    raises: Exception | None = None


class FakeClient:
    """Answers query() from a FakeReply."""

    def __init__(self, reply: FakeReply) -> None:
        self._reply = reply
        self._is_ok = False

    def query(self) -> bool:
        if self._reply.raises is not None:
            raise self._reply.raises
        self._is_ok = self._reply.is_ok
        return self._is_ok

    def last_error_code(self) -> int:
        return 0 if self._is_ok else self._reply.error_code

    def offset_us(self) -> int:
        return self._reply.offset_us

    def delay_us(self) -> int:
        return self._reply.delay_us if self._is_ok else 0

    def stratum(self) -> int:
        return self._reply.stratum if self._is_ok else -1


class FakeNetwork:
    """Client factory over a host -> FakeReply table that records queries."""

    def __init__(self, replies: dict[str, FakeReply]) -> None:
        self.replies = replies
        self.queried: list[str] = []

    def __call__(self, host: str, port: int) -> FakeClient:
        self.queried.append(host)
        return FakeClient(self.replies[host])


class FakeClock:
    def __init__(self, now_ms: int = 0) -> None:
        self.now_ms = now_ms

    def __call__(self) -> int:
        return self.now_ms


def ok(offset_us: int, delay_us: int = 1000, stratum: int = 2, host: str = "h") -> NtpSample:
    return NtpSample(host, is_ok=True, offset_us=offset_us, delay_us=delay_us, stratum=stratum)


def make_pool(**overrides) -> NtpClientPool:
    config = NtpPoolConfig(rng_seed=42, **overrides)
    return NtpClientPool(config)


class TestAggregationFunctions:
    """Tests for median, median_mad_trim and best_delay_offset."""

    def test_median(self) -> None:
        """Odd counts pick the middle; even counts truncate the mean."""
        assert median([300, 100, 200]) == 200
        assert median([1, 2]) == 1
        assert median([-3, 0]) == -1
        assert median([7]) == 7

    def test_median_mad_trim(self) -> None:
        """Outliers beyond three MADs are dropped before averaging."""
        assert median_mad_trim([100, 105, 100000]) == 102
        assert median_mad_trim([5, 5, 5, 900]) == 5
        assert median_mad_trim([10, 20, 30]) == 20

    def test_best_delay(self) -> None:
        """Smallest delay wins; lower stratum breaks ties."""
        samples = [ok(10, 100_000), ok(5, 300_000)]
        assert best_delay_offset(samples) == 10
        tied = [ok(1, 50, stratum=3), ok(2, 50, stratum=1), ok(3, 50, stratum=1)]
        assert best_delay_offset(tied) == 2
        assert best_delay_offset([]) == 0


class TestApplySamples:
    """Tests for apply_samples aggregation and smoothing."""

    def test_median(self) -> None:
        """Median of three successful samples."""
        pool = make_pool(aggregation=Aggregation.MEDIAN, smoothing_alpha=1.0)
        assert pool.apply_samples([ok(100), ok(200), ok(300)])
        assert pool.offset_us() == 200

    def test_median_mad_trim(self) -> None:
        """The outlier is trimmed and the rest averaged."""
        pool = make_pool(aggregation=Aggregation.MEDIAN_MAD_TRIM)
        assert pool.apply_samples([ok(100), ok(105), ok(100000)])
        assert pool.offset_us() == 102

    def test_best_delay(self) -> None:
        """The fastest sample's offset is published."""
        pool = make_pool(aggregation=Aggregation.BEST_DELAY, min_valid_samples=2)
        assert pool.apply_samples([ok(10, 100_000), ok(5, 300_000)])
        assert pool.offset_us() == 10

    def test_negative_alpha_keeps_offset(self) -> None:
        """Alpha at or below zero publishes without moving the offset."""
        pool = make_pool(min_valid_samples=1, smoothing_alpha=-0.5)
        assert pool.apply_samples([ok(700)])
        assert pool.offset_us() == 0
        assert pool.last_samples()[0].offset_us == 700

    def test_large_alpha_adopts_estimate(self) -> None:
        """Alpha above one clamps to one."""
        pool = make_pool(min_valid_samples=1, smoothing_alpha=2.0)
        assert pool.apply_samples([ok(500)])
        assert pool.offset_us() == 500

    def test_partial_alpha(self) -> None:
        """Alpha between zero and one blends old and new."""
        pool = make_pool(min_valid_samples=1, smoothing_alpha=0.25)
        assert pool.apply_samples([ok(1000)])
        assert pool.offset_us() == 250
        assert pool.apply_samples([ok(1000)])
        assert pool.offset_us() == 437

    def test_insufficient_samples(self) -> None:
        """Too few usable samples leave the offset unchanged."""
        pool = make_pool(min_valid_samples=1)
        assert pool.apply_samples([ok(40)])

        pool.set_config(NtpPoolConfig(min_valid_samples=2))
        failed = NtpSample("b", is_ok=False, error_code=NtpErrorCode.KOD)
        assert not pool.apply_samples([ok(900), failed])
        assert pool.offset_us() == 40
        assert [sample.host for sample in pool.last_samples()] == ["h", "b"]

    def test_empty_cycle(self) -> None:
        """No samples never publishes, even with min_valid_samples 0."""
        pool = make_pool(min_valid_samples=0)
        assert not pool.apply_samples([])
        assert pool.offset_us() == 0

    def test_delay_caps(self) -> None:
        """Samples above the per-sample or pool-wide cap are not used."""
        pool = make_pool(min_valid_samples=1, max_delay_us=15)
        samples = [ok(100, delay_us=20), ok(300, delay_us=10)]
        assert pool.apply_samples(samples)
        assert pool.offset_us() == 300

        capped = ok(900, delay_us=30)
        capped.max_delay_us = 25
        pool.set_config(NtpPoolConfig(min_valid_samples=1))
        assert not pool.apply_samples([capped])
        assert pool.offset_us() == 300

    def test_last_samples_are_copies(self) -> None:
        """Mutating the returned list does not touch pool state."""
        pool = make_pool(min_valid_samples=1)
        pool.apply_samples([ok(100)])
        snapshot = pool.last_samples()
        snapshot[0].offset_us = -1
        snapshot.clear()
        assert pool.last_samples()[0].offset_us == 100


class TestMeasure:
    """Tests for measure and measure_n against fake servers."""

    def three_servers(self) -> tuple[NtpClientPool, FakeNetwork]:
        network = FakeNetwork(
            {
                "a": FakeReply(offset_us=100, delay_us=10),
                "b": FakeReply(offset_us=200, delay_us=20),
                "c": FakeReply(offset_us=300, delay_us=30),
            }
        )
        config = NtpPoolConfig(
            servers=[NtpServerConfig(host) for host in ("a", "b", "c")],
            aggregation=Aggregation.MEDIAN,
            smoothing_alpha=1.0,
            rng_seed=7,
        )
        return NtpClientPool(config, client_factory=network, monotonic_ms=FakeClock()), network

    def test_median_of_three_servers(self) -> None:
        """All three servers are sampled and the median published."""
        pool, network = self.three_servers()
        assert pool.measure()
        assert pool.offset_us() == 200
        assert sorted(network.queried) == ["a", "b", "c"]
        samples = pool.last_samples()
        assert sorted(sample.offset_us for sample in samples) == [100, 200, 300]
        assert all(sample.is_ok and sample.stratum == 2 for sample in samples)
        assert all(sample.max_delay_us == 250_000 for sample in samples)

    def test_measure_n_limits_servers(self) -> None:
        """measure_n queries at most the requested number of servers."""
        pool, network = self.three_servers()
        pool.set_config(NtpPoolConfig(servers=pool.config().servers, min_valid_samples=1))
        assert pool.measure_n(2)
        assert len(network.queried) == 2
        assert len(set(network.queried)) == 2
        assert not pool.measure_n(0)

    def test_same_seed_same_selection(self) -> None:
        """Server selection is reproducible for a fixed seed."""
        picks = []
        for _ in range(2):
            network = FakeNetwork({host: FakeReply() for host in "abcdefgh"})
            config = NtpPoolConfig(
                servers=[NtpServerConfig(host) for host in "abcdefgh"],
                sample_servers=3,
                min_valid_samples=1,
                rng_seed=1234,
            )
            NtpClientPool(config, client_factory=network, monotonic_ms=FakeClock()).measure()
            picks.append(network.queried)
        assert picks[0] == picks[1]
        assert len(picks[0]) == 3

    def test_min_interval(self) -> None:
        """A server is not queried again before its min_interval."""
        clock = FakeClock(1_000)
        network = FakeNetwork({"a": FakeReply(offset_us=5)})
        config = NtpPoolConfig(
            servers=[NtpServerConfig("a", min_interval_ms=500)], min_valid_samples=1
        )
        pool = NtpClientPool(config, client_factory=network, monotonic_ms=clock)
        assert pool.measure()
        clock.now_ms = 1_499
        assert not pool.measure()
        assert pool.last_samples() == []
        clock.now_ms = 1_500
        assert pool.measure()
        assert network.queried == ["a", "a"]

    def test_backoff_doubles_and_resets(self) -> None:
        """Failures back off exponentially up to the cap; success resets."""
        clock = FakeClock(0)
        reply = FakeReply(is_ok=False, error_code=NtpErrorCode.KOD)
        network = FakeNetwork({"a": reply})
        server = NtpServerConfig(
            "a", min_interval_ms=10, backoff_initial_ms=100, backoff_max_ms=250
        )
        pool = NtpClientPool(
            NtpPoolConfig(servers=[server], min_valid_samples=1),
            client_factory=network,
            monotonic_ms=clock,
        )

        assert not pool.measure()
        assert pool.last_samples()[0].error_code == NtpErrorCode.KOD

        expected_waits = [100, 200, 250, 250]
        for wait in expected_waits:
            clock.now_ms += wait - 1
            queried = len(network.queried)
            pool.measure()
            assert len(network.queried) == queried
            clock.now_ms += 1
            pool.measure()
            assert len(network.queried) == queried + 1

        reply.is_ok = True
        clock.now_ms += 250
        assert pool.measure()
        reply.is_ok = False
        clock.now_ms += 10
        assert not pool.measure()
        clock.now_ms += 100
        pool.measure()
        assert len(network.queried) == len(expected_waits) + 4

    def test_client_exception(self) -> None:
        """A client raising NtpError records its code as a failed sample."""
        network = FakeNetwork({"a": FakeReply(raises=NtpError(errno.ETIMEDOUT, "timed out"))})
        pool = NtpClientPool(
            NtpPoolConfig(servers=[NtpServerConfig("a")], min_valid_samples=1),
            client_factory=network,
            monotonic_ms=FakeClock(),
        )
        assert not pool.measure()
        sample = pool.last_samples()[0]
        assert not sample.is_ok
        assert sample.error_code == errno.ETIMEDOUT

    def test_failure_without_code(self) -> None:
        """A failed query with no error code is reported as GENERIC."""
        network = FakeNetwork({"a": FakeReply(is_ok=False)})
        pool = NtpClientPool(
            NtpPoolConfig(servers=[NtpServerConfig("a")], min_valid_samples=1),
            client_factory=network,
            monotonic_ms=FakeClock(),
        )
        assert not pool.measure()
        assert pool.last_samples()[0].error_code == NtpErrorCode.GENERIC


class TestServerStatus:
    """Tests for the per-server status readers."""

    def test_status_after_success_and_failure(self) -> None:
        """Last delay, stratum, offset and error code are recorded per server."""
        clock = FakeClock(1_000)
        good = FakeReply(offset_us=150, delay_us=4_000, stratum=1)
        bad = FakeReply(is_ok=False, error_code=NtpErrorCode.BAD_STRATUM)
        network = FakeNetwork({"good": good, "bad": bad})
        config = NtpPoolConfig(
            servers=[
                NtpServerConfig("good", min_interval_ms=500),
                NtpServerConfig("bad", backoff_initial_ms=2_000),
            ],
            min_valid_samples=1,
        )
        pool = NtpClientPool(config, client_factory=network, monotonic_ms=clock)
        assert pool.measure()

        good_status, bad_status = pool.server_status()
        assert good_status.host == "good"
        assert good_status.query_count == 1
        assert good_status.last_error_code == 0
        assert good_status.last_offset_us == 150
        assert good_status.last_delay_us == 4_000
        assert good_status.last_stratum == 1
        assert good_status.fail_count == 0
        assert good_status.next_allowed_ms == 1_500

        assert bad_status.fail_count == 1
        assert bad_status.last_error_code == NtpErrorCode.BAD_STRATUM
        assert bad_status.last_stratum == -1
        assert bad_status.backoff_ms == 2_000
        assert bad_status.next_allowed_ms == 3_000

    def test_status_for_host(self) -> None:
        """Lookups by host and port; unknown servers give None."""
        pool = make_pool(servers=[NtpServerConfig("a"), NtpServerConfig("a", port=1123)])
        status = pool.server_status_for("a", 1123)
        assert status is not None
        assert status.port == 1123
        assert status.query_count == 0
        assert status.last_stratum == -1
        assert pool.server_status_for("missing") is None

    def test_success_keeps_last_offset_on_failure(self) -> None:
        """A failed query does not overwrite the last good offset."""
        clock = FakeClock(0)
        reply = FakeReply(offset_us=75)
        network = FakeNetwork({"a": reply})
        config = NtpPoolConfig(
            servers=[NtpServerConfig("a", min_interval_ms=10)], min_valid_samples=1
        )
        pool = NtpClientPool(config, client_factory=network, monotonic_ms=clock)
        assert pool.measure()
        reply.is_ok = False
        reply.error_code = NtpErrorCode.KOD
        clock.now_ms = 10
        assert not pool.measure()
        status = pool.server_status_for("a")
        assert status is not None
        assert status.last_offset_us == 75
        assert status.last_error_code == NtpErrorCode.KOD
        assert status.query_count == 2

    def test_status_is_frozen(self) -> None:
        """Snapshots cannot be modified."""
        pool = make_pool(servers=[NtpServerConfig("a")])
        status = pool.server_status()[0]
        with pytest.raises(FrozenInstanceError):
            status.fail_count = 5  # type: ignore[misc]


class TestServerSet:
    """Tests for server-set and configuration management."""

    def test_add_and_clear(self) -> None:
        """add_server appends; clear_servers empties."""
        pool = make_pool()
        pool.add_server(NtpServerConfig("a"))
        pool.add_server(NtpServerConfig("b", port=1123))
        assert [(s.host, s.port) for s in pool.config().servers] == [("a", 123), ("b", 1123)]
        pool.clear_servers()
        assert pool.config().servers == []

    def test_set_servers(self) -> None:
        """set_servers replaces the set."""
        pool = make_pool(servers=[NtpServerConfig("old")])
        pool.set_servers([NtpServerConfig("new")])
        assert [s.host for s in pool.config().servers] == ["new"]

    def test_config_round_trip(self) -> None:
        """set_config replaces settings; config returns a copy."""
        pool = make_pool()
        config = NtpPoolConfig(
            servers=[NtpServerConfig("x")],
            sample_servers=2,
            aggregation=Aggregation.BEST_DELAY,
            max_delay_us=5_000,
        )
        pool.set_config(config)
        current = pool.config()
        assert current == config
        current.servers.append(NtpServerConfig("y"))
        assert [s.host for s in pool.config().servers] == ["x"]

    def test_default_servers(self) -> None:
        """The default list is non-empty with conservative limits."""
        servers = NtpClientPool.build_default_servers()
        assert len(servers) > 10
        assert len({s.host for s in servers}) == len(servers)
        for server in servers:
            assert server.port == 123
            assert server.min_interval_ms == 60_000
            assert server.max_delay_ms == 500
            assert server.backoff_initial_ms == 120_000
            assert server.backoff_max_ms == 600_000

        pool = make_pool()
        pool.set_default_servers()
        assert pool.config().servers == servers

    def test_utc_time(self) -> None:
        """Corrected readers add the published offset to the wall clock."""
        pool = make_pool(min_valid_samples=1)
        pool.apply_samples([ok(3_600_000_000)])
        before = now_realtime_us()
        value = pool.utc_time_us()
        after = now_realtime_us()
        assert before + 3_600_000_000 <= value <= after + 3_600_000_000
        assert pool.utc_time_ms() >= (before + 3_600_000_000) // 1000


@pytest.mark.parametrize("alpha", [0.0, -1.0])
def test_non_positive_alpha_still_succeeds(alpha: float) -> None:
    """The cycle counts as successful even though the offset stays."""
    pool = make_pool(min_valid_samples=1, smoothing_alpha=alpha)
    assert pool.apply_samples([ok(123)])
    assert pool.offset_us() == 0
