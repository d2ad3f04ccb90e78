"""Tests for the NTP packet codec, response validation and single-server client."""

import errno
import random
import threading

import pytest

from timeshield.errors import NtpError
from timeshield.ntp.client import NtpClient, NtpClientCore, NtpResult
from timeshield.ntp.packet import (
    PACKET_SIZE,
    NtpErrorCode,
    NtpPacket,
    build_client_packet,
    compute_offset_delay,
    ntp_to_unix_us,
    parse_server_packet,
    unix_us_to_ntp,
)

BASE_US = 1_700_000_000_000_000


class FakeTransport:
    """Returns a canned reply or raises a canned error."""

    def __init__(self, reply: NtpPacket | None = None, error: Exception | None = None) -> None:
        self.reply = reply
        self.error = error
        self.requests: list[bytes] = []

    def transact(
        self, host: str, port: int, payload: bytes, recv_size: int, timeout_ms: int
    ) -> bytes:
        assert len(payload) == PACKET_SIZE
        assert recv_size == PACKET_SIZE
        self.requests.append(payload)
        if self.error is not None:
            raise self.error
        assert self.reply is not None
        return self.reply.to_bytes()


def sequence_clock(*readings: int):
    values = iter(readings)
    return lambda: next(values)


def build_base_packet(base_us: int) -> NtpPacket:
    """A valid stratum-2 reply with t1, t2, t3 just before base_us."""
    orig_sec, orig_frac = unix_us_to_ntp(base_us - 4000)
    recv_sec, recv_frac = unix_us_to_ntp(base_us - 2000)
    tx_sec, tx_frac = unix_us_to_ntp(base_us - 1000)
    return NtpPacket(
        li_vn_mode=NtpPacket.make_li_vn_mode(0, 3, 4),
        stratum=2,
        orig_ts_sec=orig_sec,
        orig_ts_frac=orig_frac,
        recv_ts_sec=recv_sec,
        recv_ts_frac=recv_frac,
        tx_ts_sec=tx_sec,
        tx_ts_frac=tx_frac,
    )


def query_core(packet: NtpPacket, clock=None) -> NtpResult:
    core = NtpClientCore(clock if clock is not None else (lambda: BASE_US))
    return core.query(FakeTransport(packet), "example.com", 123, 5000)


class TestTimestampConversion:
    """Tests for NTP <-> Unix timestamp conversion."""

    def test_known_values(self) -> None:
        """Half a second is fraction 2^31."""
        assert unix_us_to_ntp(0) == (2208988800, 0)
        assert unix_us_to_ntp(500_000) == (2208988800, 2147483648)
        assert ntp_to_unix_us(2208988801, 2147483648) == 1_500_000
        assert ntp_to_unix_us(2208988800, 0) == 0

    def test_before_1970(self) -> None:
        """Instants before the Unix epoch are rejected."""
        assert ntp_to_unix_us(0, 0) is None
        assert ntp_to_unix_us(2208988799, 0xFFFFFFFF) is None

    def test_exact_fractions(self) -> None:
        """Multiples of 15625 us convert both ways without loss."""
        for us in (0, 15_625, 500_000, 984_375):
            sec, frac = unix_us_to_ntp(BASE_US + us)
            assert ntp_to_unix_us(sec, frac) == BASE_US + us

    def test_truncation_loses_at_most_one_us(self, rng: random.Random) -> None:
        """Converting back floors, never rounding up."""
        for _ in range(2_000):
            value = rng.randint(0, 2_000_000_000_000_000)
            back = ntp_to_unix_us(*unix_us_to_ntp(value))
            assert back is not None
            assert value - 1 <= back <= value


class TestNtpPacket:
    """Tests for the 48-byte header codec."""

    def test_li_vn_mode(self) -> None:
        """The first byte packs leap indicator, version and mode."""
        assert NtpPacket.make_li_vn_mode(0, 3, 3) == 27
        packet = NtpPacket(li_vn_mode=NtpPacket.make_li_vn_mode(3, 4, 4))
        assert (packet.leap_indicator, packet.version, packet.mode) == (3, 4, 4)

    def test_bytes_round_trip(self) -> None:
        """Encoding is network order and decodes to the same fields."""
        packet = build_base_packet(BASE_US)
        packet.precision = -20
        packet.ref_id = 0x47505300
        data = packet.to_bytes()
        assert len(data) == PACKET_SIZE
        assert data[0] == 0x1C
        assert data[1] == 2
        assert NtpPacket.from_bytes(data) == packet

    def test_wrong_size(self) -> None:
        """Short or long buffers are rejected."""
        with pytest.raises(NtpError, match="must be 48 bytes, got 47") as exc_info:
            NtpPacket.from_bytes(bytes(47))
        assert exc_info.value.code == NtpErrorCode.GENERIC

    def test_client_request(self) -> None:
        """Version 3 client mode carrying only the transmit timestamp."""
        packet = build_client_packet(BASE_US + 500_000)
        assert (packet.leap_indicator, packet.version, packet.mode) == (0, 3, 3)
        assert packet.stratum == 0
        assert packet.orig_ts_sec == packet.recv_ts_sec == packet.ref_ts_sec == 0
        assert (packet.tx_ts_sec, packet.tx_ts_frac) == unix_us_to_ntp(BASE_US + 500_000)


class TestOffsetDelay:
    """Tests for the RFC 5905 offset and delay formulas."""

    def test_doc_example(self) -> None:
        """A server 1.5 ms ahead with zero network delay."""
        assert compute_offset_delay(0, 1500, 2500, 1000) == (1500, 0)

    def test_offset_truncates_toward_zero(self) -> None:
        """Odd sums truncate rather than floor."""
        assert compute_offset_delay(0, 0, 0, 1)[0] == 0
        assert compute_offset_delay(1, 0, 0, 0)[0] == 0
        assert compute_offset_delay(0, 3, 3, 0)[0] == 3

    def test_perfect_sync(self, rng: random.Random) -> None:
        """Symmetric paths between synchronized clocks give zero offset."""
        for _ in range(1_000):
            t1 = rng.randint(0, 10**15)
            one_way = rng.randint(0, 10**6)
            processing = rng.randint(0, 10**5)
            t2 = t1 + one_way
            t3 = t2 + processing
            t4 = t3 + one_way
            offset, delay = compute_offset_delay(t1, t2, t3, t4)
            assert offset == 0
            assert delay == (t4 - t1) - (t3 - t2) == 2 * one_way

    def test_skewed_clock(self, rng: random.Random) -> None:
        """A constant server skew is recovered exactly."""
        for _ in range(1_000):
            skew = rng.randint(-10**9, 10**9)
            t1 = rng.randint(0, 10**15)
            one_way = rng.randint(0, 10**6)
            t2 = t1 + one_way + skew
            t3 = t2 + 250
            t4 = t3 - skew + one_way
            assert compute_offset_delay(t1, t2, t3, t4) == (skew, 2 * one_way)


class TestParseServerPacket:
    """Tests for response validation order and error codes."""

    def test_valid_reply(self) -> None:
        """Exact offset and delay from lossless timestamps."""
        orig = unix_us_to_ntp(BASE_US)
        recv = unix_us_to_ntp(BASE_US + 31_250)
        tx = unix_us_to_ntp(BASE_US + 46_875)
        packet = NtpPacket(
            li_vn_mode=NtpPacket.make_li_vn_mode(0, 4, 4),
            stratum=1,
            orig_ts_sec=orig[0],
            orig_ts_frac=orig[1],
            recv_ts_sec=recv[0],
            recv_ts_frac=recv[1],
            tx_ts_sec=tx[0],
            tx_ts_frac=tx[1],
        )
        measurement = parse_server_packet(packet, BASE_US + 62_500)
        assert measurement.offset_us == 7812
        assert measurement.delay_us == 46_875
        assert measurement.stratum == 1

    @pytest.mark.parametrize(
        "li,vn,mode,stratum,code",
        [
            (0, 3, 3, 2, NtpErrorCode.BAD_MODE),
            (3, 0, 5, 0, NtpErrorCode.BAD_MODE),
            (0, 0, 4, 2, NtpErrorCode.BAD_VERSION),
            (0, 5, 4, 2, NtpErrorCode.BAD_VERSION),
            (3, 3, 4, 2, NtpErrorCode.BAD_LI),
            (3, 3, 4, 0, NtpErrorCode.BAD_LI),
            (0, 3, 4, 0, NtpErrorCode.KOD),
            (0, 3, 4, 16, NtpErrorCode.BAD_STRATUM),
            (0, 4, 4, 255, NtpErrorCode.BAD_STRATUM),
        ],
    )
    def test_header_checks(self, li: int, vn: int, mode: int, stratum: int, code: int) -> None:
        """The first failed header check decides the code."""
        packet = build_base_packet(BASE_US)
        packet.li_vn_mode = NtpPacket.make_li_vn_mode(li, vn, mode)
        packet.stratum = stratum
        with pytest.raises(NtpError) as exc_info:
            parse_server_packet(packet, BASE_US)
        assert exc_info.value.code == code

    def test_zero_originate(self) -> None:
        """A timestamp before 1970 is BAD_TS."""
        packet = build_base_packet(BASE_US)
        packet.orig_ts_sec = 0
        packet.orig_ts_frac = 0
        with pytest.raises(NtpError, match="originate") as exc_info:
            parse_server_packet(packet, BASE_US)
        assert exc_info.value.code == NtpErrorCode.BAD_TS

    def test_transmit_before_receive(self) -> None:
        """Server transmit earlier than server receive is BAD_TS."""
        packet = build_base_packet(BASE_US)
        packet.tx_ts_sec, packet.tx_ts_frac = unix_us_to_ntp(BASE_US - 3000)
        with pytest.raises(NtpError) as exc_info:
            parse_server_packet(packet, BASE_US)
        assert exc_info.value.code == NtpErrorCode.BAD_TS

    def test_negative_delay(self) -> None:
        """Arrival before originate plus server time is BAD_TS."""
        packet = build_base_packet(BASE_US)
        with pytest.raises(NtpError, match="negative round-trip delay") as exc_info:
            parse_server_packet(packet, BASE_US - 10_000)
        assert exc_info.value.code == NtpErrorCode.BAD_TS


class TestNtpClientCore:
    """Tests for NtpClientCore.query with a fake transport."""

    def test_valid_response(self) -> None:
        """A synthetic stratum-2 reply yields a usable sample."""
        result = query_core(build_base_packet(BASE_US))
        assert result.ok
        assert result.error_code == 0
        assert result.stratum == 2
        assert result.delay_us >= 0
        assert abs(result.offset_us - 500) <= 1

    def test_request_bytes(self) -> None:
        """The request carries the clock reading as transmit timestamp."""
        transport = FakeTransport(build_base_packet(BASE_US))
        NtpClientCore(lambda: BASE_US).query(transport, "example.com")
        request = NtpPacket.from_bytes(transport.requests[0])
        assert (request.version, request.mode) == (3, 3)
        assert ntp_to_unix_us(request.tx_ts_sec, request.tx_ts_frac) == BASE_US

    @pytest.mark.parametrize(
        "li,vn,mode,stratum,code",
        [
            (0, 3, 3, 2, NtpErrorCode.BAD_MODE),
            (0, 0, 4, 2, NtpErrorCode.BAD_VERSION),
            (3, 3, 4, 2, NtpErrorCode.BAD_LI),
            (0, 3, 4, 0, NtpErrorCode.KOD),
            (0, 3, 4, 16, NtpErrorCode.BAD_STRATUM),
        ],
    )
    def test_rejected_response(self, li: int, vn: int, mode: int, stratum: int, code: int) -> None:
        """Validation failures become error results."""
        packet = build_base_packet(BASE_US)
        packet.li_vn_mode = NtpPacket.make_li_vn_mode(li, vn, mode)
        packet.stratum = stratum
        result = query_core(packet)
        assert not result.ok
        assert result.error_code == code
        assert result.stratum == -1

    def test_bad_timestamps(self) -> None:
        """Zero originate and arrival in the past both report BAD_TS."""
        packet = build_base_packet(BASE_US)
        packet.orig_ts_sec = 0
        assert query_core(packet).error_code == NtpErrorCode.BAD_TS

        result = query_core(build_base_packet(BASE_US), sequence_clock(BASE_US, BASE_US - 60_000_000))
        assert result.error_code == NtpErrorCode.BAD_TS

    def test_transport_error_passes_through(self) -> None:
        """Transport codes are reported unchanged."""
        core = NtpClientCore(lambda: BASE_US)
        transport = FakeTransport(error=NtpError(errno.ETIMEDOUT, "timed out"))
        result = core.query(transport, "example.com")
        assert not result.ok
        assert result.error_code == errno.ETIMEDOUT

    def test_transport_error_without_code(self) -> None:
        """A transport failure with code 0 becomes GENERIC."""
        core = NtpClientCore(lambda: BASE_US)
        result = core.query(FakeTransport(error=NtpError(0, "failed")), "example.com")
        assert result.error_code == NtpErrorCode.GENERIC

    def test_clock_unavailable(self) -> None:
        """A negative clock reading fails before any I/O."""
        transport = FakeTransport(build_base_packet(BASE_US))
        result = NtpClientCore(lambda: -1).query(transport, "example.com")
        assert result.error_code == NtpErrorCode.GENERIC
        assert transport.requests == []

        result = NtpClientCore(sequence_clock(BASE_US, -1)).query(transport, "example.com")
        assert result.error_code == NtpErrorCode.GENERIC


class TestNtpClient:
    """Tests for the stateful NtpClient."""

    def test_initial_state(self) -> None:
        """No measurement before the first query."""
        client = NtpClient("example.com", transport=FakeTransport())
        assert not client.success()
        assert client.stratum() == -1
        assert client.offset_us() == 0
        assert client.host == "example.com"
        assert client.port == 123
        assert repr(client) == "NtpClient('example.com', 123)"

    def test_success_then_failure(self) -> None:
        """The offset survives a failed query; delay and stratum reset."""
        transport = FakeTransport(build_base_packet(BASE_US))
        client = NtpClient("example.com", transport=transport, clock=lambda: BASE_US)
        assert client.query()
        assert client.success()
        assert client.last_error_code() == 0
        assert client.stratum() == 2
        offset = client.offset_us()
        assert client.utc_time_us() == BASE_US + offset

        transport.reply.stratum = 0
        assert not client.query()
        assert not client.success()
        assert client.last_error_code() == NtpErrorCode.KOD
        assert client.offset_us() == offset
        assert client.delay_us() == 0
        assert client.stratum() == -1

    def test_utc_time_units(self) -> None:
        """Millisecond and second readers truncate the microsecond value."""
        client = NtpClient("example.com", transport=FakeTransport(), clock=lambda: 1_234_567)
        assert client.utc_time_ms() == 1234
        assert client.utc_time_sec() == 1

    def test_last_error_code_is_per_thread(self) -> None:
        """Another thread does not see this thread's error code."""
        packet = build_base_packet(BASE_US)
        packet.li_vn_mode = NtpPacket.make_li_vn_mode(0, 3, 3)
        client = NtpClient("example.com", transport=FakeTransport(packet), clock=lambda: BASE_US)
        assert not client.query()
        assert client.last_error_code() == NtpErrorCode.BAD_MODE

        seen: list[int] = []
        worker = threading.Thread(target=lambda: seen.append(client.last_error_code()))
        worker.start()
        worker.join()
        assert seen == [0]
        assert client.last_error_code() == NtpErrorCode.BAD_MODE
