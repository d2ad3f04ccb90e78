"""Single-server NTP client.

NtpClientCore runs one exchange against a transport and returns an
NtpResult that carries either the measurement or the error code.
NtpClient wraps it with the stateful reader API: query() returns a
bool, the last measurement stays readable afterwards and the error code
of the most recent query on the current thread is kept in a
thread-local slot.

Examples:
    >>> client = NtpClient("time.example.org")
    >>> client.success()
    False
    >>> client.stratum()
    -1
"""

from __future__ import annotations

import logging
import threading
from dataclasses import dataclass
from typing import Callable

from timeshield._internal.constants import US_PER_MS, US_PER_SEC
from timeshield._internal.floor_math import trunc_div
from timeshield.core.clock import now_realtime_us
from timeshield.errors import NtpError
from timeshield.ntp.packet import (
    NTP_PORT,
    PACKET_SIZE,
    NtpErrorCode,
    NtpPacket,
    build_client_packet,
    parse_server_packet,
)
from timeshield.ntp.transport import DEFAULT_TIMEOUT_MS, SocketUdpTransport, UdpTransport

logger = logging.getLogger(__name__)

DEFAULT_NTP_HOST: str = "pool.ntp.org"


@dataclass(frozen=True)
class NtpResult:
    """Outcome of one NTP exchange.

    Attributes:
        ok: True if the response passed validation.
        error_code: 0 on success, an NtpErrorCode value or a transport code.
        offset_us: Server clock minus local clock, in microseconds.
        delay_us: Round-trip network delay, in microseconds.
        stratum: Server stratum, -1 when no valid response was received.
    """

    ok: bool
    error_code: int = 0
    offset_us: int = 0
    delay_us: int = 0
    stratum: int = -1

    @classmethod
    def failure(cls, error_code: int) -> NtpResult:
        return cls(ok=False, error_code=error_code or NtpErrorCode.GENERIC)


class NtpClientCore:
    """Runs a single NTP request/response exchange.

    The core does not retry; one call performs exactly one transaction.

    Args:
        clock: Wall-clock reader in microseconds since the epoch. A
            negative reading means the clock is unavailable.
    """

    __slots__ = ("_clock",)

    def __init__(self, clock: Callable[[], int] = now_realtime_us) -> None:
        self._clock = clock

    def query(
        self,
        transport: UdpTransport,
        host: str,
        port: int = NTP_PORT,
        timeout_ms: int = DEFAULT_TIMEOUT_MS,
    ) -> NtpResult:
        """Query host:port once and return the measurement or the error."""
        now_us = self._clock()
        if now_us < 0:
            return NtpResult.failure(NtpErrorCode.GENERIC)

        request = build_client_packet(now_us)
        try:
            reply = transport.transact(host, port, request.to_bytes(), PACKET_SIZE, timeout_ms)
        except NtpError as exc:
            logger.debug("NTP transport to %s:%d failed: %s", host, port, exc)
            return NtpResult.failure(exc.code)

        # Arrival is sampled after the reply is in hand
        arrival_us = self._clock()
        if arrival_us < 0:
            return NtpResult.failure(NtpErrorCode.GENERIC)

        try:
            measurement = parse_server_packet(NtpPacket.from_bytes(reply), arrival_us)
        except NtpError as exc:
            logger.warning("NTP response from %s:%d rejected: %s", host, port, exc)
            return NtpResult.failure(exc.code)

        logger.debug(
            "NTP %s:%d offset=%dus delay=%dus stratum=%d",
            host,
            port,
            measurement.offset_us,
            measurement.delay_us,
            measurement.stratum,
        )
        return NtpResult(
            ok=True,
            offset_us=measurement.offset_us,
            delay_us=measurement.delay_us,
            stratum=measurement.stratum,
        )


_last_error = threading.local()


def _set_last_error_code(code: int) -> None:
    _last_error.code = code


def _get_last_error_code() -> int:
    return getattr(_last_error, "code", 0)


class NtpClient:
    """Stateful client for one NTP server.

    Calls to query() on the same instance must be serialized by the
    caller. The offset of the last successful query is kept across
    failed queries; delay and stratum are reset on failure.

    Args:
        host: Server host name or address.
        port: Server UDP port.
        transport: Datagram transport; defaults to SocketUdpTransport.
        timeout_ms: Receive timeout for one exchange.
        clock: Wall-clock reader in microseconds since the epoch.
    """

    def __init__(
        self,
        host: str = DEFAULT_NTP_HOST,
        port: int = NTP_PORT,
        transport: UdpTransport | None = None,
        timeout_ms: int = DEFAULT_TIMEOUT_MS,
        clock: Callable[[], int] = now_realtime_us,
    ) -> None:
        self._host = host
        self._port = port
        self._transport = transport if transport is not None else SocketUdpTransport()
        self._timeout_ms = timeout_ms
        self._clock = clock
        self._core = NtpClientCore(clock)
        self._offset_us = 0
        self._delay_us = 0
        self._stratum = -1
        self._is_success = False

    @property
    def host(self) -> str:
        return self._host

    @property
    def port(self) -> int:
        return self._port

    def query(self) -> bool:
        """Run one exchange and update the stored measurement.

        Returns:
            True on success. On failure, last_error_code() holds the reason.
        """
        _set_last_error_code(0)
        result = self._core.query(self._transport, self._host, self._port, self._timeout_ms)
        _set_last_error_code(result.error_code)
        if not result.ok:
            self._delay_us = 0
            self._stratum = -1
            self._is_success = False
            return False

        self._offset_us = result.offset_us
        self._delay_us = result.delay_us
        self._stratum = result.stratum
        self._is_success = True
        return True

    def success(self) -> bool:
        return self._is_success

    def offset_us(self) -> int:
        return self._offset_us

    def delay_us(self) -> int:
        return self._delay_us

    def stratum(self) -> int:
        return self._stratum

    def utc_time_us(self) -> int:
        """Local wall clock corrected by the measured offset, in microseconds."""
        return self._clock() + self._offset_us

    def utc_time_ms(self) -> int:
        return trunc_div(self.utc_time_us(), US_PER_MS)

    def utc_time_sec(self) -> int:
        return trunc_div(self.utc_time_us(), US_PER_SEC)

    def last_error_code(self) -> int:
        """Error code of the most recent query() on the calling thread."""
        return _get_last_error_code()

    def __repr__(self) -> str:
        return f"NtpClient({self._host!r}, {self._port})"


__all__ = ["DEFAULT_NTP_HOST", "NtpResult", "NtpClientCore", "NtpClient"]
