"""UDP transport used by the NTP client.

A transport performs one request/response datagram exchange. The client
depends only on the UdpTransport protocol so tests can substitute a
fake that returns canned replies.
"""

from __future__ import annotations

import errno
import logging
import socket
from typing import Protocol

from timeshield._internal.constants import MS_PER_SEC
from timeshield.errors import NtpError

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT_MS: int = 5000

_RECV_BUFFER_SIZE = 512


class UdpTransport(Protocol):
    """One blocking UDP request/response exchange."""

    def transact(
        self, host: str, port: int, payload: bytes, recv_size: int, timeout_ms: int
    ) -> bytes:
        """Send payload to host:port and return exactly recv_size reply bytes.

        Raises:
            NtpError: With the transport's error code on failure.
        """
        ...


class SocketUdpTransport:
    """UdpTransport over the standard socket module.

    Resolves host with getaddrinfo, tries each address in turn and maps
    socket failures to their errno values.
    """

    def transact(
        self, host: str, port: int, payload: bytes, recv_size: int, timeout_ms: int
    ) -> bytes:
        try:
            infos = socket.getaddrinfo(host, port, 0, socket.SOCK_DGRAM)
        except socket.gaierror as exc:
            logger.debug("resolving %s:%d failed: %s", host, port, exc)
            raise NtpError(exc.errno or -1, f"cannot resolve {host}: {exc}") from exc

        last_error: NtpError | None = None
        for family, socktype, proto, _, sockaddr in infos:
            try:
                return self._exchange(family, socktype, proto, sockaddr, payload, recv_size, timeout_ms)
            except NtpError as exc:
                logger.debug("exchange with %s via %s failed: %s", host, sockaddr, exc)
                last_error = exc

        if last_error is None:
            last_error = NtpError(-1, f"no usable address for {host}")
        raise last_error

    @staticmethod
    def _exchange(
        family: int,
        socktype: int,
        proto: int,
        sockaddr: tuple,
        payload: bytes,
        recv_size: int,
        timeout_ms: int,
    ) -> bytes:
        try:
            with socket.socket(family, socktype, proto) as sock:
                sock.settimeout(max(timeout_ms, 0) / MS_PER_SEC)
                sent = sock.sendto(payload, sockaddr)
                if sent != len(payload):
                    raise NtpError(-1, f"short send: {sent} of {len(payload)} bytes")
                data, _ = sock.recvfrom(max(recv_size, _RECV_BUFFER_SIZE))
        except socket.timeout as exc:
            raise NtpError(errno.ETIMEDOUT, "NTP request timed out") from exc
        except OSError as exc:
            raise NtpError(exc.errno or -1, f"socket error: {exc}") from exc

        if len(data) != recv_size:
            raise NtpError(-1, f"expected {recv_size} reply bytes, got {len(data)}")
        return data


__all__ = ["DEFAULT_TIMEOUT_MS", "UdpTransport", "SocketUdpTransport"]
