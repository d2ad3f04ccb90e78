"""NTP packet codec and response validation.

This module provides the 48-byte NTP v3/v4 header used by SNTP clients,
conversion between NTP timestamps and Unix microseconds, the client
request builder and the server response validator.

A server response is checked in a fixed order and the first failed
check decides the error code:

    1. mode must be 4 (server)                        BAD_MODE
    2. version must be 3 or 4                         BAD_VERSION
    3. leap indicator must not be 3 (unsynchronized)  BAD_LI
    4. stratum must not be 0 (kiss-of-death)          KOD
    5. stratum must be below 16                       BAD_STRATUM
    6. every timestamp must be at or after 1970       BAD_TS
    7. transmit must not precede receive              BAD_TS
    8. the round-trip delay must not be negative      BAD_TS

Examples:
    >>> packet = build_client_packet(1_000_000)
    >>> len(packet.to_bytes())
    48
    >>> packet.mode, packet.version
    (3, 3)
"""

from __future__ import annotations

import struct
from dataclasses import dataclass
from enum import IntEnum
from typing import NamedTuple

from timeshield._internal.constants import NTP_TIMESTAMP_DELTA, US_PER_SEC
from timeshield._internal.floor_math import trunc_div
from timeshield.errors import NtpError

PACKET_SIZE: int = 48
NTP_PORT: int = 123

MODE_CLIENT: int = 3
MODE_SERVER: int = 4
CLIENT_VERSION: int = 3
LEAP_ALARM: int = 3
MAX_STRATUM: int = 16

_FRACTION_SCALE = 1 << 32
_PACKET_STRUCT = struct.Struct("!BBBb11I")


class NtpErrorCode(IntEnum):
    """Error codes reported by the NTP client.

    Transport failures are reported with their own (positive or
    platform-specific) codes and do not appear here.
    """

    OK = 0
    GENERIC = -1
    BAD_MODE = -2
    BAD_VERSION = -3
    BAD_LI = -4
    KOD = -5
    BAD_STRATUM = -6
    BAD_TS = -7


class NtpMeasurement(NamedTuple):
    """Clock offset and round-trip delay derived from one exchange."""

    offset_us: int
    delay_us: int
    stratum: int


@dataclass
class NtpPacket:
    """NTP header fields in host order.

    Timestamps are kept as raw (seconds, fraction) pairs of the NTP era
    starting 1900-01-01.
    """

    li_vn_mode: int = 0
    stratum: int = 0
    poll: int = 0
    precision: int = 0
    root_delay: int = 0
    root_dispersion: int = 0
    ref_id: int = 0
    ref_ts_sec: int = 0
    ref_ts_frac: int = 0
    orig_ts_sec: int = 0
    orig_ts_frac: int = 0
    recv_ts_sec: int = 0
    recv_ts_frac: int = 0
    tx_ts_sec: int = 0
    tx_ts_frac: int = 0

    @property
    def leap_indicator(self) -> int:
        return (self.li_vn_mode >> 6) & 0x3

    @property
    def version(self) -> int:
        return (self.li_vn_mode >> 3) & 0x7

    @property
    def mode(self) -> int:
        return self.li_vn_mode & 0x7

    @staticmethod
    def make_li_vn_mode(leap_indicator: int, version: int, mode: int) -> int:
        """Pack the first header byte.

        Examples:
            >>> NtpPacket.make_li_vn_mode(0, 3, 3)
            27
        """
        return ((leap_indicator & 0x3) << 6) | ((version & 0x7) << 3) | (mode & 0x7)

    def to_bytes(self) -> bytes:
        """Encode the header in network byte order."""
        return _PACKET_STRUCT.pack(
            self.li_vn_mode,
            self.stratum,
            self.poll,
            self.precision,
            self.root_delay,
            self.root_dispersion,
            self.ref_id,
            self.ref_ts_sec,
            self.ref_ts_frac,
            self.orig_ts_sec,
            self.orig_ts_frac,
            self.recv_ts_sec,
            self.recv_ts_frac,
            self.tx_ts_sec,
            self.tx_ts_frac,
        )

    @classmethod
    def from_bytes(cls, data: bytes) -> NtpPacket:
        """Decode a header received from the network.

        Raises:
            NtpError: With code GENERIC if data is not exactly 48 bytes.
        """
        if len(data) != PACKET_SIZE:
            raise NtpError(
                NtpErrorCode.GENERIC,
                f"NTP packet must be {PACKET_SIZE} bytes, got {len(data)}",
            )
        return cls(*_PACKET_STRUCT.unpack(data))


def unix_us_to_ntp(unix_us: int) -> tuple[int, int]:
    """Convert Unix microseconds to an NTP (seconds, fraction) pair.

    Examples:
        >>> unix_us_to_ntp(500_000)
        (2208988800, 2147483648)
    """
    sec = unix_us // US_PER_SEC + NTP_TIMESTAMP_DELTA
    frac = ((unix_us % US_PER_SEC) * _FRACTION_SCALE) // US_PER_SEC
    return sec & 0xFFFFFFFF, frac & 0xFFFFFFFF


def ntp_to_unix_us(sec: int, frac: int) -> int | None:
    """Convert an NTP (seconds, fraction) pair to Unix microseconds.

    Returns:
        Microseconds since 1970-01-01, or None for an instant before 1970.

    Examples:
        >>> ntp_to_unix_us(2208988801, 2147483648)
        1500000
        >>> ntp_to_unix_us(0, 0) is None
        True
    """
    unix_sec = sec - NTP_TIMESTAMP_DELTA
    if unix_sec < 0:
        return None
    return unix_sec * US_PER_SEC + ((frac * US_PER_SEC) >> 32)


def build_client_packet(now_us: int) -> NtpPacket:
    """Build a version 3 client request carrying now_us as transmit time."""
    tx_sec, tx_frac = unix_us_to_ntp(now_us)
    return NtpPacket(
        li_vn_mode=NtpPacket.make_li_vn_mode(0, CLIENT_VERSION, MODE_CLIENT),
        tx_ts_sec=tx_sec,
        tx_ts_frac=tx_frac,
    )


def _timestamp_us(sec: int, frac: int, name: str) -> int:
    value = ntp_to_unix_us(sec, frac)
    if value is None:
        raise NtpError(NtpErrorCode.BAD_TS, f"{name} timestamp precedes 1970")
    return value


def compute_offset_delay(t1: int, t2: int, t3: int, t4: int) -> tuple[int, int]:
    """Clock offset and round-trip delay from the four exchange instants.

    Args:
        t1: Client transmit time (originate timestamp).
        t2: Server receive time.
        t3: Server transmit time.
        t4: Client arrival time.

    Returns:
        (offset_us, delay_us); the offset is truncated toward zero.

    Examples:
        >>> compute_offset_delay(0, 1500, 2500, 1000)
        (1500, 0)
    """
    offset = trunc_div((t2 - t1) + (t3 - t4), 2)
    delay = (t4 - t1) - (t3 - t2)
    return offset, delay


def parse_server_packet(packet: NtpPacket, arrival_us: int) -> NtpMeasurement:
    """Validate a server response and derive offset and delay.

    Args:
        packet: The decoded response.
        arrival_us: Local wall-clock time the response arrived, in
            microseconds since the epoch.

    Returns:
        The measurement carried by the response.

    Raises:
        NtpError: With the NtpErrorCode of the first failed check.
    """
    if packet.mode != MODE_SERVER:
        raise NtpError(NtpErrorCode.BAD_MODE, f"unexpected NTP mode {packet.mode}")
    if packet.version not in (3, 4):
        raise NtpError(NtpErrorCode.BAD_VERSION, f"unsupported NTP version {packet.version}")
    if packet.leap_indicator == LEAP_ALARM:
        raise NtpError(NtpErrorCode.BAD_LI, "server clock is unsynchronized")
    if packet.stratum == 0:
        raise NtpError(NtpErrorCode.KOD, "kiss-of-death response")
    if packet.stratum >= MAX_STRATUM:
        raise NtpError(NtpErrorCode.BAD_STRATUM, f"invalid stratum {packet.stratum}")

    t1 = _timestamp_us(packet.orig_ts_sec, packet.orig_ts_frac, "originate")
    t2 = _timestamp_us(packet.recv_ts_sec, packet.recv_ts_frac, "receive")
    t3 = _timestamp_us(packet.tx_ts_sec, packet.tx_ts_frac, "transmit")
    if t3 < t2:
        raise NtpError(NtpErrorCode.BAD_TS, "server transmit precedes receive")

    offset, delay = compute_offset_delay(t1, t2, t3, arrival_us)
    if delay < 0:
        raise NtpError(NtpErrorCode.BAD_TS, f"negative round-trip delay {delay} us")
    return NtpMeasurement(offset, delay, packet.stratum)


__all__ = [
    "PACKET_SIZE",
    "NTP_PORT",
    "NtpErrorCode",
    "NtpMeasurement",
    "NtpPacket",
    "unix_us_to_ntp",
    "ntp_to_unix_us",
    "build_client_packet",
    "compute_offset_delay",
    "parse_server_packet",
]
