"""NTP client and multi-server offset estimation.

This module provides:
    - NtpPacket and the request/response codec
    - UdpTransport and the socket-based SocketUdpTransport
    - NtpClientCore and NtpClient for a single server
    - NtpClientPool, which aggregates several servers
    - NtpClientPoolRunner, which measures a pool on a background thread
    - NtpTimeService, the process-wide corrected clock
"""

from __future__ import annotations

from timeshield.ntp.client import (
    DEFAULT_NTP_HOST,
    NtpClient,
    NtpClientCore,
    NtpResult,
)
from timeshield.ntp.packet import (
    NTP_PORT,
    NtpErrorCode,
    NtpMeasurement,
    NtpPacket,
    PACKET_SIZE,
    build_client_packet,
    compute_offset_delay,
    ntp_to_unix_us,
    parse_server_packet,
    unix_us_to_ntp,
)
from timeshield.ntp.pool import (
    Aggregation,
    MAD_TRIM_FACTOR,
    NtpClientPool,
    NtpPoolConfig,
    NtpSample,
    NtpServerConfig,
    NtpServerStatus,
    PoolClient,
    best_delay_offset,
    median,
    median_mad_trim,
)
from timeshield.ntp.runner import (
    DEFAULT_INTERVAL_MS,
    MeasurablePool,
    NtpClientPoolRunner,
)
from timeshield.ntp.service import NtpTimeService
from timeshield.ntp.transport import (
    DEFAULT_TIMEOUT_MS,
    SocketUdpTransport,
    UdpTransport,
)

__all__: list[str] = [
    # packet
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
    # transport
    "DEFAULT_TIMEOUT_MS",
    "UdpTransport",
    "SocketUdpTransport",
    # client
    "DEFAULT_NTP_HOST",
    "NtpResult",
    "NtpClientCore",
    "NtpClient",
    # pool
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
    # runner
    "DEFAULT_INTERVAL_MS",
    "MeasurablePool",
    "NtpClientPoolRunner",
    # service
    "NtpTimeService",
]
