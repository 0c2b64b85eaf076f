"""Text reports: per-target summaries and diagnostic dumps of resolved targets."""

from __future__ import annotations

import socket
import sys
from typing import TextIO

from .models import PingStats, PingTarget

_INADDR_NONE = "255.255.255.255"
_UNSET_ADDRESS = "0.0.0.0"


def format_result(stats: PingStats) -> str:
    """The summary printed once a target has been pinged."""
    lines = [
        f"{stats.packets_sent} packets transmitted, "
        f"{stats.packets_received} received, "
        f"{stats.packet_loss():.1f}% packet loss"
    ]
    if stats.packets_received > 0:
        lines.append(
            "round-trip min/avg/max/stddev = "
            f"{stats.min_rtt * 1000:.3f}/{stats.avg_rtt * 1000:.3f}/"
            f"{stats.max_rtt * 1000:.3f}/{0.0:.3f} ms"
        )
    return "\n".join(lines) + "\n"


def format_target_debug(index: int, target: PingTarget | None) -> str:
    """A diagnostic block describing target number ``index``.

    ``target`` is None for a target that has not been resolved (yet).
    """
    if target is None:
        hostname, ip, valid = None, _UNSET_ADDRESS, False
    else:
        hostname, ip, valid = target.hostname, target.ip, True
    raw = int.from_bytes(socket.inet_aton(ip), sys.byteorder, signed=True)
    shown_ip = "N/A" if ip == _INADDR_NONE else ip
    return (
        f"Ping {index}:\n"
        f"  Target Hostname: {hostname or 'N/A'}\n"
        f"  Target IP raw: {raw}\n"
        f"  Target IP: {shown_ip}\n"
        f"  Is Valid: {'true' if valid else 'false'}\n"
    )


def print_result(stats: PingStats, file: TextIO | None = None) -> None:
    """Write the summary for ``stats`` to ``file`` (standard output by default)."""
    (file or sys.stdout).write(format_result(stats))