"""Data describing a ping target and the statistics gathered for it."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class PingTarget:
    """A resolved destination: its IPv4 address and, if given, the host name."""

    ip: str
    hostname: str | None = None

    def display_name(self) -> str:
        """The host name if the target was given as one, else the address."""
        return self.hostname or self.ip


@dataclass
class PingStats:
    """Counters and round-trip times for one target (times in seconds)."""

    packets_sent: int = 0
    packets_received: int = 0
    packets_lost: int = 0
    min_rtt: float = 0.0
    max_rtt: float = 0.0
    avg_rtt: float = 0.0

    def record_rtt(self, rtt: float) -> None:
        """Count a received reply and fold its round-trip time into the figures."""
        self.packets_received += 1
        if self.packets_received == 1 or rtt < self.min_rtt:
            self.min_rtt = rtt
        if rtt > self.max_rtt:
            self.max_rtt = rtt
        self.avg_rtt += (rtt - self.avg_rtt) / self.packets_received

    def packet_loss(self) -> float:
        """Lost packets as a percentage of those sent; 0.0 if none were sent."""
        if self.packets_sent == 0:
            return 0.0
        return self.packets_lost / self.packets_sent * 100.0