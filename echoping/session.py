"""Sending echo requests to one target and collecting the replies."""

from __future__ import annotations

import errno
import os
import select
import socket
import sys
from types import TracebackType

from .errors import PingError, SocketSetupError
from .models import PingStats, PingTarget
from .packet import build_echo_request, check_response_header, compute_rtt
from .timeval import Timeval

PING_DEFAULT_COUNT = 4
RECV_BUFFER_SIZE = 2048
DEFAULT_TTL = 64
RECV_TIMEOUT = 1.0


class PingSession:
    """An ICMP echo exchange with a single target.

    Requests are sent every ``interval`` seconds until ``count`` sequence
    numbers have been used; a sequence number is given up as lost when no
    traffic arrives for ``timeout`` seconds.
    """

    def __init__(
        self,
        target: PingTarget,
        count: int = PING_DEFAULT_COUNT,
        interval: float = 1.0,
        timeout: float = 5.0,
        identifier: int | None = None,
    ) -> None:
        self.target = target
        self.count = count
        self.interval = interval
        self.timeout = timeout
        self.identifier = (os.getpid() if identifier is None else identifier) & 0xFFFF
        self.sequence = 0
        self.stats = PingStats()
        self._sock: socket.socket | None = None

    @property
    def is_open(self) -> bool:
        """Whether the ICMP socket is currently open."""
        return self._sock is not None

    def open(self) -> PingSession:
        """Create and configure the ICMP socket."""
        if self._sock is not None:
            return self
        try:
            sock = socket.socket(socket.AF_INET, socket.SOCK_DGRAM, socket.IPPROTO_ICMP)
        except OSError as exc:
            raise SocketSetupError("Failed to create socket.") from exc
        try:
            sock.settimeout(RECV_TIMEOUT)
            sock.setsockopt(socket.IPPROTO_IP, socket.IP_TTL, DEFAULT_TTL)
        except OSError as exc:
            sock.close()
            raise SocketSetupError(f"setsockopt IP_TTL: {exc}") from exc
        recv_ttl = getattr(socket, "IP_RECVTTL", None)
        if recv_ttl is not None:
            try:
                sock.setsockopt(socket.IPPROTO_IP, recv_ttl, 1)
            except OSError as exc:
                if exc.errno != errno.ENOPROTOOPT:
                    sock.close()
                    raise SocketSetupError(f"setsockopt IP_RECVTTL: {exc}") from exc
        self.sequence = 0
        self._sock = sock
        return self

    def close(self) -> None:
        """Close the socket; closing twice is harmless."""
        if self._sock is not None:
            self._sock.close()
            self._sock = None

    def __enter__(self) -> PingSession:
        return self.open()

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.close()

    def _socket(self) -> socket.socket:
        if self._sock is None:
            raise PingError("Socket is not valid.")
        return self._sock

    def send_ping(self) -> None:
        """Send an echo request carrying the current sequence number."""
        sock = self._socket()
        packet = build_echo_request(self.sequence, self.identifier)
        try:
            sock.sendto(packet, (self.target.ip, 0))
        except OSError as exc:
            raise PingError(f"sendto failed: {exc}") from exc
        print(f"Packet sent to {self.target.display_name()}")

    def receive_ping(self) -> float | None:
        """Read one reply to the last request sent.

        Returns its round-trip time in seconds, or None if no data was
        waiting. Raises InvalidReplyError for a packet that is not that reply.
        """
        sock = self._socket()
        try:
            packet = sock.recv(RECV_BUFFER_SIZE)
        except (BlockingIOError, TimeoutError):
            return None
        except OSError as exc:
            raise PingError(f"recv failed: {exc}") from exc
        payload = check_response_header(packet, self.sequence - 1, self.identifier)
        rtt = compute_rtt(payload)
        self.stats.record_rtt(rtt)
        print(f"RTT: {rtt * 1000:.3f} ms")
        return rtt

    def run(self) -> PingStats:
        """Exchange packets until every sequence number is used; return the stats."""
        sock = self._socket()
        period = Timeval.from_seconds(self.interval)
        last_ping = Timeval.now()
        while self.sequence < self.count:
            now = Timeval.now()
            next_ping = last_ping + period
            wait = max((next_ping - now).to_seconds(), 0.0)
            try:
                ready, _, _ = select.select([sock], [], [], wait)
            except InterruptedError:
                continue
            now = Timeval.now()

            if not ready:
                silent_for = (now - last_ping).to_seconds()
                if self.timeout > 0 and silent_for >= self.timeout:
                    self.stats.packets_lost += 1
                    last_ping = now
                    self.sequence += 1
                    continue
            else:
                self.receive_ping()

            if now.compare(next_ping) >= 0:
                self.send_ping()
                self.stats.packets_sent += 1
                last_ping = Timeval.now()
                self.sequence += 1
        sys.stdout.flush()
        return self.stats