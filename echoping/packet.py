"""Building ICMP echo requests and checking echo replies."""

from __future__ import annotations

import os
import struct

from .errors import InvalidReplyError
from .timeval import Timeval

ICMP_ECHOREPLY = 0
ICMP_ECHO = 8
ICMP_HEADER_SIZE = 8
MAX_PAYLOAD_SIZE = 56
PAYLOAD_PADDING = 0xAA

_HEADER = struct.Struct("!BBHHH")


def _default_identifier() -> int:
    return os.getpid() & 0xFFFF


def checksum(data: bytes) -> int:
    """The 16-bit one's-complement Internet checksum of ``data``."""
    if len(data) % 2:
        data = data + b"\x00"
    total = sum(struct.unpack(f"!{len(data) // 2}H", data))
    while total >> 16:
        total = (total & 0xFFFF) + (total >> 16)
    return ~total & 0xFFFF


def build_payload(
    payload_len: int = MAX_PAYLOAD_SIZE, timestamp: Timeval | None = None
) -> bytes:
    """A send timestamp followed by 0xAA padding, ``payload_len`` bytes long."""
    if payload_len < Timeval.SIZE:
        raise ValueError(
            f"payload must hold at least {Timeval.SIZE} bytes, got {payload_len}"
        )
    stamp = (timestamp or Timeval.now()).to_bytes()
    return stamp + bytes([PAYLOAD_PADDING]) * (payload_len - len(stamp))


def build_echo_request(
    sequence: int,
    identifier: int | None = None,
    payload_len: int = MAX_PAYLOAD_SIZE,
    timestamp: Timeval | None = None,
) -> bytes:
    """A complete ICMP echo request with a timestamped payload and checksum."""
    ident = _default_identifier() if identifier is None else identifier & 0xFFFF
    payload = build_payload(payload_len, timestamp)
    unsummed = _HEADER.pack(ICMP_ECHO, 0, 0, ident, sequence & 0xFFFF) + payload
    header = _HEADER.pack(
        ICMP_ECHO, 0, checksum(unsummed), ident, sequence & 0xFFFF
    )
    return header + payload


def check_response_header(
    packet: bytes, sequence: int, identifier: int | None = None
) -> bytes:
    """Validate an IP packet holding an echo reply and return its ICMP payload.

    Raises InvalidReplyError if the packet is not the reply to the given
    sequence number and identifier.
    """
    if not packet:
        raise InvalidReplyError("Received empty packet")
    ip_header_len = (packet[0] & 0x0F) * 4
    if len(packet) < ip_header_len + ICMP_HEADER_SIZE:
        raise InvalidReplyError(f"Received truncated packet of {len(packet)} bytes")
    icmp_type, code, _, ident, seq = _HEADER.unpack_from(packet, ip_header_len)
    if icmp_type != ICMP_ECHOREPLY:
        raise InvalidReplyError(f"Received non-echo reply packet: type {icmp_type}")
    if code != 0:
        raise InvalidReplyError(f"Received packet with non-zero code: {code}")
    want = _default_identifier() if identifier is None else identifier & 0xFFFF
    if ident != want:
        raise InvalidReplyError(f"Received packet with mismatched identifier: {ident}")
    if seq != sequence & 0xFFFF:
        raise InvalidReplyError(f"Received packet with invalid sequence number: {seq}")
    return packet[ip_header_len + ICMP_HEADER_SIZE:]


def compute_rtt(payload: bytes, received_at: Timeval | None = None) -> float:
    """Round-trip time in seconds from the timestamp at the start of ``payload``."""
    sent_at = Timeval.from_bytes(payload)
    return ((received_at or Timeval.now()) - sent_at).to_seconds()