"""Turning a command-line target into a resolved IPv4 destination."""

from __future__ import annotations

import socket

from .errors import PingError, UnknownHostError
from .models import PingTarget

_INADDR_NONE = "255.255.255.255"


def is_valid_ip_address(address: str) -> bool:
    """Whether ``address`` is a dotted-quad IPv4 address."""
    try:
        socket.inet_pton(socket.AF_INET, address)
    except (OSError, ValueError):
        return False
    return True


def check_target(target: str) -> PingTarget:
    """Resolve ``target`` (an address or a host name) to a PingTarget.

    Raises UnknownHostError if a host name cannot be resolved and PingError
    if the target or its resolution is unusable.
    """
    if not target:
        raise PingError("Invalid ping or target.")

    if is_valid_ip_address(target):
        if target == _INADDR_NONE:
            raise PingError("Invalid IP address format.")
        return PingTarget(ip=target)

    try:
        ip = socket.gethostbyname(target)
    except (OSError, UnicodeError) as exc:
        raise UnknownHostError(target) from exc
    if ip == _INADDR_NONE:
        raise PingError("Invalid hostname resolution.")
    return PingTarget(ip=ip, hostname=target)