"""Exceptions raised while resolving targets and exchanging echo packets."""


class PingError(Exception):
    """Base class for every error reported by the ping tool."""


class UnknownHostError(PingError):
    """A host name could not be resolved to an IPv4 address."""

    def __init__(self, host: str) -> None:
        super().__init__("ping: unknown host")
        self.host = host


class InvalidReplyError(PingError):
    """A received packet is not the echo reply that was expected."""


class SocketSetupError(PingError):
    """The ICMP socket could not be created or configured."""