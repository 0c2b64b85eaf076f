"""Seconds/microseconds timestamps as carried in echo request payloads."""

from __future__ import annotations

import struct
import time
from dataclasses import dataclass
from typing import ClassVar

_USEC_PER_SEC = 1_000_000


@dataclass(frozen=True, order=True)
class Timeval:
    """A point in time (or a difference) split into seconds and microseconds."""

    sec: int = 0
    usec: int = 0

    _STRUCT: ClassVar[struct.Struct] = struct.Struct("=qq")
    SIZE: ClassVar[int] = _STRUCT.size

    @classmethod
    def _normalized(cls, sec: int, usec: int) -> Timeval:
        carry, usec = divmod(usec, _USEC_PER_SEC)
        return cls(sec + carry, usec)

    @classmethod
    def now(cls) -> Timeval:
        """The current wall-clock time."""
        return cls._normalized(0, time.time_ns() // 1000)

    @classmethod
    def from_seconds(cls, seconds: float) -> Timeval:
        """Build a value from a number of seconds, rounded to the microsecond."""
        return cls._normalized(0, round(seconds * _USEC_PER_SEC))

    def __add__(self, other: object) -> Timeval:
        if not isinstance(other, Timeval):
            return NotImplemented
        return self._normalized(self.sec + other.sec, self.usec + other.usec)

    def __sub__(self, other: object) -> Timeval:
        if not isinstance(other, Timeval):
            return NotImplemented
        return self._normalized(self.sec - other.sec, self.usec - other.usec)

    def compare(self, other: Timeval) -> int:
        """Return -1, 0 or 1 as this value is before, equal to or after ``other``."""
        mine = (self.sec, self.usec)
        theirs = (other.sec, other.usec)
        return (mine > theirs) - (mine < theirs)

    def to_seconds(self) -> float:
        """The value as a floating-point number of seconds."""
        return self.sec + self.usec / _USEC_PER_SEC

    def to_bytes(self) -> bytes:
        """The value packed as two native 64-bit integers."""
        return self._STRUCT.pack(self.sec, self.usec)

    @classmethod
    def from_bytes(cls, data: bytes) -> Timeval:
        """Unpack a value from the start of ``data``."""
        if len(data) < cls.SIZE:
            raise ValueError(
                f"need at least {cls.SIZE} bytes for a timestamp, got {len(data)}"
            )
        sec, usec = cls._STRUCT.unpack_from(data)
        return cls(sec, usec)