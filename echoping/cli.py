"""Command-line entry point: ping each target given on the command line."""

from __future__ import annotations

import os
import signal
import sys
from types import FrameType
from typing import Any, Sequence, TextIO

from .errors import PingError, UnknownHostError
from .models import PingTarget
from .report import format_target_debug
from .session import PingSession
from .target import check_target

_INTERRUPT_MESSAGE = "\nPing: interrupted by Ctrl+C\n"


def usage(file: TextIO | None = None) -> None:
    """Report that no host was given."""
    out = file or sys.stderr
    print("ping: missing host operand", file=out)
    print("Try 'ping --help' for more information.", file=out)


def _handle_signal(signum: int, frame: FrameType | None) -> None:
    if signum == signal.SIGINT:
        sys.stderr.write(_INTERRUPT_MESSAGE)
        sys.stderr.flush()
        sys.exit(0)


def install_signal_handlers() -> dict[int, Any]:
    """Handle SIGINT, SIGTERM and SIGQUIT; return the handlers they replace.

    SIGINT ends the program successfully; the other two are caught and ignored.
    """
    previous = {}
    for name in ("SIGINT", "SIGTERM", "SIGQUIT"):
        signum = getattr(signal, name, None)
        if signum is None:
            continue
        previous[signum] = signal.signal(signum, _handle_signal)
    return previous


def main(argv: Sequence[str] | None = None) -> int:
    """Ping every target named in ``argv``; return the exit status."""
    targets = list(sys.argv[1:] if argv is None else argv)
    if not targets:
        usage()
        return 1

    print(f"PID: {os.getpid()}")
    install_signal_handlers()

    resolved: list[PingTarget | None] = [None] * len(targets)
    for index, name in enumerate(targets):
        try:
            resolved[index] = check_target(name)
        except UnknownHostError as exc:
            print(exc, file=sys.stderr)
            return 1
        except PingError as exc:
            print(exc, file=sys.stderr)

        for number, target in enumerate(resolved, start=1):
            sys.stdout.write(format_target_debug(number, target))

        target = resolved[index]
        if target is None:
            print("Ping structure is not valid.", file=sys.stderr)
            print("Event loop failed", file=sys.stderr)
            continue
        try:
            with PingSession(target) as session:
                session.run()
        except PingError as exc:
            print(exc, file=sys.stderr)
            print("Event loop failed", file=sys.stderr)
    return 0


if __name__ == "__main__":
    sys.exit(main())