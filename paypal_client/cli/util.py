"""Helpers shared by the paypal-client commands: header parsing and interrupt handling."""

from __future__ import annotations

from collections.abc import Callable
import signal
import sys
from typing import Any

CANCELLED_EXIT = 130  # 128 + SIGINT


def _print_cancelled(msg: str = "✖ Cancelled by user") -> None:
    sys.stderr.write("\n" + msg + "\n")
    sys.stderr.flush()


def parse_header(raw: str) -> tuple[str, str]:
    """Split a ``-H "Name: value"`` argument into a header pair."""
    name, sep, value = raw.partition(":")
    if not sep or not name.strip():
        raise ValueError(f"Invalid header {raw!r}, expected 'Name: value'")
    return name.strip(), value.strip()


def graceful_main(fn: Callable[[list[str]], int], argv: list[str]) -> int:
    """
    Run a command function, turning Ctrl-C or SIGTERM into exit code 130.

    A request interrupted mid-flight leaves nothing to clean up client-side,
    so the interrupt only needs a short notice on stderr instead of a traceback.
    """

    def _on_sigterm(_signum: int, _frame: Any) -> None:
        raise KeyboardInterrupt()

    previous = signal.getsignal(signal.SIGTERM)
    signal.signal(signal.SIGTERM, _on_sigterm)

    try:
        return int(fn(argv) or 0)
    except KeyboardInterrupt:
        _print_cancelled()
        return CANCELLED_EXIT
    finally:
        signal.signal(signal.SIGTERM, previous)
