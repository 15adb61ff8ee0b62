"""Blocking single-keypress confirmation for destructive commands."""

from __future__ import annotations

import sys
from collections.abc import Callable
from typing import TextIO

Confirm = Callable[[str], bool]


def read_keypress(stream: TextIO | None = None) -> str:
    """Read one character without waiting for Enter when ``stream`` is a TTY.

    Non-interactive input falls back to the first character of the next line.
    """

    source = stream if stream is not None else sys.stdin
    if not source.isatty():
        line = source.readline()
        return line[:1]

    import termios
    import tty

    fd = source.fileno()
    previous = termios.tcgetattr(fd)
    try:
        tty.setraw(fd)
        return source.read(1)
    finally:
        termios.tcsetattr(fd, termios.TCSADRAIN, previous)


def confirm_keypress(
    question: str,
    *,
    reader: Callable[[], str] = read_keypress,
    out: TextIO | None = None,
) -> bool:
    """Ask ``question`` and return ``True`` only when the key pressed is ``y``."""

    sink = out if out is not None else sys.stdout
    sink.write(f"{question}\n")
    sink.flush()
    return reader() == "y"


__all__ = ["Confirm", "confirm_keypress", "read_keypress"]
