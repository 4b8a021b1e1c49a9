# Copyright (c) 2024 Voidspan Contributors
# MIT License

"""
Console diagnostics.

Verbosity-gated messages on stderr, coloured with ANSI codes when the
stream is a terminal that supports them.
"""

import os
import sys
from typing import Optional, TextIO


def is_tty(stream: Optional[TextIO] = None) -> bool:
    """Check if the given stream (or stdout) is a TTY."""
    if stream is None:
        stream = sys.stdout

    try:
        return stream.isatty()
    except AttributeError:
        return False


def supports_color(stream: Optional[TextIO] = None) -> bool:
    """
    Check if the stream supports ANSI color codes.

    NO_COLOR disables colour, FORCE_COLOR enables it even off a TTY.
    """
    if stream is None:
        stream = sys.stdout

    # Check for explicit disable
    if os.environ.get("NO_COLOR"):
        return False

    # Check for explicit enable
    if os.environ.get("FORCE_COLOR"):
        return True

    if not is_tty(stream):
        return False

    return os.environ.get("TERM", "") != "dumb"


class Colors:
    """ANSI color codes for terminal output."""

    RESET = "\033[0m"
    BOLD = "\033[1m"
    DIM = "\033[2m"

    RED = "\033[31m"
    GREEN = "\033[32m"
    YELLOW = "\033[33m"
    CYAN = "\033[36m"

    BRIGHT_RED = "\033[91m"
    BRIGHT_YELLOW = "\033[93m"


class Display:
    """
    Diagnostic output for resolvers and the CLI.

    Messages at level N are shown when verbosity >= N, like
    ansible-playbook's -v/-vv/-vvv.
    """

    def __init__(self, verbosity: int = 0, stream: Optional[TextIO] = None):
        self.verbosity = verbosity
        self.stream = stream or sys.stderr
        self.color = supports_color(self.stream)

    def _wrap(self, text: str, *codes: str) -> str:
        if not self.color:
            return text
        return "".join(codes) + text + Colors.RESET

    def _emit(self, text: str) -> None:
        print(text, file=self.stream)

    def display(self, msg: str, level: int = 0) -> None:
        """Print msg if verbosity is at least level."""
        if self.verbosity >= level:
            self._emit(msg)

    def v(self, msg: str) -> None:
        self.display(msg, 1)

    def vv(self, msg: str) -> None:
        self.display(msg, 2)

    def vvv(self, msg: str) -> None:
        self.display(self._wrap(msg, Colors.DIM), 3)

    def warning(self, msg: str) -> None:
        self._emit(self._wrap(f"[WARNING]: {msg}", Colors.BRIGHT_YELLOW))

    def error(self, msg: str) -> None:
        self._emit(self._wrap(f"ERROR: {msg}", Colors.BRIGHT_RED, Colors.BOLD))
