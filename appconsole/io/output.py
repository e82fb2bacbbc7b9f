"""
Line-oriented output for console commands.

Commands never print directly; they receive an OutputWriter and emit whole
lines through write_ln(). Calling it without text emits an empty line, which
the application uses as the end-of-run marker.
"""

import sys
from typing import Protocol, TextIO


class OutputWriter(Protocol):
    """Anything commands can write lines to."""

    def write_ln(self, text: str | None = None) -> None: ...


class ConsoleOutput:
    """
    Writes lines to a text stream, stdout unless another stream is given.

    The stream is looked up when the writer is created, so a writer built
    under pytest's capsys writes to the captured stdout.
    """

    def __init__(self, stream: TextIO | None = None) -> None:
        self._stream = stream or sys.stdout

    def write_ln(self, text: str | None = None) -> None:
        self._stream.write(f"{text or ''}\n")


class BufferedOutput:
    """
    Keeps written lines in memory.

    Example:
        out = BufferedOutput()
        app.run(ArgvInput(["list"]), out)
        assert out.lines[-1] == ""
    """

    def __init__(self) -> None:
        self._lines: list[str] = []

    def write_ln(self, text: str | None = None) -> None:
        self._lines.append(text or "")

    @property
    def lines(self) -> list[str]:
        """Copy of the lines written so far."""
        return list(self._lines)
