"""
Output abstraction for CLI messages.

Provides a testable interface for the CLI's own output (usage errors,
version line), separate from log output.
"""

import sys
from typing import Protocol, TextIO


class OutputWriter(Protocol):
    """Protocol for CLI output writing."""

    def write(self, text: str = "") -> None:
        """Write text with trailing newline."""
        ...


class ConsoleOutput:
    """
    Output writer for a stream (stderr by default).

    Example:
        out = ConsoleOutput()
        out.write("!! no files to watch")
    """

    def __init__(self, stream: TextIO | None = None) -> None:
        self._stream = stream if stream is not None else sys.stderr

    def write(self, text: str = "") -> None:
        print(text, file=self._stream)


class BufferedOutput:
    """
    Output writer that captures lines in memory.

    Example:
        out = BufferedOutput()
        out.write("Line 1")
        assert out.lines == ["Line 1"]
    """

    def __init__(self) -> None:
        self._lines: list[str] = []

    def write(self, text: str = "") -> None:
        # Multi-line writes (e.g. help text) are split so lines stay lines
        self._lines.extend(text.split("\n") if text else [""])

    @property
    def lines(self) -> list[str]:
        return list(self._lines)

    @property
    def text(self) -> str:
        return "\n".join(self._lines) + "\n" if self._lines else ""
