"""Write-only output channels.

The reporter and artifact writer never touch sys.stdout or sys.stderr
directly; they are handed an output channel and an error channel.
"""

from __future__ import annotations

import sys
from typing import Protocol, TextIO, runtime_checkable


@runtime_checkable
class OutputChannel(Protocol):
    """Line-oriented, write-only sink."""

    def write_line(self, message: str) -> None: ...


class StreamChannel:
    """Channel writing to a text stream.

    Example:
        >>> out = StreamChannel(sys.stdout)
        >>> out.write_line("Created build/Token.nef")
    """

    def __init__(self, stream: TextIO) -> None:
        self.stream = stream

    def write_line(self, message: str) -> None:
        self.stream.write(f"{message}\n")
        self.stream.flush()

    @classmethod
    def stdout(cls) -> StreamChannel:
        return cls(sys.stdout)

    @classmethod
    def stderr(cls) -> StreamChannel:
        return cls(sys.stderr)


class BufferChannel:
    """Channel collecting lines in memory."""

    def __init__(self) -> None:
        self.lines: list[str] = []

    def write_line(self, message: str) -> None:
        self.lines.append(message)

    @property
    def text(self) -> str:
        return "\n".join(self.lines)
