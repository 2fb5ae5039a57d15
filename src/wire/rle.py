# src/wire/rle.py
"""
Run-length column encoder.

Body line forms:
    <hex-value>            a run of length 1
    ~<hex-count> <hex-value>  a run of length count >= 2

The number of logical items comes from the section header, so the body is
self-delimiting even though it may hold fewer lines than items.

Example: [5, 5, 5, 7, 7, 9] -> "~3 5", "~2 7", "9".
"""

from __future__ import annotations

from typing import Iterable

from .buffer import ScratchBuffer
from .hexfmt import hex_u


class RunLengthWriter:
    """
    Streaming encoder: push() values left to right, then finish().

    Tracks the current run as (count, value) and flushes it when a different
    value arrives or the stream ends. `pushed` counts logical items so the
    caller can check it against the header size.
    """

    def __init__(self, buf: ScratchBuffer) -> None:
        self._buf = buf
        self._count = 0
        self._value = 0
        self.pushed = 0

    def push(self, value: int) -> None:
        self.pushed += 1
        if self._count == 0:
            self._count = 1
            self._value = value
        elif value == self._value:
            self._count += 1
        else:
            self._flush()
            self._count = 1
            self._value = value

    def finish(self) -> None:
        if self._count != 0:
            self._flush()
        self._count = 0

    def _flush(self) -> None:
        if self._count == 1:
            self._buf.line(hex_u(self._value))
        else:
            self._buf.line(f"~{hex_u(self._count)} {hex_u(self._value)}")


def write_rle(buf: ScratchBuffer, values: Iterable[int]) -> int:
    """Encode `values` into `buf` and return how many items were consumed."""
    writer = RunLengthWriter(buf)
    for value in values:
        writer.push(value)
    writer.finish()
    return writer.pushed
