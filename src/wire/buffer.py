# src/wire/buffer.py
"""
Scratch text buffer shared by every dataset of a run.

The driver owns exactly one instance and clears it between files; the
projector that is currently running is the only writer.
"""

from __future__ import annotations

from typing import List


class ScratchBuffer:
    """Append-only text accumulator with a cheap clear()."""

    def __init__(self) -> None:
        self._parts: List[str] = []
        self.sections: int = 0

    def write(self, text: str) -> None:
        self._parts.append(text)

    def line(self, text: str) -> None:
        """Write `text` followed by the line terminator."""
        self._parts.append(text)
        self._parts.append("\n")

    def clear(self) -> None:
        """Drop the contents but keep the object (and its list) alive."""
        self._parts.clear()
        self.sections = 0

    def getvalue(self) -> str:
        return "".join(self._parts)

    def encode(self) -> bytes:
        """Output files are plain ASCII."""
        return self.getvalue().encode("ascii")

    def __len__(self) -> int:
        return sum(len(p) for p in self._parts)
