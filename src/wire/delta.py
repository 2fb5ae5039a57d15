# src/wire/delta.py
"""
Delta helper for dense, mostly-increasing id columns.

Each row is written as `value - prev - 1` with `prev` starting at -1, so a
column of consecutive ids turns into a run of zeros. Steps that go backwards
(e.g. a non-block item mapped to air after a block item) are projected onto
u32 with two's complement; readers reverse it with wrapping addition.

The state is per column: build a fresh DeltaEncoder (or call delta_column)
for every section.
"""

from __future__ import annotations

from typing import Iterable, Iterator

from .hexfmt import wrap_u32


class DeltaEncoder:
    def __init__(self) -> None:
        self.prev = -1

    def encode(self, value: int) -> int:
        diff = value - self.prev - 1
        self.prev = value
        return wrap_u32(diff)


def delta_column(values: Iterable[int]) -> Iterator[int]:
    """Lazily delta-encode `values` with a fresh `prev = -1`."""
    encoder = DeltaEncoder()
    for value in values:
        yield encoder.encode(value)
