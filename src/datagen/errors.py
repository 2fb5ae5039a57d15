# src/datagen/errors.py
"""
Domain errors for the datagen run.

Every error here is fatal for the run: the driver stops at the first one and
no file written after the failure point is considered valid.

- HostIntegrityError: the host returned something it promised not to
  (a packet index with no packet, a registry entry with no key, ...).
- SinkWriteError: the output destination refused a completed buffer.
- EncoderMisuseError: a programmer error inside the encoders
  (negative hex input, RLE column whose length disagrees with its header).
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional


class DatagenError(Exception):
    """Base class for all errors that abort a datagen run."""


@dataclass
class HostIntegrityError(DatagenError):
    """
    Missing-but-expected host data.

    `table` names the registry/section being produced and `index` the
    offending id (or None when the whole table is at fault).
    """

    table: str
    index: Optional[int]
    detail: str = ""

    def __str__(self) -> str:
        where = self.table if self.index is None else f"{self.table}[{self.index}]"
        if self.detail:
            return f"host integrity violation in {where}: {self.detail}"
        return f"host integrity violation in {where}"


@dataclass
class SinkWriteError(DatagenError):
    """Writing a finished output file failed."""

    name: str
    cause: Exception

    def __str__(self) -> str:
        return f"failed to write output {self.name!r}: {self.cause}"


class EncoderMisuseError(DatagenError, ValueError):
    """Encoder called with input it can never represent."""


__all__ = [
    "DatagenError",
    "HostIntegrityError",
    "SinkWriteError",
    "EncoderMisuseError",
]
