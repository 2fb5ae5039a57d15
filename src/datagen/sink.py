# src/datagen/sink.py
"""
Output sinks.

A sink receives one complete dataset at a time. DirectorySink makes every
file appear atomically (temp file in the target directory, then rename), so
a reader never sees a half-written dataset even if the run dies mid-write.
"""

from __future__ import annotations

import logging
import os
import tempfile
from pathlib import Path
from typing import Dict, Protocol

from .errors import SinkWriteError


log = logging.getLogger(__name__)


class Sink(Protocol):
    def write(self, name: str, data: bytes) -> None:
        """Store the complete contents of dataset `name`."""
        ...


class DirectorySink:
    """Writes `<root>/<name><suffix>` for every dataset."""

    def __init__(self, root: Path, suffix: str = ".txt") -> None:
        self.root = Path(root)
        self.suffix = suffix

    def path_for(self, name: str) -> Path:
        return self.root / f"{name}{self.suffix}"

    def write(self, name: str, data: bytes) -> None:
        target = self.path_for(name)
        tmp_name = None
        try:
            self.root.mkdir(parents=True, exist_ok=True)
            fd, tmp_name = tempfile.mkstemp(prefix=f".{name}.", suffix=".tmp", dir=self.root)
            with os.fdopen(fd, "wb") as f:
                f.write(data)
                f.flush()
                os.fsync(f.fileno())
            os.replace(tmp_name, target)
            tmp_name = None
        except OSError as exc:
            raise SinkWriteError(name, exc) from exc
        finally:
            if tmp_name is not None and os.path.exists(tmp_name):
                os.unlink(tmp_name)
        log.debug("Wrote %s (%d bytes)", target, len(data))


class MemorySink:
    """Keeps every dataset in a dict; used by tests."""

    def __init__(self) -> None:
        self.files: Dict[str, bytes] = {}

    def write(self, name: str, data: bytes) -> None:
        self.files[name] = bytes(data)

    def text(self, name: str) -> str:
        return self.files[name].decode("ascii")
