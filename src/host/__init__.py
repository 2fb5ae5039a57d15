# host package
# src/host/__init__.py
"""
Host side of the extractor.

- protocol: the read-only query surface (typing.Protocol)
- model:    dataclass snapshot implementing it
- snapshot: dump loader (JSON / YAML)
- testing:  HostBuilder for synthetic hosts
"""

from __future__ import annotations

from .model import HostSnapshot
from .protocol import Aabb, Direction, Host, SupportType
from .snapshot import load_snapshot, snapshot_from_dict

__all__ = [
    "Aabb",
    "Direction",
    "Host",
    "HostSnapshot",
    "SupportType",
    "load_snapshot",
    "snapshot_from_dict",
]
