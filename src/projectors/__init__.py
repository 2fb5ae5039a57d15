# projectors package
# src/projectors/__init__.py
"""
Dataset writers. Each one reads the host and appends sections to the
run's scratch buffer; interning happens inside the writer that owns it.
"""

from __future__ import annotations

from .block_state import write_block_state
from .fluid import write_fluid_state
from .tables import (
    write_entity,
    write_item,
    write_packets,
    write_registries,
    write_version,
)
from .tags import write_tags

__all__ = [
    "write_block_state",
    "write_fluid_state",
    "write_entity",
    "write_item",
    "write_packets",
    "write_registries",
    "write_version",
    "write_tags",
]
