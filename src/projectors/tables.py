# src/projectors/tables.py
"""
Flat producers: datasets that need no interning.

  version     name line + hex protocol version
  registries  one `str` section per registry
  packet      one `str` section per protocol template
  entity      entity dimensions as RLE columns of f32 bits
  item        default max stack size
"""

from __future__ import annotations

import logging
from typing import List, Optional

from datagen.errors import HostIntegrityError
from host.protocol import Host
from wire import ScratchBuffer, f32_bits, hex_u, write_rle_section, write_str_section


log = logging.getLogger(__name__)


def write_version(buf: ScratchBuffer, host: Host) -> None:
    buf.line(host.version_name)
    buf.line(hex_u(host.protocol_version))


def write_registries(buf: ScratchBuffer, host: Host) -> None:
    for registry in host.registries():
        paths: List[str] = []
        for index, path in enumerate(registry.entries):
            if path is None:
                raise HostIntegrityError(registry.name, index, "registry entry has no key")
            paths.append(path)
        write_str_section(buf, registry.name, paths)
        log.debug("registry %s: %d entries", registry.name, len(paths))


def write_packets(buf: ScratchBuffer, host: Host) -> None:
    """
    One section per template, named `<flow>/<phase>`, packets in index order.

    A template that leaves an index without a packet (or repeats one) is a
    host integrity violation.
    """
    for template in host.protocol_templates():
        table = f"{template.flow}/{template.phase}"
        pairs = list(template.list_packets())
        slots: List[Optional[str]] = [None] * len(pairs)
        for path, index in pairs:
            if not 0 <= index < len(slots):
                raise HostIntegrityError(table, index, "packet index out of range")
            if slots[index] is not None:
                raise HostIntegrityError(table, index, "packet index listed twice")
            slots[index] = path
        for index, path in enumerate(slots):
            if path is None:
                raise HostIntegrityError(table, index, "invalid packet type")
        write_str_section(buf, table, slots)  # type: ignore[arg-type]


def write_entity(buf: ScratchBuffer, host: Host) -> None:
    entities = host.entity_types()
    size = len(entities)
    write_rle_section(buf, "entity_type_height", (f32_bits(e.height) for e in entities), size)
    write_rle_section(buf, "entity_type_width", (f32_bits(e.width) for e in entities), size)
    write_rle_section(
        buf,
        "entity_type_fixed",
        (1 if e.fixed_dimensions else 0 for e in entities),
        size,
    )


def write_item(buf: ScratchBuffer, host: Host) -> None:
    items = host.items()
    write_rle_section(buf, "item_max_count", (i.max_stack_size for i in items), len(items))
