# src/projectors/block_state.py
"""
Block-state projector and the `block_state` dataset.

Interning graph built in one pass over blocks:

    property key / value names  ->  kv tuples [key, value...]  ->  property sets

Property set 0 is the empty set, so blocks without properties map to 0.

The dataset continues with the two delta-coded id columns and then the
physics/shape sections (projectors.physics), and finishes with the
reference full-block check.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import List, Optional, Sequence

from datagen.errors import HostIntegrityError
from host.protocol import Block, Direction, Host, Item, SupportType
from intern import InternTable, string_table, tuple_table
from wire import (
    ScratchBuffer,
    delta_column,
    write_array_section,
    write_rle_section,
    write_str_section,
)

from .physics import write_physics


log = logging.getLogger(__name__)

AIR = "air"


@dataclass
class PropertyTables:
    """Intern tables of the property graph plus each block's property-set id."""

    keys: InternTable[str] = field(default_factory=lambda: string_table("block_state_property_key"))
    values: InternTable[str] = field(default_factory=lambda: string_table("block_state_property_value"))
    kvs: InternTable = field(default_factory=lambda: tuple_table("block_state_property"))
    sets: InternTable = field(
        default_factory=lambda: tuple_table("block_state_properties", seed_empty=True)
    )
    block_sets: List[int] = field(default_factory=list)


def project_properties(blocks: Sequence[Block]) -> PropertyTables:
    """Intern every block's properties in host declaration order."""
    tables = PropertyTables()
    for block in blocks:
        if not block.properties:
            tables.block_sets.append(0)
            continue
        kv_ids = []
        for prop in block.properties:
            row = [tables.keys.intern(prop.name)]
            row.extend(tables.values.intern(v) for v in prop.value_names)
            kv_ids.append(tables.kvs.intern(row))
        tables.block_sets.append(tables.sets.intern(kv_ids))
    return tables


def write_property_tables(buf: ScratchBuffer, tables: PropertyTables) -> None:
    write_str_section(buf, "block_state_property_key", list(tables.keys))
    write_str_section(buf, "block_state_property_value", list(tables.values))
    write_array_section(buf, "block_state_property", list(tables.kvs))
    write_array_section(buf, "block_state_properties", list(tables.sets))
    write_rle_section(buf, "block_state", tables.block_sets, len(tables.block_sets))


def _air_id(blocks: Sequence[Block]) -> int:
    for block in blocks:
        if block.path == AIR:
            return block.id
    raise HostIntegrityError("block", None, f"no {AIR!r} block to map non-block items to")


def item_block_ids(items: Sequence[Item], blocks: Sequence[Block]) -> List[int]:
    """Block id per item; items that place no block map to air."""
    air: Optional[int] = None
    out = []
    for item in items:
        if item.block_id is not None:
            out.append(item.block_id)
            continue
        if air is None:
            air = _air_id(blocks)
        out.append(air)
    return out


def check_reference_full_block(blocks: Sequence[Block], path: str) -> None:
    """
    Sanity check on the host's face model: the reference block's default
    state must be sturdy on every face for every support type.
    """
    block = next((b for b in blocks if b.path == path), None)
    if block is None:
        raise HostIntegrityError("block", None, f"reference block {path!r} not found")
    state = next((s for s in block.states if s.id == block.default_state_id), None)
    if state is None:
        raise HostIntegrityError("block", block.id, "default state not among its states")

    masks = []
    for support in SupportType:
        mask = 0
        for d in Direction:
            if state.is_face_sturdy(d, support):
                mask |= 1 << int(d)
        masks.append(mask)
    if any(m != 0b111111 for m in masks):
        raise HostIntegrityError(
            "block",
            block.id,
            f"reference block {path!r} is not sturdy on all faces: "
            + " ".join(str(m) for m in masks),
        )


def write_block_state(
    buf: ScratchBuffer,
    host: Host,
    reference_full_block: Optional[str] = None,
) -> None:
    blocks = host.blocks()

    tables = project_properties(blocks)
    write_property_tables(buf, tables)
    log.debug(
        "properties: %d keys, %d values, %d kvs, %d sets",
        len(tables.keys),
        len(tables.values),
        len(tables.kvs),
        len(tables.sets),
    )

    write_rle_section(
        buf,
        "block_to_default_block_state",
        delta_column(b.default_state_id for b in blocks),
        len(blocks),
    )

    items = host.items()
    write_rle_section(
        buf,
        "block_item_to_block",
        delta_column(item_block_ids(items, blocks)),
        len(items),
    )

    write_physics(buf, host)

    if reference_full_block:
        check_reference_full_block(blocks, reference_full_block)
