# src/projectors/physics.py
"""
Physics/shape projector.

Two sub-pipelines share the float tables:

  settings  per-block (hardness, blast, friction, speed, jump) as f32 ids,
            interned into block settings records
  shapes    collision/occlusion box lists of non-dynamic blocks, their
            coordinates interned into the f64 table, then per-state static
            bounds records and per-block arrays of record ids

Dynamic-shape blocks have no precomputable bounds and map to the empty
per-block array (id 0). The bounds record table also reserves id 0 for the
empty record, so real records start at 1.
"""

from __future__ import annotations

import logging
from typing import List, Sequence, Tuple

from datagen.errors import HostIntegrityError
from host.protocol import Block, BlockState, Direction, Host, SupportType
from intern import (
    InternTable,
    collapse_uniform,
    float32_table,
    float64_table,
    shape_table,
    tuple_table,
)
from wire import (
    ScratchBuffer,
    write_array_section,
    write_rle_section,
    write_u32_section,
    write_u64_section,
)


log = logging.getLogger(__name__)

# Field descriptions after '#' are advisory; the bit layout below is authoritative.
BLOCK_SETTINGS_TABLE = (
    "block_settings_table#hardness blast_resistance slipperiness "
    "velocity_multiplier jump_velocity_multiplier"
)
BLOCK_STATE_FLAGS = (
    "block_state_flags#(has_sided_transparency lava_ignitable "
    "material_replaceable opaque tool_required exceeds_cube "
    "redstone_power_source has_comparator_output)"
)
STATIC_BOUNDS_TABLE = (
    "block_state_static_bounds_table#(opacity(4) solid_block translucent "
    "full_cube opaque_full_cube) side_solid_full side_solid_center "
    "side_solid_rigid collision_shape culling_shape"
)

ShapeTable = InternTable[Tuple[Tuple[float, ...], ...]]


# ---------------------------------------------------------------------------
# Settings
# ---------------------------------------------------------------------------

def project_settings(blocks: Sequence[Block], f32: InternTable[int]) -> Tuple[InternTable, List[int]]:
    """
    Intern each block's five settings floats and the resulting id tuple.

    Floats enter the table in the order destroy speed, friction, speed
    factor, jump factor, explosion resistance; the record itself is ordered
    (hardness, blast, friction, speed, jump).
    """
    settings = tuple_table("block_settings_table")
    per_block: List[int] = []
    for block in blocks:
        hardness = f32.intern(block.destroy_speed)
        friction = f32.intern(block.friction)
        speed = f32.intern(block.speed_factor)
        jump = f32.intern(block.jump_factor)
        blast = f32.intern(block.explosion_resistance)
        per_block.append(settings.intern((hardness, blast, friction, speed, jump)))
    return settings, per_block


# ---------------------------------------------------------------------------
# Shapes
# ---------------------------------------------------------------------------

def project_shapes(blocks: Sequence[Block]) -> ShapeTable:
    """Collision shape of every static state; occlusion only where it can occlude."""
    shapes = shape_table("shape_table")
    for block in blocks:
        if block.has_dynamic_shape:
            continue
        for state in block.states:
            shapes.intern(state.collision_shape())
            if state.can_occlude:
                shapes.intern(state.occlusion_shape())
    return shapes


def intern_shape_coordinates(shapes: ShapeTable, f64: InternTable[int]) -> List[List[int]]:
    """Second pass: f64 ids per shape, six per box in min-then-max xyz order."""
    rows = []
    for shape in shapes:
        row: List[int] = []
        for box in shape:
            row.extend(f64.intern(c) for c in box)
        rows.append(row)
    return rows


# ---------------------------------------------------------------------------
# Per-state flags and bounds
# ---------------------------------------------------------------------------

def state_flags(state: BlockState) -> int:
    return (
        (1 if state.analog_output else 0)
        | (0b10 if state.signal_source else 0)
        | (0b100 if state.large_collision_shape else 0)
        | (0b1000 if state.requires_correct_tool else 0)
        | (0b10000 if state.can_occlude else 0)
        | (0b100000 if state.can_be_replaced else 0)
        | (0b1000000 if state.ignited_by_lava else 0)
        | (0b10000000 if state.use_shape_for_light_occlusion else 0)
    )


def sturdy_mask(state: BlockState, support: SupportType) -> int:
    mask = 0
    for d in Direction:
        if state.is_face_sturdy(d, support):
            mask |= 1 << int(d)
    return mask


def bounds_record(state: BlockState, shapes: ShapeTable) -> Tuple[int, ...]:
    flags1 = 0
    if state.solid_render:
        flags1 |= 1
    if state.collision_full_block:
        flags1 |= 2
    if state.propagates_skylight:
        flags1 |= 4
    if state.redstone_conductor:
        flags1 |= 8
    flags1 |= state.light_block << 4

    try:
        collision = shapes.lookup(state.collision_shape())
        occlusion = shapes.lookup(state.occlusion_shape())
    except KeyError as exc:
        raise HostIntegrityError("block_state", state.id, str(exc)) from exc

    return (
        flags1,
        sturdy_mask(state, SupportType.FULL),
        sturdy_mask(state, SupportType.CENTER),
        sturdy_mask(state, SupportType.RIGID),
        collision,
        occlusion,
    )


def project_static_bounds(
    blocks: Sequence[Block],
    shapes: ShapeTable,
) -> Tuple[InternTable, InternTable, List[int]]:
    records = tuple_table("block_state_static_bounds_table", seed_empty=True)
    arrays = tuple_table("block_state_static_bounds_map", seed_empty=True)
    per_block: List[int] = []
    for block in blocks:
        if block.has_dynamic_shape:
            per_block.append(0)
            continue
        ids = [records.intern(bounds_record(s, shapes)) for s in block.states]
        per_block.append(arrays.intern(collapse_uniform(ids)))
    return records, arrays, per_block


# ---------------------------------------------------------------------------
# Dataset sections
# ---------------------------------------------------------------------------

def write_physics(buf: ScratchBuffer, host: Host) -> None:
    blocks = host.blocks()
    states = host.block_states()

    f32 = float32_table()
    settings, block_settings = project_settings(blocks, f32)
    write_u32_section(buf, "float32_table", list(f32))

    shapes = project_shapes(blocks)
    f64 = float64_table()
    shape_rows = intern_shape_coordinates(shapes, f64)
    write_u64_section(buf, "float64_table", list(f64))
    write_array_section(buf, "shape_table", shape_rows)

    write_array_section(buf, BLOCK_SETTINGS_TABLE, list(settings))
    write_rle_section(buf, "block_settings", block_settings, len(block_settings))

    write_rle_section(buf, BLOCK_STATE_FLAGS, (state_flags(s) for s in states), len(states))
    write_rle_section(buf, "block_state_luminance", (s.light_emission for s in states), len(states))

    records, arrays, block_bounds = project_static_bounds(blocks, shapes)
    write_array_section(buf, STATIC_BOUNDS_TABLE, list(records))
    write_array_section(buf, "block_state_static_bounds_map", list(arrays))
    write_rle_section(buf, "block_state_static_bounds", block_bounds, len(block_bounds))

    log.debug(
        "physics: %d f32, %d f64, %d shapes, %d settings, %d bounds records, %d bounds arrays",
        len(f32),
        len(f64),
        len(shapes),
        len(settings),
        len(records),
        len(arrays),
    )
