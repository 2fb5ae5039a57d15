# src/projectors/fluid.py
"""
Fluid projector and the `fluid_state` dataset.

Flat per-fluid-state columns, then the per-block arrays of fluid-state ids
(one entry per block state, collapsed to a single entry when uniform, so
most blocks share the array [empty]).
"""

from __future__ import annotations

from typing import List, Sequence, Tuple

from host.protocol import Block, Fluid, FluidState, Host
from intern import InternTable, collapse_uniform, tuple_table
from wire import (
    ScratchBuffer,
    hex_u,
    write_array_section,
    write_rle_section,
    write_str_section,
    write_u32_section,
)


def fluid_state_name(state: FluidState, fluids: Sequence[Fluid]) -> str:
    """
    `<fluid>[_s][_f]_<hex amount>`; the empty state is just the fluid name.
    """
    name = fluids[state.fluid_id].path
    if state.is_empty:
        return name
    if state.is_source:
        name += "_s"
    if state.is_falling:
        name += "_f"
    return f"{name}_{hex_u(state.amount)}"


def project_fluid_arrays(blocks: Sequence[Block]) -> Tuple[InternTable, List[int]]:
    arrays = tuple_table("fluid_state_array")
    per_block = []
    for block in blocks:
        ids = [s.fluid_state_id for s in block.states]
        per_block.append(arrays.intern(collapse_uniform(ids)))
    return arrays, per_block


def write_fluid_state(buf: ScratchBuffer, host: Host) -> None:
    fluids = host.fluids()
    states = host.fluid_states()

    write_str_section(buf, "fluid_state", [fluid_state_name(s, fluids) for s in states])
    write_u32_section(buf, "fluid_to_block", [s.legacy_block_state_id for s in states])
    write_u32_section(buf, "fluid_state_level", [s.amount for s in states])
    write_u32_section(
        buf,
        "fluid_state_falling",
        [0 if s.is_empty else int(s.is_falling) for s in states],
    )
    write_u32_section(buf, "fluid_state_to_fluid", [s.fluid_id for s in states])

    arrays, per_block = project_fluid_arrays(host.blocks())
    write_array_section(buf, "fluid_state_array", list(arrays))
    write_rle_section(buf, "block_to_fluid_state", per_block, len(per_block))
