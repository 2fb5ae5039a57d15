# tests/test_fluid_projector.py

from __future__ import annotations

from host.testing import HostBuilder
from projectors.fluid import fluid_state_name, write_fluid_state
from wire import ScratchBuffer

from wire_reader import parse_sections, section_names


def _water_host() -> HostBuilder:
    b = HostBuilder()
    empty = b.fluid("empty")
    water = b.fluid("water")
    b.fluid_state(empty.id, is_empty=True)
    b.fluid_state(water.id, is_source=True, amount=8, legacy_block_state_id=2)
    b.fluid_state(water.id, is_falling=True, amount=8, legacy_block_state_id=3)
    b.fluid_state(water.id, amount=7, legacy_block_state_id=4)

    b.block("air")
    b.block("stone")
    b.block(
        "water",
        properties=[("level", ["0", "1", "2"])],
        states=[{"fluid_state_id": 1}, {"fluid_state_id": 2}, {"fluid_state_id": 3}],
    )
    b.block(
        "kelp",
        properties=[("age", ["0", "1"])],
        state={"fluid_state_id": 1},
    )
    return b


def test_fluid_state_names():
    host = _water_host().build()
    names = [fluid_state_name(s, host.fluids()) for s in host.fluid_states()]
    assert names == ["empty", "water_s_8", "water_f_8", "water_7"]


def test_source_and_falling_suffixes_combine():
    b = HostBuilder()
    lava = b.fluid("lava")
    state = b.fluid_state(lava.id, is_source=True, is_falling=True, amount=12)
    assert fluid_state_name(state, b.build().fluids()) == "lava_s_f_c"


def test_fluid_state_sections_in_order():
    buf = ScratchBuffer()
    write_fluid_state(buf, _water_host().build())
    text = buf.getvalue()

    assert section_names(text) == [
        "fluid_state",
        "fluid_to_block",
        "fluid_state_level",
        "fluid_state_falling",
        "fluid_state_to_fluid",
        "fluid_state_array",
        "block_to_fluid_state",
    ]

    sections = parse_sections(text)
    assert sections["fluid_to_block"].values == [0, 2, 3, 4]
    assert sections["fluid_state_level"].values == [0, 8, 8, 7]
    assert sections["fluid_state_falling"].values == [0, 0, 1, 0]
    assert sections["fluid_state_to_fluid"].values == [0, 1, 1, 1]


def test_uniform_blocks_share_collapsed_array():
    buf = ScratchBuffer()
    write_fluid_state(buf, _water_host().build())
    sections = parse_sections(buf.getvalue())

    # air and stone share [0]; kelp is uniformly a water source
    assert sections["fluid_state_array"].values == [[0], [1, 2, 3], [1]]
    assert sections["block_to_fluid_state"].values == [0, 0, 1, 2]
    assert sections["block_to_fluid_state"].lines == ["~2 0", "1", "2"]
