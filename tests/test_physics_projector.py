# tests/test_physics_projector.py
"""
Tests for the physics/shape projector: float tables, block settings,
shape table, per-state flags and static bounds.
"""

from __future__ import annotations

import pytest

from datagen.errors import HostIntegrityError
from host.protocol import Aabb, Direction, SupportType
from host.testing import FULL_CUBE, HostBuilder
from projectors.physics import bounds_record, project_shapes, state_flags, write_physics
from wire import ScratchBuffer, f32_bits, f64_bits

from wire_reader import parse_sections


def _physics(host):
    buf = ScratchBuffer()
    write_physics(buf, host)
    return parse_sections(buf.getvalue())


ONES = dict(
    destroy_speed=1.0,
    explosion_resistance=1.0,
    friction=1.0,
    speed_factor=1.0,
    jump_factor=1.0,
)


def test_identical_unit_settings_hit_the_seeded_floats():
    b = HostBuilder()
    b.block("a", **ONES)
    b.block("b", **ONES)
    sections = _physics(b.build())

    assert sections["float32_table"].values == [0, f32_bits(1.0)]
    assert sections["float32_table"].lines == ["0", "3f800000"]
    assert sections["block_settings_table"].values == [[1, 1, 1, 1, 1]]
    assert sections["block_settings"].lines == ["~2 0"]


def test_settings_float_insertion_order_and_record_layout():
    b = HostBuilder()
    b.block(
        "plank",
        destroy_speed=2.0,
        friction=0.6,
        speed_factor=0.4,
        jump_factor=0.5,
        explosion_resistance=3.0,
    )
    sections = _physics(b.build())

    assert sections["float32_table"].values == [
        0,
        f32_bits(1.0),
        f32_bits(2.0),
        f32_bits(0.6),
        f32_bits(0.4),
        f32_bits(0.5),
        f32_bits(3.0),
    ]
    # (hardness, blast, friction, speed, jump)
    assert sections["block_settings_table"].values == [[2, 6, 3, 4, 5]]


def test_shape_coordinates_interned_min_then_max():
    b = HostBuilder()
    box = Aabb(0.25, 0.0, 0.125, 0.75, 0.5, 0.875)
    b.block("odd", state={"collision": (box,), "can_occlude": True, "occlusion": (box,)})
    sections = _physics(b.build())

    assert sections["float64_table"].values == [
        0,
        f64_bits(1.0),
        f64_bits(0.25),
        f64_bits(0.125),
        f64_bits(0.75),
        f64_bits(0.5),
        f64_bits(0.875),
    ]
    assert sections["shape_table"].values == [[2, 0, 3, 4, 5, 6]]


def test_occlusion_shape_only_interned_when_state_can_occlude():
    b = HostBuilder()
    half = Aabb(0.0, 0.0, 0.0, 1.0, 0.5, 1.0)
    b.block("air")
    b.block("glass_like", state={"collision": (FULL_CUBE,), "occlusion": (half,)})
    shapes = project_shapes(b.build().blocks())

    assert list(shapes) == [(), (tuple(FULL_CUBE),)]


def test_uniform_bounds_collapse_and_are_shared_between_blocks():
    b = HostBuilder()
    b.block("a", properties=[("p", ["x", "y"])], state=b.solid_state())
    b.block("b", state=b.solid_state())
    sections = _physics(b.build())

    solid = [1 | 2 | 8 | (15 << 4), 63, 63, 63, 0, 0]
    assert sections["block_state_static_bounds_table"].values == [[], solid]
    assert sections["block_state_static_bounds_map"].values == [[], [1]]
    assert sections["block_state_static_bounds"].lines == ["~2 1"]


def test_dynamic_shape_block_maps_to_empty_bounds():
    b = HostBuilder()
    b.block("air")
    b.block(
        "fence",
        properties=[("east", ["true", "false"]), ("north", ["true", "false"])],
        has_dynamic_shape=True,
        state={"collision": (Aabb(0.375, 0.0, 0.375, 0.625, 1.5, 0.625),)},
    )
    sections = _physics(b.build())

    assert sections["block_state_static_bounds"].values == [1, 0]
    # dynamic states contribute no shapes
    assert sections["shape_table"].values == [[]]


def test_mixed_states_keep_full_per_state_array():
    b = HostBuilder()
    top = b.solid_state(collision=(Aabb(0, 0.5, 0, 1, 1, 1),), occlusion=(Aabb(0, 0.5, 0, 1, 1, 1),))
    bottom = b.solid_state(collision=(Aabb(0, 0, 0, 1, 0.5, 1),), occlusion=(Aabb(0, 0, 0, 1, 0.5, 1),))
    b.block("slab", properties=[("type", ["top", "bottom"])], states=[top, bottom])
    sections = _physics(b.build())

    assert sections["block_state_static_bounds_map"].values == [[], [1, 2]]


def test_state_flag_bits():
    b = HostBuilder()
    block = b.block(
        "comparator_like",
        state={
            "analog_output": True,
            "can_be_replaced": True,
            "use_shape_for_light_occlusion": True,
            "light_emission": 7,
        },
    )
    state = block.states[0]
    assert state_flags(state) == 0b10100001

    sections = _physics(b.build())
    assert sections["block_state_flags"].values == [0xA1]
    assert sections["block_state_luminance"].values == [7]


def test_every_state_flag_has_its_own_bit():
    fields = [
        "analog_output",
        "signal_source",
        "large_collision_shape",
        "requires_correct_tool",
        "can_occlude",
        "can_be_replaced",
        "ignited_by_lava",
        "use_shape_for_light_occlusion",
    ]
    b = HostBuilder()
    for bit, name in enumerate(fields):
        block = b.block(f"b{bit}", state={name: True})
        assert state_flags(block.states[0]) == 1 << bit


def test_bounds_record_packs_flags_and_sturdy_masks():
    b = HostBuilder()
    block = b.block(
        "odd",
        state={
            "propagates_skylight": True,
            "light_block": 3,
            "sturdy_faces": {
                SupportType.FULL: frozenset({Direction.DOWN, Direction.EAST}),
                SupportType.CENTER: frozenset({Direction.UP}),
            },
        },
    )
    shapes = project_shapes(b.build().blocks())
    assert bounds_record(block.states[0], shapes) == (4 | (3 << 4), 33, 2, 0, 0, 0)


def test_occlusion_shape_never_interned_is_fatal():
    b = HostBuilder()
    b.block(
        "weird",
        state={"collision": (Aabb(0, 0, 0, 1, 0.5, 1),), "occlusion": ()},
    )
    with pytest.raises(HostIntegrityError, match="block_state\\[0\\]"):
        _physics(b.build())
