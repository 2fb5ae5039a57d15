# Host query interface
# src/host/protocol.py
"""
Read-only query surface the extractor consumes from the host game.

Everything is enumerated in stable id order. The extractor never mutates
what it gets back; a host implementation may hand out live objects as long
as they do not change for the duration of one run.

host.model.HostSnapshot is the in-repo implementation (loaded from a dump
or built by tests).
"""

from __future__ import annotations

from enum import Enum, IntEnum
from typing import Iterable, NamedTuple, Optional, Protocol, Sequence, Tuple


class Direction(IntEnum):
    """Cardinal faces, valued by the host's 3-D face index."""

    DOWN = 0
    UP = 1
    NORTH = 2
    SOUTH = 3
    WEST = 4
    EAST = 5


class SupportType(Enum):
    """Support categories used by face sturdiness checks."""

    FULL = "full"
    CENTER = "center"
    RIGID = "rigid"


class Aabb(NamedTuple):
    """Axis-aligned box in block-local coordinates."""

    min_x: float
    min_y: float
    min_z: float
    max_x: float
    max_y: float
    max_z: float


class Property(Protocol):
    """A named block property and its canonical value names, in host order."""

    name: str
    value_names: Sequence[str]


class BlockState(Protocol):
    id: int
    solid_render: bool
    collision_full_block: bool
    propagates_skylight: bool
    redstone_conductor: bool
    can_occlude: bool
    can_be_replaced: bool
    ignited_by_lava: bool
    use_shape_for_light_occlusion: bool
    signal_source: bool
    large_collision_shape: bool
    analog_output: bool
    requires_correct_tool: bool
    light_emission: int
    light_block: int
    fluid_state_id: int

    def is_face_sturdy(self, direction: Direction, support: SupportType) -> bool:
        ...

    def collision_shape(self) -> Sequence[Aabb]:
        """Collision boxes in an empty world at the origin."""
        ...

    def occlusion_shape(self) -> Sequence[Aabb]:
        ...


class Block(Protocol):
    id: int
    path: str
    properties: Sequence[Property]
    states: Sequence[BlockState]
    default_state_id: int
    has_dynamic_shape: bool
    destroy_speed: float
    explosion_resistance: float
    friction: float
    speed_factor: float
    jump_factor: float


class Fluid(Protocol):
    id: int
    path: str


class FluidState(Protocol):
    id: int
    fluid_id: int
    is_empty: bool
    is_source: bool
    is_falling: bool
    amount: int
    legacy_block_state_id: int


class Item(Protocol):
    id: int
    path: str
    max_stack_size: int
    block_id: Optional[int]


class EntityType(Protocol):
    id: int
    path: str
    height: float
    width: float
    fixed_dimensions: bool


class ProtocolTemplate(Protocol):
    flow: str
    phase: str

    def list_packets(self) -> Iterable[Tuple[Optional[str], int]]:
        """Yield (packet path, index) pairs; the path may be None if missing."""
        ...


class TagSet(Protocol):
    name: str
    member_ids: Sequence[int]


class Registry(Protocol):
    name: str
    entries: Sequence[Optional[str]]


class Host(Protocol):
    """Everything the extractor asks of the host game."""

    version_name: str
    protocol_version: int

    def registries(self) -> Sequence[Registry]:
        ...

    def blocks(self) -> Sequence[Block]:
        ...

    def block_states(self) -> Sequence[BlockState]:
        ...

    def items(self) -> Sequence[Item]:
        ...

    def entity_types(self) -> Sequence[EntityType]:
        ...

    def fluids(self) -> Sequence[Fluid]:
        ...

    def fluid_states(self) -> Sequence[FluidState]:
        ...

    def protocol_templates(self) -> Sequence[ProtocolTemplate]:
        ...

    def tags(self, registry: str) -> Sequence[TagSet]:
        """Named tag sets of `registry`, in any order."""
        ...
