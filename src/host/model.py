# In-memory host snapshot
# src/host/model.py
"""
Dataclass snapshot of a host game, implementing host.protocol.Host.

A snapshot is what the extractor sees when it is not attached to a live
game: either loaded from a dump (host.snapshot.load_snapshot) or assembled
in tests (host.testing.fakes.HostBuilder).

Ids are positional: the n-th block in `blocks` has id n, and the states of
all blocks, concatenated in block order, are the global block-state ids.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, FrozenSet, List, Optional, Sequence, Tuple

from .protocol import Aabb, Direction, SupportType


@dataclass
class PropertyInfo:
    """A block property: `name` plus canonical value names ("true", "north", "0")."""

    name: str
    value_names: Tuple[str, ...] = ()


@dataclass
class BlockStateInfo:
    """
    One concrete block configuration.

    `sturdy_faces` maps a support type to the set of faces that are sturdy
    for it; missing entries mean "no sturdy faces".
    """

    id: int
    block_id: int = 0
    solid_render: bool = False
    collision_full_block: bool = False
    propagates_skylight: bool = False
    redstone_conductor: bool = False
    can_occlude: bool = False
    can_be_replaced: bool = False
    ignited_by_lava: bool = False
    use_shape_for_light_occlusion: bool = False
    signal_source: bool = False
    large_collision_shape: bool = False
    analog_output: bool = False
    requires_correct_tool: bool = False
    light_emission: int = 0
    light_block: int = 0
    fluid_state_id: int = 0
    sturdy_faces: Dict[SupportType, FrozenSet[Direction]] = field(default_factory=dict)
    collision: Tuple[Aabb, ...] = ()
    occlusion: Tuple[Aabb, ...] = ()

    def is_face_sturdy(self, direction: Direction, support: SupportType) -> bool:
        return direction in self.sturdy_faces.get(support, frozenset())

    def collision_shape(self) -> Sequence[Aabb]:
        return self.collision

    def occlusion_shape(self) -> Sequence[Aabb]:
        return self.occlusion


@dataclass
class BlockInfo:
    """
    A block and its possible states.

    - destroy_speed: hardness of the default state at the origin of an empty world
    - has_dynamic_shape: collision depends on world context, so no bounds are precomputed
    """

    id: int
    path: str
    properties: List[PropertyInfo] = field(default_factory=list)
    states: List[BlockStateInfo] = field(default_factory=list)
    default_state_id: int = 0
    has_dynamic_shape: bool = False
    destroy_speed: float = 0.0
    explosion_resistance: float = 0.0
    friction: float = 0.6
    speed_factor: float = 1.0
    jump_factor: float = 1.0


@dataclass
class FluidInfo:
    id: int
    path: str


@dataclass
class FluidStateInfo:
    """
    One fluid state. `legacy_block_state_id` is the block state the host
    creates when the fluid is placed as a block.
    """

    id: int
    fluid_id: int
    is_empty: bool = False
    is_source: bool = False
    is_falling: bool = False
    amount: int = 0
    legacy_block_state_id: int = 0


@dataclass
class ItemInfo:
    """`block_id` is set only for block items."""

    id: int
    path: str
    max_stack_size: int = 64
    block_id: Optional[int] = None


@dataclass
class EntityTypeInfo:
    id: int
    path: str
    height: float = 0.0
    width: float = 0.0
    fixed_dimensions: bool = False


@dataclass
class ProtocolTemplateInfo:
    """Packets of one flow/phase pair, as (packet path, index) pairs."""

    flow: str
    phase: str
    packets: List[Tuple[Optional[str], int]] = field(default_factory=list)

    def list_packets(self) -> List[Tuple[Optional[str], int]]:
        return list(self.packets)


@dataclass
class TagInfo:
    name: str
    member_ids: List[int] = field(default_factory=list)


@dataclass
class RegistryInfo:
    """A named registry; `entries[i]` is the path of id i (None if unkeyed)."""

    name: str
    entries: List[Optional[str]] = field(default_factory=list)


@dataclass
class HostSnapshot:
    """Frozen view of every registry the extractor reads."""

    version_name: str
    protocol_version: int
    registry_list: List[RegistryInfo] = field(default_factory=list)
    block_list: List[BlockInfo] = field(default_factory=list)
    item_list: List[ItemInfo] = field(default_factory=list)
    entity_type_list: List[EntityTypeInfo] = field(default_factory=list)
    fluid_list: List[FluidInfo] = field(default_factory=list)
    fluid_state_list: List[FluidStateInfo] = field(default_factory=list)
    template_list: List[ProtocolTemplateInfo] = field(default_factory=list)
    tag_sets: Dict[str, List[TagInfo]] = field(default_factory=dict)

    def registries(self) -> List[RegistryInfo]:
        return self.registry_list

    def blocks(self) -> List[BlockInfo]:
        return self.block_list

    def block_states(self) -> List[BlockStateInfo]:
        return [state for block in self.block_list for state in block.states]

    def items(self) -> List[ItemInfo]:
        return self.item_list

    def entity_types(self) -> List[EntityTypeInfo]:
        return self.entity_type_list

    def fluids(self) -> List[FluidInfo]:
        return self.fluid_list

    def fluid_states(self) -> List[FluidStateInfo]:
        return self.fluid_state_list

    def protocol_templates(self) -> List[ProtocolTemplateInfo]:
        return self.template_list

    def tags(self, registry: str) -> List[TagInfo]:
        return self.tag_sets.get(registry, [])
