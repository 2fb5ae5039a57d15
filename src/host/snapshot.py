# src/host/snapshot.py
"""
Load a host dump into a HostSnapshot.

The dump is produced host-side (a small mod/agent that walks the live
registries) and is the only thing the CLI needs to run offline. JSON is the
default; `.yaml` / `.yml` files are read with PyYAML.

Shape (every list is in host id order; ids are positional):

  {
    "version": {"name": "1.21.10", "protocol": 773},
    "registries": [{"name": "block", "entries": ["air", "stone", ...]}, ...],
    "blocks": [
      {
        "path": "stone",
        "properties": [{"name": "waterlogged", "values": ["false", "true"]}],
        "default_state": 1,                 # global block-state id
        "dynamic_shape": false,
        "destroy_speed": 1.5, "explosion_resistance": 6.0,
        "friction": 0.6, "speed_factor": 1.0, "jump_factor": 1.0,
        "states": [
          {
            "solid_render": true, "collision_full_block": true, ...,
            "light_emission": 0, "light_block": 15, "fluid_state": 0,
            "sturdy": {"full": ["down", "up", ...], "center": [...], "rigid": [...]},
            "collision": [[0, 0, 0, 1, 1, 1]],
            "occlusion": [[0, 0, 0, 1, 1, 1]]
          }
        ]
      }
    ],
    "fluids": [{"path": "empty"}, ...],
    "fluid_states": [{"fluid": 0, "empty": true, "source": false, "falling": false,
                      "amount": 0, "legacy_block_state": 0}, ...],
    "items": [{"path": "stone", "max_stack_size": 64, "block": 1}, ...],
    "entity_types": [{"path": "pig", "height": 0.9, "width": 0.9, "fixed": false}, ...],
    "protocol_templates": [{"flow": "serverbound", "phase": "handshake",
                            "packets": [{"index": 0, "path": "intention"}]}, ...],
    "tags": {"block": [{"name": "logs", "members": [41, 42]}], ...}
  }
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Dict, FrozenSet, List, Optional, Tuple

import yaml

from datagen.errors import HostIntegrityError

from .model import (
    BlockInfo,
    BlockStateInfo,
    EntityTypeInfo,
    FluidInfo,
    FluidStateInfo,
    HostSnapshot,
    ItemInfo,
    PropertyInfo,
    ProtocolTemplateInfo,
    RegistryInfo,
    TagInfo,
)
from .protocol import Aabb, Direction, SupportType


log = logging.getLogger(__name__)

_STATE_FLAGS = (
    "solid_render",
    "collision_full_block",
    "propagates_skylight",
    "redstone_conductor",
    "can_occlude",
    "can_be_replaced",
    "ignited_by_lava",
    "use_shape_for_light_occlusion",
    "signal_source",
    "large_collision_shape",
    "analog_output",
    "requires_correct_tool",
)


# ---------------------------------------------------------------------------
# Low-level readers
# ---------------------------------------------------------------------------

def _read_dump(path: Path) -> Dict[str, Any]:
    if not path.exists():
        raise FileNotFoundError(f"Missing host dump: {path}")
    with path.open("r", encoding="utf-8") as f:
        if path.suffix in (".yaml", ".yml"):
            data = yaml.safe_load(f)
        else:
            data = json.load(f)
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ValueError(f"Host dump {path} must be a mapping at top level.")
    return data


def _list(data: Dict[str, Any], key: str) -> List[Any]:
    value = data.get(key) or []
    if not isinstance(value, list):
        raise HostIntegrityError(key, None, "expected a list")
    return value


def _entry(table: str, index: int, raw: Any) -> Dict[str, Any]:
    if not isinstance(raw, dict):
        raise HostIntegrityError(table, index, f"expected a mapping, got {type(raw).__name__}")
    return raw


def _required(table: str, index: int, raw: Dict[str, Any], key: str) -> Any:
    if raw.get(key) is None:
        raise HostIntegrityError(table, index, f"missing {key!r}")
    return raw[key]


def _direction(table: str, index: int, value: Any) -> Direction:
    try:
        if isinstance(value, str):
            return Direction[value.upper()]
        return Direction(int(value))
    except (KeyError, ValueError) as exc:
        raise HostIntegrityError(table, index, f"bad direction {value!r}") from exc


def _boxes(table: str, index: int, raw: Any) -> Tuple[Aabb, ...]:
    boxes = []
    for box in raw or []:
        if not isinstance(box, (list, tuple)) or len(box) != 6:
            raise HostIntegrityError(table, index, f"box must have 6 coordinates: {box!r}")
        boxes.append(Aabb(*(float(c) for c in box)))
    return tuple(boxes)


# ---------------------------------------------------------------------------
# Table builders
# ---------------------------------------------------------------------------

def _build_state(state_id: int, block_id: int, raw: Dict[str, Any]) -> BlockStateInfo:
    raw_sturdy = raw.get("sturdy") or {}
    if not isinstance(raw_sturdy, dict):
        raise HostIntegrityError("block_state", state_id, "sturdy must map support type -> faces")
    sturdy: Dict[SupportType, FrozenSet[Direction]] = {}
    for support in SupportType:
        faces = raw_sturdy.get(support.value) or []
        if not isinstance(faces, list):
            raise HostIntegrityError("block_state", state_id, f"sturdy.{support.value} must be a list")
        sturdy[support] = frozenset(_direction("block_state", state_id, f) for f in faces)

    flags = {name: bool(raw.get(name, False)) for name in _STATE_FLAGS}
    return BlockStateInfo(
        id=state_id,
        block_id=block_id,
        light_emission=int(raw.get("light_emission", 0)),
        light_block=int(raw.get("light_block", 0)),
        fluid_state_id=int(raw.get("fluid_state", 0)),
        sturdy_faces=sturdy,
        collision=_boxes("block_state", state_id, raw.get("collision")),
        occlusion=_boxes("block_state", state_id, raw.get("occlusion")),
        **flags,
    )


def _build_blocks(data: Dict[str, Any]) -> List[BlockInfo]:
    blocks: List[BlockInfo] = []
    next_state = 0
    for block_id, raw in enumerate(_list(data, "blocks")):
        raw = _entry("block", block_id, raw)
        path = _required("block", block_id, raw, "path")

        properties = [
            PropertyInfo(
                name=_required("block_property", block_id, p, "name"),
                value_names=tuple(str(v) for v in p.get("values") or []),
            )
            for p in (_entry("block_property", block_id, p) for p in raw.get("properties") or [])
        ]

        raw_states = raw.get("states") or []
        if not raw_states:
            raise HostIntegrityError("block", block_id, f"block {path!r} has no states")
        states = []
        for raw_state in raw_states:
            states.append(_build_state(next_state, block_id, _entry("block_state", next_state, raw_state)))
            next_state += 1

        default_state = int(raw.get("default_state", states[0].id))
        if not states[0].id <= default_state <= states[-1].id:
            raise HostIntegrityError(
                "block", block_id, f"default state {default_state} is not one of its states"
            )

        blocks.append(
            BlockInfo(
                id=block_id,
                path=path,
                properties=properties,
                states=states,
                default_state_id=default_state,
                has_dynamic_shape=bool(raw.get("dynamic_shape", False)),
                destroy_speed=float(raw.get("destroy_speed", 0.0)),
                explosion_resistance=float(raw.get("explosion_resistance", 0.0)),
                friction=float(raw.get("friction", 0.6)),
                speed_factor=float(raw.get("speed_factor", 1.0)),
                jump_factor=float(raw.get("jump_factor", 1.0)),
            )
        )
    return blocks


def _build_templates(data: Dict[str, Any]) -> List[ProtocolTemplateInfo]:
    templates = []
    for index, raw in enumerate(_list(data, "protocol_templates")):
        raw = _entry("protocol_template", index, raw)
        packets: List[Tuple[Optional[str], int]] = []
        for p in raw.get("packets") or []:
            p = _entry("protocol_template", index, p)
            packets.append((p.get("path"), int(_required("protocol_template", index, p, "index"))))
        templates.append(
            ProtocolTemplateInfo(
                flow=_required("protocol_template", index, raw, "flow"),
                phase=_required("protocol_template", index, raw, "phase"),
                packets=packets,
            )
        )
    return templates


def _build_tags(data: Dict[str, Any]) -> Dict[str, List[TagInfo]]:
    raw_tags = data.get("tags") or {}
    if not isinstance(raw_tags, dict):
        raise HostIntegrityError("tags", None, "expected a mapping of registry -> tag list")
    out: Dict[str, List[TagInfo]] = {}
    for registry, tag_list in raw_tags.items():
        tags = []
        for index, raw in enumerate(tag_list or []):
            raw = _entry(f"{registry}_tags", index, raw)
            tags.append(
                TagInfo(
                    name=_required(f"{registry}_tags", index, raw, "name"),
                    member_ids=[int(m) for m in raw.get("members") or []],
                )
            )
        out[str(registry)] = tags
    return out


# ---------------------------------------------------------------------------
# Cross-references
# ---------------------------------------------------------------------------

def _check_id(table: str, index: int, field_name: str, value: Optional[int], limit: int) -> None:
    if value is not None and not 0 <= value < limit:
        raise HostIntegrityError(table, index, f"{field_name} {value} out of range (0..{limit - 1})")


def _check_references(snapshot: HostSnapshot) -> None:
    """Every id one table stores must exist in the table it points into."""
    n_blocks = len(snapshot.block_list)
    n_fluids = len(snapshot.fluid_list)
    n_fluid_states = len(snapshot.fluid_state_list)
    n_states = sum(len(b.states) for b in snapshot.block_list)

    # a dump without fluid states still lets every block state point at 0
    for state in snapshot.block_states():
        _check_id("block_state", state.id, "fluid_state", state.fluid_state_id, max(n_fluid_states, 1))
    for fs in snapshot.fluid_state_list:
        _check_id("fluid_state", fs.id, "fluid", fs.fluid_id, n_fluids)
        _check_id("fluid_state", fs.id, "legacy_block_state", fs.legacy_block_state_id, n_states)
    for item in snapshot.item_list:
        _check_id("item", item.id, "block", item.block_id, n_blocks)


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------

def snapshot_from_dict(data: Dict[str, Any]) -> HostSnapshot:
    """Build a HostSnapshot from an already-parsed dump mapping."""
    version = data.get("version") or {}
    if not isinstance(version, dict) or "name" not in version or "protocol" not in version:
        raise HostIntegrityError("version", None, "dump must define version.name and version.protocol")

    registries = [
        RegistryInfo(
            name=_required("registries", i, _entry("registries", i, r), "name"),
            entries=list(r.get("entries") or []),
        )
        for i, r in enumerate(_list(data, "registries"))
    ]

    fluids = [
        FluidInfo(id=i, path=_required("fluid", i, _entry("fluid", i, f), "path"))
        for i, f in enumerate(_list(data, "fluids"))
    ]

    fluid_states = []
    for i, raw in enumerate(_list(data, "fluid_states")):
        raw = _entry("fluid_state", i, raw)
        fluid_states.append(
            FluidStateInfo(
                id=i,
                fluid_id=int(_required("fluid_state", i, raw, "fluid")),
                is_empty=bool(raw.get("empty", False)),
                is_source=bool(raw.get("source", False)),
                is_falling=bool(raw.get("falling", False)),
                amount=int(raw.get("amount", 0)),
                legacy_block_state_id=int(raw.get("legacy_block_state", 0)),
            )
        )

    items = []
    for i, raw in enumerate(_list(data, "items")):
        raw = _entry("item", i, raw)
        block = raw.get("block")
        items.append(
            ItemInfo(
                id=i,
                path=_required("item", i, raw, "path"),
                max_stack_size=int(raw.get("max_stack_size", 64)),
                block_id=None if block is None else int(block),
            )
        )

    entity_types = []
    for i, raw in enumerate(_list(data, "entity_types")):
        raw = _entry("entity_type", i, raw)
        entity_types.append(
            EntityTypeInfo(
                id=i,
                path=_required("entity_type", i, raw, "path"),
                height=float(raw.get("height", 0.0)),
                width=float(raw.get("width", 0.0)),
                fixed_dimensions=bool(raw.get("fixed", False)),
            )
        )

    snapshot = HostSnapshot(
        version_name=str(version["name"]),
        protocol_version=int(version["protocol"]),
        registry_list=registries,
        block_list=_build_blocks(data),
        item_list=items,
        entity_type_list=entity_types,
        fluid_list=fluids,
        fluid_state_list=fluid_states,
        template_list=_build_templates(data),
        tag_sets=_build_tags(data),
    )
    _check_references(snapshot)
    return snapshot


def load_snapshot(path: Path) -> HostSnapshot:
    """Read a dump file (JSON or YAML) and return the resolved snapshot."""
    path = Path(path)
    snapshot = snapshot_from_dict(_read_dump(path))
    log.info(
        "Loaded host snapshot %s (version %s, %d blocks, %d items)",
        path,
        snapshot.version_name,
        len(snapshot.block_list),
        len(snapshot.item_list),
    )
    return snapshot


__all__ = ["load_snapshot", "snapshot_from_dict"]
