# src/datagen/config.py
"""
Datagen configuration.

Resolved from config/datagen.yaml:

  datagen:
    output_dir: "generated"            # where DirectorySink puts the files
    snapshot: "config/raw/host_snapshot.json"
    suffix: ".txt"
    reference_full_block: "mud"        # null disables the sturdy-face check
    event_log: "logs/datagen/events.log"
    log_level: "INFO"
    tag_registries:                    # output file -> host registry
      block_tags: block
      item_tags: item
      entity_tags: entity_type
      game_event_tags: game_event

Every key is optional; CLI flags override what the file says.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Optional

import yaml


PROJECT_ROOT = Path(__file__).resolve().parents[2]
CONFIG_ROOT = PROJECT_ROOT / "config"
DEFAULT_CONFIG_NAME = "datagen.yaml"

# Order here is the order the tag files are written in.
DEFAULT_TAG_REGISTRIES: Dict[str, str] = {
    "block_tags": "block",
    "item_tags": "item",
    "entity_tags": "entity_type",
    "game_event_tags": "game_event",
}

_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")

# Fixed datasets; tag outputs must not reuse these names.
RESERVED_DATASETS = frozenset(
    ("version", "registries", "packet", "fluid_state", "block_state", "entity", "item")
)


@dataclass
class DatagenConfig:
    """Resolved settings for one run."""

    output_dir: Path = Path("generated")
    snapshot: Optional[Path] = None
    suffix: str = ".txt"
    reference_full_block: Optional[str] = None
    tag_registries: Dict[str, str] = field(default_factory=lambda: dict(DEFAULT_TAG_REGISTRIES))
    event_log: Optional[Path] = None
    log_level: str = "INFO"

    @property
    def level(self) -> int:
        return getattr(logging, self.log_level)


# ---------------------------------------------------------------------------
# Internal helpers
# ---------------------------------------------------------------------------

def _load_yaml(path: Path) -> Dict[str, Any]:
    """Load a YAML config file; the top level must be a mapping."""
    if not path.exists():
        raise FileNotFoundError(f"Missing config file: {path}")
    with path.open("r", encoding="utf-8") as f:
        data = yaml.safe_load(f) or {}
    if not isinstance(data, dict):
        raise ValueError(f"Expected mapping at top of {path}, got {type(data)}")
    return data


def _optional_path(value: Any) -> Optional[Path]:
    if value is None or value == "":
        return None
    return Path(str(value))


def validate_config(cfg: DatagenConfig) -> None:
    """Sanity checks; rerun by the CLI after its flag overrides."""
    if cfg.suffix and not cfg.suffix.startswith("."):
        raise ValueError(f"suffix must be empty or start with '.', got {cfg.suffix!r}")
    if cfg.log_level not in _LOG_LEVELS:
        raise ValueError(f"Invalid log_level: {cfg.log_level}")
    for out_name, registry in cfg.tag_registries.items():
        if not isinstance(out_name, str) or not isinstance(registry, str):
            raise ValueError("tag_registries must map output names to registry names.")
        if not out_name or "/" in out_name:
            raise ValueError(f"Invalid tag output name: {out_name!r}")
        if out_name in RESERVED_DATASETS:
            raise ValueError(f"Tag output {out_name!r} clashes with a fixed dataset.")


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------

def config_from_dict(raw: Dict[str, Any]) -> DatagenConfig:
    """Build a DatagenConfig from the `datagen:` mapping."""
    section = raw.get("datagen", raw) or {}
    if not isinstance(section, dict):
        raise ValueError("'datagen' must be a mapping.")

    tag_registries = section.get("tag_registries")
    if tag_registries is None:
        tag_registries = dict(DEFAULT_TAG_REGISTRIES)
    elif not isinstance(tag_registries, dict):
        raise ValueError("tag_registries must be a mapping.")

    cfg = DatagenConfig(
        output_dir=Path(str(section.get("output_dir", "generated"))),
        snapshot=_optional_path(section.get("snapshot")),
        suffix=str(section.get("suffix", ".txt") or ""),
        reference_full_block=section.get("reference_full_block"),
        tag_registries=dict(tag_registries),
        event_log=_optional_path(section.get("event_log")),
        log_level=str(section.get("log_level", "INFO")).upper(),
    )
    validate_config(cfg)
    return cfg


def load_datagen_config(path: Optional[Path] = None) -> DatagenConfig:
    """Main entry point: read datagen.yaml (default: CONFIG_ROOT) and resolve it."""
    return config_from_dict(_load_yaml(path or CONFIG_ROOT / DEFAULT_CONFIG_NAME))
