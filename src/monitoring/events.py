# path: src/monitoring/events.py
"""
Event schema for datagen run monitoring.

This module defines:
- EventType enum
- MonitoringEvent (structured run events)

All events are JSON-serializable via `.to_dict()` and are intended for use
with monitoring.bus.EventBus and monitoring.logger.JsonFileLogger.
"""

from __future__ import annotations

from dataclasses import dataclass, asdict
from enum import Enum, auto
from typing import Any, Dict, Optional


# ============================================================
# Event Types
# ============================================================

class EventType(Enum):
    """Typed monitoring events emitted during a datagen run."""

    # Run lifecycle
    RUN_STARTED = auto()
    RUN_COMPLETED = auto()
    RUN_FAILED = auto()

    # One output file handed to the sink
    DATASET_WRITTEN = auto()

    # Free-form progress messages (snapshot loaded, ...)
    LOG = auto()


# ============================================================
# Monitoring Event Structure
# ============================================================

@dataclass
class MonitoringEvent:
    """
    Runtime event emitted by the driver or the CLI.

    All fields must be JSON-safe.
    """

    ts: float                   # UNIX timestamp (seconds)
    module: str                 # Source module string ("datagen.driver", ...)
    event_type: EventType       # Enum describing the event class
    message: str                # Short human-readable description
    payload: Dict[str, Any]     # Structured data (dataset name, byte count, error)
    correlation_id: Optional[str] = None  # Groups the events of one run

    def to_dict(self) -> Dict[str, Any]:
        """Convert to a JSON-safe dict for loggers."""
        data = asdict(self)
        data["event_type"] = self.event_type.name  # store name, not enum
        return data
