# monitoring package
# src/monitoring/__init__.py
"""In-process run events: EventBus, MonitoringEvent, JSON-lines run log."""

from __future__ import annotations

from .bus import EventBus
from .events import EventType, MonitoringEvent
from .logger import JsonFileLogger, log_event

__all__ = [
    "EventBus",
    "EventType",
    "MonitoringEvent",
    "JsonFileLogger",
    "log_event",
]
