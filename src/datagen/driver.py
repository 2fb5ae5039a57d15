# src/datagen/driver.py
"""
Datagen driver.

Runs every dataset in a fixed order against one host snapshot:

    version, registries, packet, fluid_state, block_state, entity, item,
    then one tag file per configured registry

One ScratchBuffer is reused for the whole run and cleared between files.
Each finished buffer goes to the sink as ASCII bytes. The first error aborts
the run; files already written stay valid on their own, but the run as a
whole is reported as failed.
"""

from __future__ import annotations

import logging
import uuid
from dataclasses import dataclass
from typing import Callable, List, Optional, Tuple

from host.protocol import Host
from monitoring.bus import EventBus
from monitoring.events import EventType
from monitoring.logger import log_event
from projectors import (
    write_block_state,
    write_entity,
    write_fluid_state,
    write_item,
    write_packets,
    write_registries,
    write_tags,
    write_version,
)
from wire import ScratchBuffer

from .config import DatagenConfig
from .sink import Sink


log = logging.getLogger(__name__)

DatasetWriter = Callable[[ScratchBuffer, Host], None]


@dataclass
class DatasetResult:
    """What one dataset produced."""

    name: str
    sections: int
    size: int


def build_plan(config: DatagenConfig) -> List[Tuple[str, DatasetWriter]]:
    """
    The ordered (dataset name, writer) list for a run.

    New datasets are only ever appended, so existing readers keep working.
    """
    def block_state(buf: ScratchBuffer, host: Host) -> None:
        write_block_state(buf, host, reference_full_block=config.reference_full_block)

    plan: List[Tuple[str, DatasetWriter]] = [
        ("version", write_version),
        ("registries", write_registries),
        ("packet", write_packets),
        ("fluid_state", write_fluid_state),
        ("block_state", block_state),
        ("entity", write_entity),
        ("item", write_item),
    ]
    for out_name, registry in config.tag_registries.items():
        plan.append((out_name, _tag_writer(registry)))
    return plan


def _tag_writer(registry: str) -> DatasetWriter:
    def write(buf: ScratchBuffer, host: Host) -> None:
        write_tags(buf, host, registry)

    return write


def run_datagen(
    host: Host,
    sink: Sink,
    config: Optional[DatagenConfig] = None,
    bus: Optional[EventBus] = None,
) -> List[DatasetResult]:
    """
    Produce every dataset for `host` and hand each one to `sink`.

    Returns one DatasetResult per written file, in write order. Any
    DatagenError (or other exception) propagates after a RUN_FAILED event.
    """
    config = config or DatagenConfig()
    bus = bus or EventBus()
    run_id = uuid.uuid4().hex
    plan = build_plan(config)

    log_event(
        bus=bus,
        module="datagen.driver",
        event_type=EventType.RUN_STARTED,
        message="Datagen run started",
        payload={"version": host.version_name, "datasets": [name for name, _ in plan]},
        correlation_id=run_id,
    )
    log.info("Generating %d datasets for %s", len(plan), host.version_name)

    buf = ScratchBuffer()
    results: List[DatasetResult] = []
    current = None
    try:
        for name, writer in plan:
            current = name
            buf.clear()
            writer(buf, host)
            data = buf.encode()
            sink.write(name, data)

            result = DatasetResult(name=name, sections=buf.sections, size=len(data))
            results.append(result)
            log.info("Wrote %s: %d sections, %d bytes", name, result.sections, result.size)
            log_event(
                bus=bus,
                module="datagen.driver",
                event_type=EventType.DATASET_WRITTEN,
                message=f"Wrote {name}",
                payload={"dataset": name, "sections": result.sections, "bytes": result.size},
                correlation_id=run_id,
            )
    except Exception as exc:
        log.error("Datagen run failed while producing %s: %s", current, exc)
        log_event(
            bus=bus,
            module="datagen.driver",
            event_type=EventType.RUN_FAILED,
            message=f"Run failed while producing {current}",
            payload={"dataset": current, "exception_repr": repr(exc)},
            correlation_id=run_id,
        )
        raise
    finally:
        buf.clear()

    log_event(
        bus=bus,
        module="datagen.driver",
        event_type=EventType.RUN_COMPLETED,
        message="Datagen run completed",
        payload={"files": len(results), "bytes": sum(r.size for r in results)},
        correlation_id=run_id,
    )
    return results
