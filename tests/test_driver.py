# tests/test_driver.py
"""
End-to-end tests for datagen.driver.run_datagen and the sinks.
"""

from __future__ import annotations

from pathlib import Path
from typing import List

import pytest

from datagen.config import DatagenConfig
from datagen.driver import build_plan, run_datagen
from datagen.errors import HostIntegrityError, SinkWriteError
from datagen.sink import DirectorySink, MemorySink
from host.snapshot import load_snapshot
from host.testing import HostBuilder
from monitoring.bus import EventBus
from monitoring.events import EventType, MonitoringEvent

from wire_reader import parse_sections, section_names


FILE_ORDER = [
    "version",
    "registries",
    "packet",
    "fluid_state",
    "block_state",
    "entity",
    "item",
    "block_tags",
    "item_tags",
    "entity_tags",
    "game_event_tags",
]


@pytest.fixture
def sample_host(sample_snapshot_path: Path):
    return load_snapshot(sample_snapshot_path)


def test_plan_order_follows_tag_config():
    cfg = DatagenConfig(tag_registries={"fluid_tags": "fluid"})
    assert [name for name, _ in build_plan(cfg)] == FILE_ORDER[:7] + ["fluid_tags"]


def test_sample_run_writes_every_file_in_order(sample_host):
    sink = MemorySink()
    results = run_datagen(sample_host, sink, DatagenConfig(reference_full_block="mud"))

    assert [r.name for r in results] == FILE_ORDER
    assert list(sink.files) == FILE_ORDER
    for r in results:
        assert r.size == len(sink.files[r.name])

    assert sink.text("version") == "1.21.10\n305\n"
    assert section_names(sink.text("registries")) == [
        "block",
        "fluid",
        "item",
        "entity_type",
        "game_event",
    ]
    assert sink.text("block_tags") == (
        "base_stone_overworld\n1 \nfences\n5 \nslabs\n4 \n"
    )
    assert sink.text("game_event_tags") == "vibrations\n0 1 \n"
    assert sink.text("entity_tags") == "skeletons\n\n"


def test_sample_block_state_dataset(sample_host):
    sink = MemorySink()
    results = run_datagen(sample_host, sink)
    block_state = next(r for r in results if r.name == "block_state")
    assert block_state.sections == 17

    sections = parse_sections(sink.text("block_state"))
    # global default state ids 0 1 2 3 7 9
    assert sections["block_to_default_block_state"].values == [0, 0, 0, 0, 3, 1]
    # stick is not a block item and maps to air (block 0)
    assert sections["block_item_to_block"].values == [0, 0, 0, 1, 0xFFFFFFFB, 4]
    # oak_fence has a dynamic shape
    assert sections["block_state_static_bounds"].values[5] == 0
    assert len(sections["block_state_flags"].values) == 10


def test_output_is_byte_identical_across_runs(sample_host):
    first, second = MemorySink(), MemorySink()
    run_datagen(sample_host, first)
    run_datagen(sample_host, second)
    assert first.files == second.files


def test_events_published_for_each_dataset(sample_host):
    bus = EventBus()
    seen: List[MonitoringEvent] = []
    bus.subscribe(seen.append)

    run_datagen(sample_host, MemorySink(), bus=bus)

    types = [e.event_type for e in seen]
    assert types[0] == EventType.RUN_STARTED
    assert types[-1] == EventType.RUN_COMPLETED
    assert types.count(EventType.DATASET_WRITTEN) == len(FILE_ORDER)
    assert len({e.correlation_id for e in seen}) == 1


def test_failure_publishes_run_failed_and_propagates():
    b = HostBuilder()
    b.block("air")
    b.template("clientbound", "play", [None])
    host = b.build()

    bus = EventBus()
    seen: List[MonitoringEvent] = []
    bus.subscribe(seen.append)
    sink = MemorySink()

    with pytest.raises(HostIntegrityError, match="clientbound/play"):
        run_datagen(host, sink, bus=bus)

    # files before the failing one were already handed over
    assert list(sink.files) == ["version", "registries"]
    assert seen[-1].event_type == EventType.RUN_FAILED
    assert seen[-1].payload["dataset"] == "packet"


def test_directory_sink_writes_named_files(tmp_path: Path, sample_host):
    sink = DirectorySink(tmp_path / "out")
    run_datagen(sample_host, sink)

    written = sorted(p.name for p in (tmp_path / "out").iterdir())
    assert written == sorted(f"{name}.txt" for name in FILE_ORDER)
    assert (tmp_path / "out" / "version.txt").read_bytes() == b"1.21.10\n305\n"


def test_directory_sink_replaces_whole_file(tmp_path: Path):
    sink = DirectorySink(tmp_path, suffix="")
    sink.write("item", b"old contents that are longer\n")
    sink.write("item", b"new\n")

    assert (tmp_path / "item").read_bytes() == b"new\n"
    assert [p.name for p in tmp_path.iterdir()] == ["item"]


def test_directory_sink_failure_is_sink_error(tmp_path: Path):
    blocker = tmp_path / "not_a_dir"
    blocker.write_text("x", encoding="utf-8")
    sink = DirectorySink(blocker)

    with pytest.raises(SinkWriteError) as info:
        sink.write("version", b"1\n")
    assert info.value.name == "version"
