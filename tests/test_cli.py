# tests/test_cli.py

from __future__ import annotations

import json
from pathlib import Path

from datagen.cli import main


def test_cli_writes_all_datasets(tmp_path: Path, sample_snapshot_path: Path, monkeypatch, capsys):
    monkeypatch.chdir(tmp_path)
    out = tmp_path / "generated"
    events = tmp_path / "logs" / "events.log"

    code = main(
        [
            "--snapshot",
            str(sample_snapshot_path),
            "--output-dir",
            str(out),
            "--event-log",
            str(events),
        ]
    )

    assert code == 0
    assert (out / "version.txt").read_text(encoding="ascii") == "1.21.10\n305\n"
    assert (out / "game_event_tags.txt").exists()
    assert "Datagen output" in capsys.readouterr().out

    kinds = [json.loads(line)["event_type"] for line in events.read_text(encoding="utf-8").splitlines()]
    assert kinds[:2] == ["LOG", "RUN_STARTED"]
    assert kinds[-1] == "RUN_COMPLETED"


def test_cli_custom_config_and_suffix(tmp_path: Path, sample_snapshot_path: Path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    cfg = tmp_path / "datagen.yaml"
    cfg.write_text(
        "datagen:\n"
        f"  snapshot: {json.dumps(str(sample_snapshot_path))}\n"
        "  output_dir: data\n"
        "  tag_registries:\n"
        "    block_tags: block\n",
        encoding="utf-8",
    )

    assert main(["--config", str(cfg), "--suffix", ".dat"]) == 0
    names = sorted(p.name for p in (tmp_path / "data").iterdir())
    assert "block_tags.dat" in names
    assert "item_tags.dat" not in names


def test_cli_missing_snapshot_fails(tmp_path: Path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    code = main(
        [
            "--snapshot",
            str(tmp_path / "missing.json"),
            "--output-dir",
            str(tmp_path / "out"),
            "--event-log",
            str(tmp_path / "events.log"),
        ]
    )
    assert code == 1
    assert not (tmp_path / "out").exists()


def test_cli_reference_block_failure(tmp_path: Path, sample_snapshot_path: Path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    code = main(
        [
            "--snapshot",
            str(sample_snapshot_path),
            "--output-dir",
            str(tmp_path / "out"),
            "--event-log",
            str(tmp_path / "events.log"),
            "--reference-block",
            "oak_slab",
        ]
    )
    assert code == 1


def test_cli_bad_config_fails(tmp_path: Path, capsys):
    cfg = tmp_path / "bad.yaml"
    cfg.write_text("datagen:\n  log_level: LOUD\n", encoding="utf-8")
    assert main(["--config", str(cfg)]) == 1
    assert "Configuration error" in capsys.readouterr().err


def test_cli_suffix_flag_is_validated(tmp_path: Path, sample_snapshot_path: Path, monkeypatch, capsys):
    monkeypatch.chdir(tmp_path)
    code = main(
        [
            "--snapshot",
            str(sample_snapshot_path),
            "--output-dir",
            str(tmp_path / "out"),
            "--event-log",
            str(tmp_path / "events.log"),
            "--suffix",
            "dat",
        ]
    )
    assert code == 1
    assert "suffix" in capsys.readouterr().err
    assert not (tmp_path / "out").exists()


def test_cli_dangling_reference_in_dump_fails(tmp_path: Path, sample_snapshot_path: Path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    data = json.loads(sample_snapshot_path.read_text(encoding="utf-8"))
    data["fluid_states"][1]["fluid"] = 42
    dump = tmp_path / "dump.json"
    dump.write_text(json.dumps(data), encoding="utf-8")

    code = main(
        [
            "--snapshot",
            str(dump),
            "--output-dir",
            str(tmp_path / "out"),
            "--event-log",
            str(tmp_path / "events.log"),
        ]
    )
    assert code == 1
    assert not (tmp_path / "out").exists()
