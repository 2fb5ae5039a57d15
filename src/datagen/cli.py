# src/datagen/cli.py
"""
Command-line entry point.

Usage (from project root):

    mc-datagen --snapshot config/raw/host_snapshot.json --output-dir generated

Reads config/datagen.yaml (or --config), loads the host dump, writes every
dataset through a DirectorySink and prints a summary table. Exit status is
0 on success and 1 on any configuration, host or write error.
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional

from rich.console import Console
from rich.table import Table

from host.snapshot import load_snapshot
from monitoring.bus import EventBus
from monitoring.events import EventType
from monitoring.logger import JsonFileLogger, log_event

from .config import DatagenConfig, load_datagen_config, validate_config
from .driver import DatasetResult, run_datagen
from .errors import DatagenError
from .logging_config import configure_logging
from .sink import DirectorySink


log = logging.getLogger(__name__)


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="mc-datagen",
        description="Extract block, fluid, item, entity, packet and tag tables from a host snapshot.",
    )
    parser.add_argument(
        "--config",
        type=str,
        default=None,
        help="Path to datagen.yaml (default: config/datagen.yaml if present).",
    )
    parser.add_argument("--snapshot", type=str, default=None, help="Host dump (JSON or YAML).")
    parser.add_argument("--output-dir", type=str, default=None, help="Directory for the datasets.")
    parser.add_argument("--suffix", type=str, default=None, help="File suffix (default: .txt).")
    parser.add_argument(
        "--reference-block",
        type=str,
        default=None,
        help="Block whose default state must be sturdy on every face.",
    )
    parser.add_argument(
        "--no-reference-check",
        action="store_true",
        help="Skip the reference full-block check.",
    )
    parser.add_argument("--event-log", type=str, default=None, help="Append run events as JSON lines.")
    parser.add_argument("-v", "--verbose", action="store_true", help="Log every section.")
    return parser


def _resolve_config(args: argparse.Namespace) -> DatagenConfig:
    if args.config:
        cfg = load_datagen_config(Path(args.config))
    else:
        try:
            cfg = load_datagen_config()
        except FileNotFoundError:
            cfg = DatagenConfig()

    if args.snapshot:
        cfg.snapshot = Path(args.snapshot)
    if args.output_dir:
        cfg.output_dir = Path(args.output_dir)
    if args.suffix is not None:
        cfg.suffix = args.suffix
    if args.reference_block:
        cfg.reference_full_block = args.reference_block
    if args.no_reference_check:
        cfg.reference_full_block = None
    if args.event_log:
        cfg.event_log = Path(args.event_log)
    if args.verbose:
        cfg.log_level = "DEBUG"
    validate_config(cfg)
    return cfg


def _summary_table(results: List[DatasetResult], sink: DirectorySink) -> Table:
    table = Table(title="Datagen output")
    table.add_column("Dataset")
    table.add_column("Sections", justify="right")
    table.add_column("Bytes", justify="right")
    table.add_column("Path")
    for r in results:
        table.add_row(r.name, str(r.sections), str(r.size), str(sink.path_for(r.name)))
    table.add_row("total", "", str(sum(r.size for r in results)), "", style="bold")
    return table


def main(argv: Optional[List[str]] = None) -> int:
    args = _build_parser().parse_args(argv)
    console = Console()
    err_console = Console(stderr=True)

    try:
        cfg = _resolve_config(args)
    except (OSError, ValueError) as exc:
        err_console.print(f"[red]Configuration error:[/red] {exc}")
        return 1

    configure_logging(cfg.level)

    if cfg.snapshot is None:
        err_console.print("[red]No host snapshot given[/red] (use --snapshot or datagen.snapshot).")
        return 1

    bus = EventBus()
    run_log: Optional[JsonFileLogger] = None
    sink = DirectorySink(cfg.output_dir, suffix=cfg.suffix)
    try:
        if cfg.event_log:
            run_log = JsonFileLogger(cfg.event_log, bus)
        host = load_snapshot(cfg.snapshot)
        log_event(
            bus=bus,
            module="datagen.cli",
            event_type=EventType.LOG,
            message=f"Loaded host snapshot {cfg.snapshot}",
            payload={
                "version": host.version_name,
                "blocks": len(host.blocks()),
                "items": len(host.items()),
            },
        )
        results = run_datagen(host, sink, cfg, bus=bus)
    except (DatagenError, OSError, ValueError) as exc:
        err_console.print(f"[red]Datagen failed:[/red] {exc}")
        return 1
    finally:
        if run_log is not None:
            run_log.close()

    console.print(_summary_table(results, sink))
    return 0


if __name__ == "__main__":
    sys.exit(main())
