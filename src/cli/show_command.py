"""CLI command for inspecting a persisted snapshot."""

from __future__ import annotations

import argparse
from collections import Counter
from typing import Any

from core.config import AnalyticsConfig
from core.types import GenerateOptions
from ingest.pipeline import apply_generate_options
from store.snapshot_store import SnapshotStore
from transforms.timestamp_resolution import format_iso_utc


def add_show_command(subparsers: Any) -> None:
    """Register show subcommand."""
    parser = subparsers.add_parser("show", help="Print a summary of the persisted snapshot")
    parser.add_argument("--output-dir", help="Snapshot directory override")
    parser.add_argument("--output-file", help="Snapshot file name override")


def run_show_command(config: AnalyticsConfig, args: argparse.Namespace) -> int:
    """Print snapshot summary as key=value rows."""
    options = GenerateOptions(output_dir=args.output_dir, output_file=args.output_file)
    store = SnapshotStore(apply_generate_options(config, options))
    snapshot = store.load()
    print(f"output_path={store.output_path}")
    print(f"records={snapshot.total_records}")
    print(f"generated_at={format_iso_utc(snapshot.generated_at)}")
    print(f"last_updated={snapshot.last_updated or '-'}")
    platforms = Counter(record.platform for record in snapshot.data)
    for platform, count in sorted(platforms.items()):
        print(f"platform.{platform}={count}")
    return 0
