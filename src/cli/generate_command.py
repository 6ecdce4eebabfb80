"""Generate command wiring for the stack-analytics CLI."""

from __future__ import annotations

import argparse
from typing import Any

from core.config import AnalyticsConfig
from core.source_spec import load_source_spec
from core.types import GenerateOptions
from ingest.pipeline import generate_analytics_snapshot


def add_generate_command(subparsers: Any) -> None:
    """Register generate subcommand."""
    parser = subparsers.add_parser(
        "generate",
        help="Fetch the telemetry export and write the analytics snapshot",
    )
    parser.add_argument(
        "source",
        nargs="?",
        help="Export URL or local CSV path (defaults to ANALYTICS_EXPORT_URL)",
    )
    parser.add_argument("--output-dir", help="Snapshot directory override")
    parser.add_argument("--output-file", help="Snapshot file name override")
    parser.add_argument("--spec", help="Optional YAML source spec file")


def run_generate_command(config: AnalyticsConfig, args: argparse.Namespace) -> int:
    """Run the pipeline and print the snapshot summary."""
    options = build_generate_options(args)
    result = generate_analytics_snapshot(options, config)
    print(f"records={result.total_records}")
    print(f"output_path={result.output_path}")
    print(f"last_updated={result.last_updated or '-'}")
    return 0


def build_generate_options(args: argparse.Namespace) -> GenerateOptions:
    """Merge CLI flags over an optional YAML source spec.

    Args:
        args: Parsed CLI args.

    Returns:
        Generate options where explicit flags win over spec values.
    """
    spec = load_source_spec(args.spec) if args.spec else None
    return GenerateOptions(
        source=args.source or (spec.source if spec else None),
        output_dir=args.output_dir or (spec.output_dir if spec else None),
        output_file=args.output_file or (spec.output_file if spec else None),
    )
