"""Stack-analytics CLI entry points.
This module exposes the generate and show commands.
It maps argparse commands onto pipeline and store calls.
"""

from __future__ import annotations

import argparse
import sys
from dataclasses import replace
from pathlib import Path
from typing import Sequence

from cli.generate_command import add_generate_command, run_generate_command
from cli.show_command import add_show_command, run_show_command
from core.config import AnalyticsConfig
from core.errors import AnalyticsError
from core.logging_config import get_logger

_LOGGER = get_logger(__name__)


def build_parser() -> argparse.ArgumentParser:
    """Build the top-level CLI parser.

    Returns:
        Configured argument parser.
    """
    parser = argparse.ArgumentParser(
        prog="stack-analytics",
        description="Build the CLI usage analytics snapshot",
    )
    parser.add_argument("--output-root", help="Override ANALYTICS_OUTPUT_DIR for this command")
    subparsers = parser.add_subparsers(dest="command", required=True)
    add_generate_command(subparsers)
    add_show_command(subparsers)
    return parser


def main(argv: Sequence[str] | None = None) -> int:
    """Run the stack-analytics CLI.

    Args:
        argv: Optional argument vector.

    Returns:
        Process exit code.
    """
    parser = build_parser()
    args = parser.parse_args(argv)
    try:
        config = _build_config(args.output_root)
        if args.command == "generate":
            return run_generate_command(config, args)
        if args.command == "show":
            return run_show_command(config, args)
    except AnalyticsError as error:
        _LOGGER.error("command_failed", command=args.command, error=str(error))
        print(f"error={error}", file=sys.stderr)
        return 1
    parser.error(f"Unsupported command: {args.command}")
    return 2


def _build_config(output_root: str | None) -> AnalyticsConfig:
    """Build config with optional output-root override.

    Args:
        output_root: Optional override path.

    Returns:
        Validated runtime config.
    """
    config = AnalyticsConfig.from_env()
    if output_root:
        config = replace(config, output_dir=Path(output_root).expanduser().resolve())
    return config
