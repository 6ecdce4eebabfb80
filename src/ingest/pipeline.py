"""Snapshot generation pipeline.

This module coordinates export fetch, CSV parsing, aggregation, snapshot
assembly, and persistence for one run. Fatal errors propagate to the
caller; no partial snapshot is ever written.
"""

from __future__ import annotations

from dataclasses import replace
from datetime import datetime, timezone
from pathlib import Path
from typing import Callable

import requests

from core.config import AnalyticsConfig
from core.logging_config import get_logger
from core.types import AnalyticsSnapshot, GenerateOptions, RawRow, SnapshotResult
from ingest.csv_reader import read_csv_rows
from ingest.export_fetcher import fetch_export_text
from store.snapshot_builder import build_snapshot
from store.snapshot_store import SnapshotStore
from transforms.aggregation import aggregate

_LOGGER = get_logger(__name__)

Clock = Callable[[], datetime]


class AnalyticsPipelineRunner:
    """Single-pass runner for snapshot generation."""

    def __init__(
        self,
        config: AnalyticsConfig,
        session: requests.Session | None = None,
        clock: Clock | None = None,
    ) -> None:
        self._config = config
        self._session = session
        self._clock = clock or _utc_now
        self._store = SnapshotStore(config)

    def run(self) -> SnapshotResult:
        """Execute the pipeline and return a run summary."""
        run_time = self._clock()
        csv_text = fetch_export_text(
            self._config.export_url,
            timeout_seconds=self._config.fetch_timeout_seconds,
            session=self._session,
        )
        rows = read_csv_rows(csv_text)
        snapshot = self._build_snapshot(rows, csv_text, run_time)
        output_path = self._store.write(snapshot)
        result = SnapshotResult(
            output_path=output_path,
            total_records=snapshot.total_records,
            input_rows=len(rows),
            last_updated=snapshot.last_updated,
        )
        _log_run_completion(self._config, result)
        return result

    def _build_snapshot(
        self,
        rows: list[RawRow],
        csv_text: str,
        run_time: datetime,
    ) -> AnalyticsSnapshot:
        result = aggregate(rows, csv_text, run_time)
        return build_snapshot(result, generated_at=run_time)


def generate_analytics_snapshot(
    options: GenerateOptions,
    config: AnalyticsConfig,
    session: requests.Session | None = None,
) -> SnapshotResult:
    """Fetch the export, build the snapshot, and persist it.

    Args:
        options: Per-run overrides for source and output location.
        config: Runtime configuration.
        session: Optional requests session for the export fetch.

    Returns:
        Summary of the written snapshot.

    Raises:
        AnalyticsFetchError: If the export cannot be fetched.
        AnalyticsParseError: If the export has no header row.
        AnalyticsStoreError: If the snapshot cannot be written.
    """
    runner = AnalyticsPipelineRunner(apply_generate_options(config, options), session=session)
    return runner.run()


def apply_generate_options(config: AnalyticsConfig, options: GenerateOptions) -> AnalyticsConfig:
    """Return config with any per-run overrides applied."""
    resolved = config
    if options.source:
        resolved = replace(resolved, export_url=options.source)
    if options.output_dir:
        resolved = replace(resolved, output_dir=Path(options.output_dir).expanduser().resolve())
    if options.output_file:
        resolved = replace(resolved, output_file=options.output_file)
    return resolved


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


def _log_run_completion(config: AnalyticsConfig, result: SnapshotResult) -> None:
    """Log pipeline completion with contextual metadata."""
    _LOGGER.info(
        "analytics_snapshot_written",
        source=config.export_url,
        input_rows=result.input_rows,
        total_records=result.total_records,
        output_path=str(result.output_path),
        last_updated=result.last_updated,
    )
