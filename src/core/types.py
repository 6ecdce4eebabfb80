"""Shared typed models.

This module defines immutable data models used by ingest, transforms,
store, and CLI layers to keep interfaces explicit and stable.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from pathlib import Path
from typing import Mapping

RawRow = Mapping[str, object]


@dataclass(frozen=True)
class ResolvedTimestamp:
    """Calendar date and UTC hour bucket derived from a raw timestamp.

    Attributes:
        date: Date portion of the raw string, ``YYYY-MM-DD`` when well formed.
        hour: UTC hour of day in [0, 23]; 0 when the string is unparseable.
    """

    date: str
    hour: int


@dataclass(frozen=True)
class AnalyticsRecord:
    """Normalized CLI usage event.

    Attributes:
        date: Event date string, never empty for an accepted record.
        hour: UTC hour of day in [0, 23].
        cli_version: CLI version or ``unknown``.
        node_version: Node.js version or ``unknown``.
        platform: Operating system platform or ``unknown``.
        backend: Selected backend or ``none``.
        database: Selected database or ``none``.
        orm: Selected ORM or ``none``.
        db_setup: Database setup provider or ``none``.
        auth: ``enabled`` or ``disabled``.
        api: API layer or ``none``.
        package_manager: Package manager or ``unknown``.
        frontend0: First frontend slot, empty when unused.
        frontend1: Second frontend slot, empty when unused.
        examples0: First example slot, empty when unused.
        examples1: Second example slot, empty when unused.
        addons: Non-empty addon slots in original slot order.
        git: ``enabled`` or ``disabled``.
        install: ``enabled`` or ``disabled``.
        runtime: Runtime or ``unknown``.
    """

    date: str
    hour: int
    cli_version: str
    node_version: str
    platform: str
    backend: str
    database: str
    orm: str
    db_setup: str
    auth: str
    api: str
    package_manager: str
    frontend0: str
    frontend1: str
    examples0: str
    examples1: str
    addons: tuple[str, ...]
    git: str
    install: str
    runtime: str


@dataclass(frozen=True)
class AggregationResult:
    """Outputs of the two independent passes over one export.

    Attributes:
        records: Accepted records in input row order.
        last_updated: Formatted latest valid timestamp, or None.
    """

    records: tuple[AnalyticsRecord, ...]
    last_updated: str | None


@dataclass(frozen=True)
class AnalyticsSnapshot:
    """Aggregated document persisted once per run.

    Attributes:
        data: Accepted records in input row order.
        last_updated: Recency of the data, or None when no timestamp parsed.
        generated_at: UTC time the run built this snapshot.
        total_records: Number of entries in ``data``.
    """

    data: tuple[AnalyticsRecord, ...]
    last_updated: str | None
    generated_at: datetime
    total_records: int


@dataclass(frozen=True)
class GenerateOptions:
    """Generate command options.

    Attributes:
        source: Optional export URL or local CSV path overriding config.
        output_dir: Optional snapshot directory overriding config.
        output_file: Optional snapshot file name overriding config.
    """

    source: str | None = None
    output_dir: str | None = None
    output_file: str | None = None


@dataclass(frozen=True)
class SnapshotResult:
    """Summary of one completed pipeline run.

    Attributes:
        output_path: Location of the written snapshot document.
        total_records: Number of accepted records written.
        input_rows: Number of raw rows parsed from the export.
        last_updated: Recency string recorded in the snapshot.
    """

    output_path: Path
    total_records: int
    input_rows: int
    last_updated: str | None
