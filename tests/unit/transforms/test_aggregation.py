"""Unit tests for export aggregation."""

from __future__ import annotations

from datetime import datetime

from ingest.csv_reader import read_csv_rows
from tests.export_rows import export_csv, export_row
from transforms.aggregation import aggregate, compute_last_updated, normalize_rows


def test_normalize_rows_preserves_input_order_without_dedup(run_time: datetime) -> None:
    """Accepted records keep row order and duplicates survive."""
    rows = [
        export_row(timestamp="2024-01-02T00:00:00Z", platform="win32"),
        export_row(timestamp="2024-01-01T00:00:00Z", platform="linux"),
        export_row(timestamp="2024-01-01T00:00:00Z"),
        export_row(timestamp="2024-01-01T00:00:00Z", platform="linux"),
    ]

    records = normalize_rows(rows, run_time)

    assert [record.platform for record in records] == ["win32", "linux", "linux"]
    assert records[1] == records[2]


def test_aggregate_decouples_recency_from_acceptance(run_time: datetime) -> None:
    """A rejected row can still supply the latest timestamp."""
    csv_text = export_csv(
        [
            export_row(timestamp="2024-01-01T00:00:00Z", platform="linux"),
            export_row(timestamp="2024-03-01T00:00:00Z"),
            export_row(timestamp="not-a-date", platform="darwin"),
        ]
    )

    result = aggregate(read_csv_rows(csv_text), csv_text, run_time)

    assert [record.date for record in result.records] == ["2024-01-01", "not-a-date"]
    assert result.last_updated == "Mar 1, 2024, 12:00 AM"


def test_compute_last_updated_returns_none_for_header_only_export() -> None:
    """An export with no data rows has no recency."""
    assert compute_last_updated("*.timestamp,*.properties.platform\n") is None
