"""Aggregation over a full telemetry export.

This module runs the two independent passes over one export: record
normalization over parsed rows, and the recency pass over raw text.
"""

from __future__ import annotations

from datetime import datetime
from typing import Iterable

from core.types import AggregationResult, AnalyticsRecord, RawRow
from transforms.recency import find_latest_timestamp, format_last_updated
from transforms.row_normalization import normalize_row


def normalize_rows(rows: Iterable[RawRow], now: datetime) -> list[AnalyticsRecord]:
    """Normalize rows in order, keeping only accepted records.

    Args:
        rows: Parsed export rows in file order.
        now: Current run time substituted for missing timestamps.

    Returns:
        Accepted records in input order, without sorting or dedup.
    """
    records: list[AnalyticsRecord] = []
    for row in rows:
        record = normalize_row(row, now)
        if record is not None:
            records.append(record)
    return records


def compute_last_updated(csv_text: str) -> str | None:
    """Return the formatted latest timestamp of an export, if any."""
    latest = find_latest_timestamp(csv_text)
    if latest is None:
        return None
    return format_last_updated(latest)


def aggregate(rows: Iterable[RawRow], csv_text: str, now: datetime) -> AggregationResult:
    """Run record normalization and the recency pass over one export.

    Args:
        rows: Rows parsed from ``csv_text``.
        csv_text: Raw export text used by the recency pass.
        now: Current run time.

    Returns:
        Accepted records and the data recency label.
    """
    records = normalize_rows(rows, now)
    return AggregationResult(records=tuple(records), last_updated=compute_last_updated(csv_text))
