"""Snapshot assembly.

This module assembles the persisted snapshot from aggregation output.
It is purely structural and never re-validates upstream fields.
"""

from __future__ import annotations

from datetime import datetime

from core.types import AggregationResult, AnalyticsSnapshot


def build_snapshot(result: AggregationResult, generated_at: datetime) -> AnalyticsSnapshot:
    """Build the snapshot document for one run.

    Args:
        result: Accepted records and recency from the aggregation passes.
        generated_at: UTC time of the current run.

    Returns:
        Snapshot whose record count always equals ``len(data)``.
    """
    return AnalyticsSnapshot(
        data=result.records,
        last_updated=result.last_updated,
        generated_at=generated_at,
        total_records=len(result.records),
    )
