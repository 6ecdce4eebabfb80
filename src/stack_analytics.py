"""Public SDK surface for stack-analytics.

This module provides a stable import path for scripts and jobs.
It re-exports the pipeline entry point and typed models.
"""

from __future__ import annotations

from core.config import AnalyticsConfig
from core.errors import (
    AnalyticsConfigError,
    AnalyticsError,
    AnalyticsFetchError,
    AnalyticsParseError,
    AnalyticsStoreError,
)
from core.types import AnalyticsRecord, AnalyticsSnapshot, GenerateOptions, SnapshotResult
from ingest.pipeline import generate_analytics_snapshot
from store.snapshot_store import SnapshotStore
from transforms.aggregation import aggregate

__all__ = [
    "AnalyticsConfig",
    "AnalyticsConfigError",
    "AnalyticsError",
    "AnalyticsFetchError",
    "AnalyticsParseError",
    "AnalyticsRecord",
    "AnalyticsSnapshot",
    "AnalyticsStoreError",
    "GenerateOptions",
    "SnapshotResult",
    "SnapshotStore",
    "aggregate",
    "generate_analytics_snapshot",
]
