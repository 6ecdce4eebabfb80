"""Stack-analytics exception hierarchy.

This module defines traceable domain errors with clear boundaries.
Each pipeline stage raises a specific error type for debuggability.
"""

from __future__ import annotations


class AnalyticsError(Exception):
    """Base exception for all stack-analytics failures."""


class AnalyticsConfigError(AnalyticsError):
    """Raised for invalid runtime configuration or source specs."""


class AnalyticsFetchError(AnalyticsError):
    """Raised when the raw telemetry export cannot be fetched."""


class AnalyticsParseError(AnalyticsError):
    """Raised when the export text cannot be parsed into rows."""


class AnalyticsStoreError(AnalyticsError):
    """Raised for snapshot persistence and loading failures."""
