"""Runtime configuration model for stack-analytics.

This module owns all environment variable parsing and validation.
Other modules consume a typed config object instead of raw env reads.
"""

from __future__ import annotations

from dataclasses import dataclass
import math
import os
from pathlib import Path

from core.constants import DEFAULT_EXPORT_URL, DEFAULT_OUTPUT_DIR, SNAPSHOT_FILE_NAME
from core.errors import AnalyticsConfigError


@dataclass(frozen=True)
class AnalyticsConfig:
    """Validated runtime configuration.

    Attributes:
        export_url: URL or local path of the raw CSV telemetry export.
        output_dir: Directory receiving the snapshot document.
        output_file: Snapshot document file name.
        fetch_timeout_seconds: Optional HTTP timeout; transport default when None.
    """

    export_url: str
    output_dir: Path
    output_file: str = SNAPSHOT_FILE_NAME
    fetch_timeout_seconds: float | None = None

    @property
    def output_path(self) -> Path:
        """Full path of the persisted snapshot document."""
        return self.output_dir / self.output_file

    @classmethod
    def from_env(cls) -> "AnalyticsConfig":
        """Build config from process environment variables.

        Returns:
            A validated config object.

        Raises:
            AnalyticsConfigError: If environment values are invalid.
        """
        export_url = os.getenv("ANALYTICS_EXPORT_URL", DEFAULT_EXPORT_URL).strip()
        if not export_url:
            raise AnalyticsConfigError(
                "Invalid ANALYTICS_EXPORT_URL value: expected a non-empty URL or path. "
                "Unset it to use the default export location."
            )
        output_dir_value = os.getenv("ANALYTICS_OUTPUT_DIR", str(DEFAULT_OUTPUT_DIR))
        timeout_value = os.getenv("ANALYTICS_FETCH_TIMEOUT")
        return cls(
            export_url=export_url,
            output_dir=Path(output_dir_value).expanduser().resolve(),
            fetch_timeout_seconds=_parse_fetch_timeout(timeout_value),
        )


def _parse_fetch_timeout(raw_value: str | None) -> float | None:
    """Parse the fetch timeout environment value.

    Args:
        raw_value: Raw string from environment, or None when unset.

    Returns:
        Timeout in seconds, or None to keep the transport default.

    Raises:
        AnalyticsConfigError: If value is not a positive number.
    """
    if raw_value is None or not raw_value.strip():
        return None
    try:
        timeout = float(raw_value)
    except ValueError as error:
        raise AnalyticsConfigError(
            "Invalid ANALYTICS_FETCH_TIMEOUT value: "
            f"expected number of seconds, got '{raw_value}'. "
            "Set ANALYTICS_FETCH_TIMEOUT to a positive number."
        ) from error
    if not math.isfinite(timeout) or timeout <= 0:
        raise AnalyticsConfigError(
            f"Invalid ANALYTICS_FETCH_TIMEOUT value: '{raw_value}' must be positive."
        )
    return timeout
