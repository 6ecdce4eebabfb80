"""Unit tests for core config parsing."""

from __future__ import annotations

import pytest

from core.config import AnalyticsConfig
from core.constants import DEFAULT_EXPORT_URL
from core.errors import AnalyticsConfigError


def test_from_env_uses_defaults(monkeypatch: pytest.MonkeyPatch) -> None:
    """Config should fall back to the default export and output location."""
    monkeypatch.delenv("ANALYTICS_EXPORT_URL", raising=False)
    monkeypatch.delenv("ANALYTICS_OUTPUT_DIR", raising=False)
    monkeypatch.delenv("ANALYTICS_FETCH_TIMEOUT", raising=False)

    config = AnalyticsConfig.from_env()

    assert config.export_url == DEFAULT_EXPORT_URL
    assert config.output_path.parts[-2:] == ("public", "analytics-data.json")
    assert config.fetch_timeout_seconds is None


def test_from_env_reads_overrides(monkeypatch: pytest.MonkeyPatch) -> None:
    """Config should resolve values from environment."""
    monkeypatch.setenv("ANALYTICS_EXPORT_URL", "https://exports.example.test/export.csv")
    monkeypatch.setenv("ANALYTICS_OUTPUT_DIR", "./.tmp-public")
    monkeypatch.setenv("ANALYTICS_FETCH_TIMEOUT", "12.5")

    config = AnalyticsConfig.from_env()

    assert config.export_url == "https://exports.example.test/export.csv"
    assert config.output_dir.name == ".tmp-public"
    assert config.fetch_timeout_seconds == 12.5


@pytest.mark.parametrize("raw_value", ["soon", "0", "-3", "nan"])
def test_from_env_raises_for_invalid_timeout(
    monkeypatch: pytest.MonkeyPatch,
    raw_value: str,
) -> None:
    """Config should fail for non-positive or non-numeric timeouts."""
    monkeypatch.setenv("ANALYTICS_FETCH_TIMEOUT", raw_value)

    with pytest.raises(AnalyticsConfigError):
        AnalyticsConfig.from_env()


def test_from_env_raises_for_blank_export_url(monkeypatch: pytest.MonkeyPatch) -> None:
    """A blank export URL is a configuration error."""
    monkeypatch.setenv("ANALYTICS_EXPORT_URL", "  ")

    with pytest.raises(AnalyticsConfigError):
        AnalyticsConfig.from_env()
