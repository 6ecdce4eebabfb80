"""Integration tests for the snapshot generation workflow."""

from __future__ import annotations

import json
from dataclasses import replace
from pathlib import Path

from core.config import AnalyticsConfig
from core.types import GenerateOptions
from ingest.pipeline import generate_analytics_snapshot
from store.snapshot_store import SnapshotStore
from tests.fixture_paths import fixture_path


def test_generate_and_reload_snapshot(tmp_path: Path) -> None:
    """End-to-end flow should normalize, persist, and reload records."""
    config = replace(AnalyticsConfig.from_env(), output_dir=tmp_path)
    options = GenerateOptions(source=str(fixture_path("exports/cli_usage_export.csv")))

    result = generate_analytics_snapshot(options, config)
    document = json.loads(result.output_path.read_text(encoding="utf-8"))
    reloaded = SnapshotStore(config).load()

    first, darwin, win32 = document["data"][0], document["data"][1], document["data"][2]
    assert first["addons"] == ["turborepo", "biome"]
    assert (first["auth"], first["git"], first["install"]) == ("enabled", "enabled", "disabled")
    assert (darwin["hour"], darwin["backend"], darwin["runtime"]) == (8, "none", "unknown")
    assert darwin["install"] == "disabled"
    assert (win32["date"], win32["hour"], win32["node_version"]) == ("not-a-date", 0, "unknown")
    assert document["data"][4]["date"] == "2023-12-31"
    assert document["data"][4]["hour"] == 23
    assert reloaded.total_records == result.total_records == 5
