"""Unit tests for the snapshot generation pipeline."""

from __future__ import annotations

import json
from datetime import datetime, timedelta
from pathlib import Path
from typing import cast

import pytest
import requests

from core.config import AnalyticsConfig
from core.errors import AnalyticsFetchError, AnalyticsParseError
from core.types import GenerateOptions
from ingest.pipeline import AnalyticsPipelineRunner, apply_generate_options
from tests.fixture_paths import fixture_path
from tests.http_fakes import FakeResponse, FakeSession

_URL = "https://exports.example.test/export.csv"


def _config(tmp_path: Path) -> AnalyticsConfig:
    return AnalyticsConfig(export_url=_URL, output_dir=tmp_path / "public")


def _session_for_fixture() -> requests.Session:
    body = fixture_path("exports/cli_usage_export.csv").read_bytes()
    return cast(requests.Session, FakeSession(response=FakeResponse(200, body)))


def test_runner_writes_snapshot_document(tmp_path: Path, run_time: datetime) -> None:
    """A run should persist accepted records, recency, and counts."""
    runner = AnalyticsPipelineRunner(
        _config(tmp_path), session=_session_for_fixture(), clock=lambda: run_time
    )

    result = runner.run()
    document = json.loads(result.output_path.read_text(encoding="utf-8"))

    assert result.output_path == tmp_path / "public" / "analytics-data.json"
    assert (result.input_rows, result.total_records) == (6, 5)
    assert document["totalRecords"] == len(document["data"]) == 5
    assert document["lastUpdated"] == "Mar 1, 2024, 10:15 AM"
    assert document["generatedAt"] == "2026-10-17T14:05:30.250Z"
    assert [record["platform"] for record in document["data"]] == [
        "linux",
        "darwin",
        "win32",
        "linux",
        "linux",
    ]


def test_runner_is_deterministic_except_for_run_stamp(
    tmp_path: Path,
    run_time: datetime,
) -> None:
    """Identical input yields identical data; only generatedAt moves."""
    config = _config(tmp_path)
    first_path = AnalyticsPipelineRunner(
        config, session=_session_for_fixture(), clock=lambda: run_time
    ).run().output_path
    first = json.loads(first_path.read_text(encoding="utf-8"))
    later = run_time + timedelta(minutes=5)
    second_path = AnalyticsPipelineRunner(
        config, session=_session_for_fixture(), clock=lambda: later
    ).run().output_path
    second = json.loads(second_path.read_text(encoding="utf-8"))

    assert first["data"] == second["data"]
    assert first["totalRecords"] == second["totalRecords"]
    assert first["generatedAt"] != second["generatedAt"]


def test_fetch_failure_leaves_previous_snapshot_unchanged(
    tmp_path: Path,
    run_time: datetime,
) -> None:
    """A fatal fetch error must not touch the existing snapshot."""
    config = _config(tmp_path)
    config.output_dir.mkdir(parents=True)
    config.output_path.write_text('{"previous": true}\n', encoding="utf-8")
    session = FakeSession(error=requests.Timeout("timed out"))
    runner = AnalyticsPipelineRunner(
        config, session=cast(requests.Session, session), clock=lambda: run_time
    )

    with pytest.raises(AnalyticsFetchError):
        runner.run()

    assert config.output_path.read_text(encoding="utf-8") == '{"previous": true}\n'


def test_parse_failure_writes_nothing(tmp_path: Path, run_time: datetime) -> None:
    """A header-less export aborts before any output is created."""
    config = _config(tmp_path)
    session = FakeSession(response=FakeResponse(200, b""))
    runner = AnalyticsPipelineRunner(
        config, session=cast(requests.Session, session), clock=lambda: run_time
    )

    with pytest.raises(AnalyticsParseError):
        runner.run()

    assert config.output_path.exists() is False


def test_apply_generate_options_overrides_only_given_values(tmp_path: Path) -> None:
    """Per-run options should replace config values they set."""
    config = _config(tmp_path)
    options = GenerateOptions(source="local.csv", output_file="custom.json")

    resolved = apply_generate_options(config, options)

    assert resolved.export_url == "local.csv"
    assert resolved.output_dir == config.output_dir
    assert resolved.output_path.name == "custom.json"
