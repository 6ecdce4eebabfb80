"""Pytest configuration for repository test runs."""

from __future__ import annotations

import sys
from datetime import datetime, timezone
from pathlib import Path

import pytest


def pytest_sessionstart() -> None:
    """Add src directory to sys.path for test imports."""
    project_root = Path(__file__).resolve().parent.parent
    src_path = project_root / "src"
    if str(src_path) not in sys.path:
        sys.path.insert(0, str(src_path))


@pytest.fixture
def run_time() -> datetime:
    """Fixed UTC run time used as the pipeline clock."""
    return datetime(2026, 10, 17, 14, 5, 30, 250000, tzinfo=timezone.utc)
