"""Data recency pass over raw export text.

This module finds the latest valid event timestamp in an export.
It reads the raw text directly so rows rejected by normalization still
count toward recency.
"""

from __future__ import annotations

from datetime import datetime

from core.constants import TIMESTAMP_HEADER_MARKER
from transforms.timestamp_resolution import parse_timestamp


def find_latest_timestamp(csv_text: str) -> datetime | None:
    """Return the latest parseable timestamp in raw CSV text.

    The timestamp column is the first header whose name contains
    ``timestamp``. Lines are split on commas without quote handling and
    double quotes are stripped from the value.

    Args:
        csv_text: Raw export text including the header line.

    Returns:
        Latest UTC datetime, or None when the column is absent or no
        value parses.
    """
    lines = csv_text.split("\n")
    column_index = _find_timestamp_column(lines[0])
    if column_index is None:
        return None
    latest: datetime | None = None
    for line in lines[1:]:
        if not line.strip():
            continue
        columns = line.split(",")
        if column_index >= len(columns):
            continue
        parsed = parse_timestamp(columns[column_index].replace('"', ""))
        if parsed is not None and (latest is None or parsed > latest):
            latest = parsed
    return latest


def format_last_updated(moment: datetime) -> str:
    """Render a UTC moment as a short human-readable label.

    Args:
        moment: Timezone-aware UTC datetime.

    Returns:
        Label such as ``Mar 1, 2024, 08:30 AM``.
    """
    return f"{moment:%b} {moment.day}, {moment.year}, {moment:%I:%M %p}"


def _find_timestamp_column(header_line: str) -> int | None:
    for index, header in enumerate(header_line.split(",")):
        if TIMESTAMP_HEADER_MARKER in header:
            return index
    return None
