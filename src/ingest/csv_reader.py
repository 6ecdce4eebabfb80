"""CSV export row reader.

This module parses export text into header-keyed raw rows. A missing
header is fatal; ragged rows are logged and kept so normalization can
degrade their fields to defaults.
"""

from __future__ import annotations

import csv
import io
from typing import Any

from core.errors import AnalyticsParseError
from core.logging_config import get_logger
from core.types import RawRow

_LOGGER = get_logger(__name__)


def read_csv_rows(csv_text: str) -> list[RawRow]:
    """Parse CSV export text into ordered raw rows.

    Args:
        csv_text: Raw export text with a header line.

    Returns:
        Rows keyed by header names, in file order. Blank lines are skipped.

    Raises:
        AnalyticsParseError: If no header row exists or the text is not CSV.
    """
    _LOGGER.info("parse_started", size_chars=len(csv_text))
    reader = csv.DictReader(io.StringIO(csv_text, newline=""))
    try:
        header = reader.fieldnames
        if not header or not any(name.strip() for name in header):
            raise AnalyticsParseError(
                "Failed to parse export: no header row found. "
                "The export must start with a comma-separated header line."
            )
        rows: list[RawRow] = []
        for row in reader:
            _warn_if_ragged(row, len(header), reader.line_num)
            rows.append(row)
    except csv.Error as error:
        raise AnalyticsParseError(
            f"Failed to parse export near line {reader.line_num}: {error}."
        ) from error
    return rows


def _warn_if_ragged(row: dict[Any, Any], expected_fields: int, line_number: int) -> None:
    """Log rows whose field count differs from the header."""
    # DictReader stores overflow under the None key and fills short rows with None.
    overflow = row.get(None)
    missing = sum(1 for key, value in row.items() if key is not None and value is None)
    if overflow is None and missing == 0:
        return
    extra = len(overflow) if isinstance(overflow, list) else 0
    _LOGGER.warning(
        "csv_row_warning",
        line_number=line_number,
        expected_fields=expected_fields,
        actual_fields=expected_fields - missing + extra,
    )
