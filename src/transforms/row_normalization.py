"""Row normalization transform.

This module converts one raw export row into an AnalyticsRecord.
Missing or malformed values fall back to the per-field default table,
so a single bad row never interrupts the batch.
"""

from __future__ import annotations

from datetime import datetime
from typing import Mapping

from core.constants import (
    ADDON_SLOT_COUNT,
    DISABLED_VALUE,
    EMPTY_VALUE,
    ENABLED_VALUE,
    EXAMPLES_SLOT_COUNT,
    FRONTEND_SLOT_COUNT,
    NONE_VALUE,
    PROPERTY_COLUMN_PREFIX,
    TIMESTAMP_COLUMN,
    TRUE_LITERAL,
    UNKNOWN_VALUE,
)
from core.types import AnalyticsRecord, RawRow
from transforms.timestamp_resolution import resolve_timestamp

# record field -> (export property name, default when absent or empty)
SCALAR_FIELDS: Mapping[str, tuple[str, str]] = {
    "cli_version": ("cli_version", UNKNOWN_VALUE),
    "node_version": ("node_version", UNKNOWN_VALUE),
    "platform": ("platform", UNKNOWN_VALUE),
    "backend": ("backend", NONE_VALUE),
    "database": ("database", NONE_VALUE),
    "orm": ("orm", NONE_VALUE),
    "db_setup": ("dbSetup", NONE_VALUE),
    "api": ("api", NONE_VALUE),
    "package_manager": ("packageManager", UNKNOWN_VALUE),
    "runtime": ("runtime", UNKNOWN_VALUE),
}
TOGGLE_FIELDS: Mapping[str, str] = {
    "auth": "auth",
    "git": "git",
    "install": "install",
}
FIELD_DEFAULTS: Mapping[str, str] = {
    **{field: default for field, (_, default) in SCALAR_FIELDS.items()},
    **{field: DISABLED_VALUE for field in TOGGLE_FIELDS},
    "frontend0": EMPTY_VALUE,
    "frontend1": EMPTY_VALUE,
    "examples0": EMPTY_VALUE,
    "examples1": EMPTY_VALUE,
}


def normalize_row(row: RawRow, now: datetime) -> AnalyticsRecord | None:
    """Normalize one raw row, discarding rows that fail acceptance.

    Args:
        row: Raw column-to-value mapping from the CSV reader.
        now: Current run time substituted for missing timestamps.

    Returns:
        The normalized record, or None when the row is discarded.
    """
    record = build_record(row, now)
    return record if is_accepted(record) else None


def build_record(row: RawRow, now: datetime) -> AnalyticsRecord:
    """Build a record from one raw row without applying acceptance.

    Args:
        row: Raw column-to-value mapping.
        now: Current run time substituted for missing timestamps.

    Returns:
        Record with every field resolved to a value or its default.
    """
    resolved = resolve_timestamp(row.get(TIMESTAMP_COLUMN), now)
    scalars = {
        field: _read_text(row, property_column(name)) or default
        for field, (name, default) in SCALAR_FIELDS.items()
    }
    toggles = {
        field: _read_toggle(row, property_column(name)) for field, name in TOGGLE_FIELDS.items()
    }
    frontend = read_indexed_columns(row, "frontend", FRONTEND_SLOT_COUNT)
    examples = read_indexed_columns(row, "examples", EXAMPLES_SLOT_COUNT)
    addons = read_indexed_columns(row, "addons", ADDON_SLOT_COUNT)
    return AnalyticsRecord(
        date=resolved.date,
        hour=resolved.hour,
        frontend0=frontend[0],
        frontend1=frontend[1],
        examples0=examples[0],
        examples1=examples[1],
        addons=tuple(addon for addon in addons if addon),
        **scalars,
        **toggles,
    )


def is_accepted(record: AnalyticsRecord) -> bool:
    """Return whether a record has a date and a known platform."""
    return bool(record.date) and record.platform != UNKNOWN_VALUE


def read_indexed_columns(row: RawRow, name: str, count: int) -> tuple[str, ...]:
    """Read ``count`` indexed property columns in slot order.

    Slots that are missing, empty, or malformed read as empty strings so
    positions stay stable; callers compact them when order is all they need.

    Args:
        row: Raw column-to-value mapping.
        name: Property name before the ``.N`` index suffix.
        count: Number of slots to read, starting at index 0.

    Returns:
        Tuple of exactly ``count`` strings.
    """
    return tuple(_read_text(row, property_column(f"{name}.{index}")) for index in range(count))


def property_column(name: str) -> str:
    """Return the export column name for a telemetry property."""
    return f"{PROPERTY_COLUMN_PREFIX}{name}"


def _read_text(row: RawRow, column: str) -> str:
    value = row.get(column)
    return value if isinstance(value, str) else EMPTY_VALUE


def _read_toggle(row: RawRow, column: str) -> str:
    return ENABLED_VALUE if row.get(column) == TRUE_LITERAL else DISABLED_VALUE
