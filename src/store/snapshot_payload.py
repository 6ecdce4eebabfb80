"""Shared JSON serialization for snapshot payloads.

This module centralizes the dashboard-facing JSON shape of snapshots.
It is reused by snapshot persistence and the CLI ``show`` command.
"""

from __future__ import annotations

from datetime import datetime
from typing import Any

from core.errors import AnalyticsStoreError
from core.types import AnalyticsRecord, AnalyticsSnapshot
from transforms.timestamp_resolution import format_iso_utc, parse_timestamp

# record field -> dashboard key
_RECORD_KEYS: tuple[tuple[str, str], ...] = (
    ("date", "date"),
    ("hour", "hour"),
    ("cli_version", "cli_version"),
    ("node_version", "node_version"),
    ("platform", "platform"),
    ("backend", "backend"),
    ("database", "database"),
    ("orm", "orm"),
    ("db_setup", "dbSetup"),
    ("auth", "auth"),
    ("api", "api"),
    ("package_manager", "packageManager"),
    ("frontend0", "frontend0"),
    ("frontend1", "frontend1"),
    ("examples0", "examples0"),
    ("examples1", "examples1"),
    ("addons", "addons"),
    ("git", "git"),
    ("install", "install"),
    ("runtime", "runtime"),
)


def record_to_payload(record: AnalyticsRecord) -> dict[str, object]:
    """Serialize an AnalyticsRecord into a JSON-safe payload.

    Args:
        record: Normalized record.

    Returns:
        Dictionary keyed by dashboard field names.
    """
    payload: dict[str, object] = {}
    for field_name, key in _RECORD_KEYS:
        value = getattr(record, field_name)
        payload[key] = list(value) if field_name == "addons" else value
    return payload


def record_from_payload(payload: dict[str, Any]) -> AnalyticsRecord:
    """Deserialize a dashboard record payload.

    Args:
        payload: Serialized record payload.

    Returns:
        Parsed AnalyticsRecord.

    Raises:
        AnalyticsStoreError: If a field is missing or mistyped.
    """
    values: dict[str, Any] = {}
    for field_name, key in _RECORD_KEYS:
        if key not in payload:
            raise AnalyticsStoreError(f"Snapshot record is missing field '{key}'.")
        values[field_name] = payload[key]
    if not isinstance(values["hour"], int) or not isinstance(values["addons"], list):
        raise AnalyticsStoreError(
            "Snapshot record has invalid 'hour' or 'addons' values. Regenerate the snapshot."
        )
    values["addons"] = tuple(str(addon) for addon in values["addons"])
    return AnalyticsRecord(**values)


def snapshot_to_payload(snapshot: AnalyticsSnapshot) -> dict[str, object]:
    """Serialize a snapshot into the persisted document shape."""
    return {
        "data": [record_to_payload(record) for record in snapshot.data],
        "lastUpdated": snapshot.last_updated,
        "generatedAt": format_iso_utc(snapshot.generated_at),
        "totalRecords": snapshot.total_records,
    }


def snapshot_from_payload(payload: object) -> AnalyticsSnapshot:
    """Deserialize a persisted snapshot document.

    Args:
        payload: Decoded JSON document.

    Returns:
        Parsed snapshot.

    Raises:
        AnalyticsStoreError: If the document shape is invalid.
    """
    if not isinstance(payload, dict):
        raise AnalyticsStoreError("Snapshot document must be a JSON object.")
    raw_records = payload.get("data")
    if not isinstance(raw_records, list):
        raise AnalyticsStoreError("Snapshot document field 'data' must be a list.")
    records = tuple(record_from_payload(_expect_object(item)) for item in raw_records)
    last_updated = payload.get("lastUpdated")
    if last_updated is not None and not isinstance(last_updated, str):
        raise AnalyticsStoreError("Snapshot document field 'lastUpdated' must be a string or null.")
    total_records = payload.get("totalRecords")
    if total_records != len(records):
        raise AnalyticsStoreError(
            f"Snapshot document field 'totalRecords' is {total_records!r} "
            f"but 'data' holds {len(records)} records."
        )
    return AnalyticsSnapshot(
        data=records,
        last_updated=last_updated,
        generated_at=_parse_generated_at(payload.get("generatedAt")),
        total_records=len(records),
    )


def _expect_object(item: object) -> dict[str, Any]:
    if not isinstance(item, dict):
        raise AnalyticsStoreError("Snapshot document records must be JSON objects.")
    return item


def _parse_generated_at(raw_value: object) -> datetime:
    generated_at = parse_timestamp(raw_value)
    if generated_at is None:
        raise AnalyticsStoreError(
            f"Snapshot document field 'generatedAt' is not an ISO timestamp: {raw_value!r}."
        )
    return generated_at
