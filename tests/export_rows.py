"""Helpers for building raw export rows and CSV text in tests."""

from __future__ import annotations

import csv
import io

EXPORT_HEADER: tuple[str, ...] = (
    "*.timestamp",
    "*.properties.cli_version",
    "*.properties.node_version",
    "*.properties.platform",
    "*.properties.backend",
    "*.properties.database",
    "*.properties.orm",
    "*.properties.dbSetup",
    "*.properties.auth",
    "*.properties.api",
    "*.properties.packageManager",
    "*.properties.frontend.0",
    "*.properties.frontend.1",
    "*.properties.examples.0",
    "*.properties.examples.1",
    *(f"*.properties.addons.{index}" for index in range(6)),
    "*.properties.git",
    "*.properties.install",
    "*.properties.runtime",
)


def export_row(**properties: str) -> dict[str, str]:
    """Build a full raw row with empty columns except the given properties.

    ``timestamp`` maps to ``*.timestamp``; other keywords map to
    ``*.properties.<name>`` with ``_`` standing in for ``.`` in indexed
    names, e.g. ``addons_0``.
    """
    row = {column: "" for column in EXPORT_HEADER}
    for name, value in properties.items():
        if name == "timestamp":
            row["*.timestamp"] = value
        else:
            row[f"*.properties.{_dotted(name)}"] = value
    return row


def export_csv(rows: list[dict[str, str]]) -> str:
    """Render rows built by ``export_row`` as CSV export text."""
    buffer = io.StringIO()
    writer = csv.DictWriter(buffer, fieldnames=list(EXPORT_HEADER), lineterminator="\n")
    writer.writeheader()
    writer.writerows(rows)
    return buffer.getvalue()


def _dotted(name: str) -> str:
    prefix, _, suffix = name.rpartition("_")
    if prefix and suffix.isdigit():
        return f"{prefix}.{suffix}"
    return name
