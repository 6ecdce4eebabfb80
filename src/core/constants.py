"""Core constants used across stack-analytics modules.

This module centralizes export column names, sentinels, and defaults.
Keeping values here avoids magic literals in business logic.
"""

from __future__ import annotations

from pathlib import Path

DEFAULT_EXPORT_URL = "https://r2.amanv.dev/export.csv"
DEFAULT_OUTPUT_DIR = Path("public")
SNAPSHOT_FILE_NAME = "analytics-data.json"
SOURCE_SPEC_VERSION = 1

UNKNOWN_VALUE = "unknown"
NONE_VALUE = "none"
EMPTY_VALUE = ""
ENABLED_VALUE = "enabled"
DISABLED_VALUE = "disabled"
TRUE_LITERAL = "True"

TIMESTAMP_COLUMN = "*.timestamp"
TIMESTAMP_HEADER_MARKER = "timestamp"
PROPERTY_COLUMN_PREFIX = "*.properties."
ADDON_SLOT_COUNT = 6
FRONTEND_SLOT_COUNT = 2
EXAMPLES_SLOT_COUNT = 2
