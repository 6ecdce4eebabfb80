"""Snapshot document persistence.

This module writes and reads the single aggregated snapshot document.
Writes go through a temporary sibling file and an atomic replace, so a
failed run leaves the previous snapshot untouched.
"""

from __future__ import annotations

import json
import os
import tempfile
from pathlib import Path

from core.config import AnalyticsConfig
from core.errors import AnalyticsStoreError
from core.logging_config import get_logger
from core.types import AnalyticsSnapshot
from store.snapshot_payload import snapshot_from_payload, snapshot_to_payload

_LOGGER = get_logger(__name__)


class SnapshotStore:
    """Snapshot document store rooted at the configured output path."""

    def __init__(self, config: AnalyticsConfig) -> None:
        """Initialize snapshot store from config.

        Args:
            config: Runtime configuration.
        """
        self._output_path = config.output_path

    @property
    def output_path(self) -> Path:
        """Location of the snapshot document."""
        return self._output_path

    def write(self, snapshot: AnalyticsSnapshot) -> Path:
        """Persist a snapshot document, replacing any previous one.

        Args:
            snapshot: Snapshot to serialize.

        Returns:
            Path of the written document.

        Raises:
            AnalyticsStoreError: If the directory or file cannot be written.
        """
        document = serialize_snapshot(snapshot)
        try:
            self._output_path.parent.mkdir(parents=True, exist_ok=True)
            _write_atomic(self._output_path, document)
        except OSError as error:
            raise AnalyticsStoreError(
                f"Failed to write snapshot to {self._output_path}: {error}. "
                "Check the output directory permissions and retry."
            ) from error
        _LOGGER.info(
            "snapshot_persisted",
            output_path=str(self._output_path),
            total_records=snapshot.total_records,
            size_bytes=len(document.encode("utf-8")),
        )
        return self._output_path

    def load(self) -> AnalyticsSnapshot:
        """Load the persisted snapshot document.

        Returns:
            Parsed snapshot.

        Raises:
            AnalyticsStoreError: If the document is missing or invalid.
        """
        if not self._output_path.exists():
            raise AnalyticsStoreError(
                f"Snapshot not found at {self._output_path}. Run 'generate' first."
            )
        try:
            payload = json.loads(self._output_path.read_text(encoding="utf-8"))
        except OSError as error:
            raise AnalyticsStoreError(
                f"Failed to read snapshot at {self._output_path}: {error}."
            ) from error
        except json.JSONDecodeError as error:
            raise AnalyticsStoreError(
                f"Snapshot at {self._output_path} is not valid JSON: {error.msg}."
            ) from error
        return snapshot_from_payload(payload)


def serialize_snapshot(snapshot: AnalyticsSnapshot) -> str:
    """Render a snapshot as its canonical JSON text."""
    return json.dumps(snapshot_to_payload(snapshot), indent=2) + "\n"


def _write_atomic(target_path: Path, document: str) -> None:
    """Write text to a sibling temp file, then replace the target."""
    file_descriptor, temp_name = tempfile.mkstemp(
        prefix=f".{target_path.name}.", suffix=".tmp", dir=target_path.parent
    )
    temp_path = Path(temp_name)
    try:
        with os.fdopen(file_descriptor, "w", encoding="utf-8") as handle:
            handle.write(document)
        os.chmod(temp_path, _default_file_mode())
        os.replace(temp_path, target_path)
    finally:
        if temp_path.exists():
            temp_path.unlink()


def _default_file_mode() -> int:
    """Return the mode a plain file create would get under the current umask."""
    # mkstemp always creates 0600 files.
    current_umask = os.umask(0)
    os.umask(current_umask)
    return 0o666 & ~current_umask
