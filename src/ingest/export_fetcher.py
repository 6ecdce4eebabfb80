"""Raw telemetry export loading.

This module fetches the CSV export over HTTP(S) or reads a local copy.
Any failure here is fatal to the run and surfaces as AnalyticsFetchError.
"""

from __future__ import annotations

from pathlib import Path

import requests

from core.errors import AnalyticsFetchError
from core.logging_config import get_logger

_LOGGER = get_logger(__name__)
_HTTP_SCHEMES = ("http://", "https://")


def fetch_export_text(
    source: str,
    timeout_seconds: float | None = None,
    session: requests.Session | None = None,
) -> str:
    """Load raw export text from a URL or local file.

    Args:
        source: ``http(s)://`` URL or local CSV path.
        timeout_seconds: Optional HTTP timeout; transport default when None.
        session: Optional requests session, mainly for injection in tests.

    Returns:
        Decoded export text.

    Raises:
        AnalyticsFetchError: If the export cannot be retrieved or decoded.
    """
    _LOGGER.info("fetch_started", source=source)
    if source.lower().startswith(_HTTP_SCHEMES):
        return _fetch_http_text(source, timeout_seconds, session or requests.Session())
    return _read_local_text(Path(source).expanduser())


def _fetch_http_text(url: str, timeout_seconds: float | None, session: requests.Session) -> str:
    """Download export text, treating any non-2xx status as fatal.

    Args:
        url: Export URL.
        timeout_seconds: Optional request timeout.
        session: Requests session used for the call.

    Returns:
        Response body decoded as UTF-8.

    Raises:
        AnalyticsFetchError: On transport errors, bad status, or bad encoding.
    """
    try:
        response = session.get(url, timeout=timeout_seconds)
    except requests.RequestException as error:
        raise AnalyticsFetchError(
            f"Failed to fetch export from {url}: {error}. Check connectivity and retry."
        ) from error
    if not 200 <= response.status_code < 300:
        raise AnalyticsFetchError(
            f"Failed to fetch export from {url}: HTTP {response.status_code}. "
            "Verify the export URL is reachable."
        )
    return _decode_body(url, response.content)


def _read_local_text(source_path: Path) -> str:
    """Read export text from a local file.

    Args:
        source_path: Path to a CSV export.

    Returns:
        File contents decoded as UTF-8.

    Raises:
        AnalyticsFetchError: If the file is missing or unreadable.
    """
    if not source_path.is_file():
        raise AnalyticsFetchError(
            f"Failed to read export at {source_path}: file does not exist. "
            "Provide an existing CSV file or an http(s) URL."
        )
    try:
        body = source_path.read_bytes()
    except OSError as error:
        raise AnalyticsFetchError(f"Failed to read export at {source_path}: {error}.") from error
    return _decode_body(str(source_path), body)


def _decode_body(source: str, body: bytes) -> str:
    try:
        return body.decode("utf-8-sig")
    except UnicodeDecodeError as error:
        raise AnalyticsFetchError(
            f"Export at {source} is not valid UTF-8 text: {error.reason}."
        ) from error
