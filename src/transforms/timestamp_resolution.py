"""Timestamp resolution transform.

This module turns raw export timestamps into a date string and a UTC
hour bucket. Parsing is fallible by contract: callers receive None for
unparseable input and choose their own substitute explicitly.
"""

from __future__ import annotations

from datetime import datetime, timezone

from core.types import ResolvedTimestamp

DEFAULT_HOUR = 0


def parse_timestamp(raw_value: object) -> datetime | None:
    """Parse an ISO-8601 style date or date-time string.

    Naive values are read as UTC. Both ``T`` and space separators are
    accepted, as is a trailing ``Z``.

    Args:
        raw_value: Raw column value.

    Returns:
        Timezone-aware UTC datetime, or None when input is not parseable.
    """
    if not isinstance(raw_value, str):
        return None
    candidate = raw_value.strip()
    if not candidate:
        return None
    if candidate[-1] in ("Z", "z"):
        candidate = candidate[:-1] + "+00:00"
    try:
        parsed = datetime.fromisoformat(candidate)
        if parsed.tzinfo is None:
            return parsed.replace(tzinfo=timezone.utc)
        return parsed.astimezone(timezone.utc)
    except (ValueError, OverflowError):
        return None


def resolve_timestamp(raw_value: object, now: datetime) -> ResolvedTimestamp:
    """Resolve a raw timestamp into its date and UTC hour.

    A missing or empty value is replaced by ``now`` before extraction, so
    rows without a timestamp are dated to the run instead of rejected.

    Args:
        raw_value: Raw timestamp column value.
        now: Current run time used as substitute for missing values.

    Returns:
        Date prefix and hour bucket.
    """
    if isinstance(raw_value, str) and raw_value:
        timestamp = raw_value
    else:
        timestamp = format_iso_utc(now)
    parsed = parse_timestamp(timestamp)
    hour = parsed.hour if parsed is not None else DEFAULT_HOUR
    return ResolvedTimestamp(date=extract_date(timestamp), hour=hour)


def extract_date(timestamp: str) -> str:
    """Return the date prefix of a timestamp string.

    The prefix ends at the first ``T``; failing that at the first space;
    otherwise the whole string is returned unchanged.
    """
    if "T" in timestamp:
        return timestamp.split("T", 1)[0]
    return timestamp.split(" ", 1)[0]


def format_iso_utc(moment: datetime) -> str:
    """Render a datetime as ISO-8601 UTC with millisecond precision.

    Args:
        moment: Aware or naive (assumed UTC) datetime.

    Returns:
        String such as ``2024-03-15T08:30:00.000Z``.
    """
    if moment.tzinfo is None:
        moment = moment.replace(tzinfo=timezone.utc)
    utc_moment = moment.astimezone(timezone.utc)
    return utc_moment.strftime("%Y-%m-%dT%H:%M:%S.") + f"{utc_moment.microsecond // 1000:03d}Z"
