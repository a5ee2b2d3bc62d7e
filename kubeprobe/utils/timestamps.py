"""Timestamp parsing and human-readable age rendering."""

from __future__ import annotations

from contextlib import suppress
from datetime import datetime, timezone
from typing import Any

UNKNOWN_AGE = "Unknown"


def parse_iso_timestamp(timestamp: Any) -> datetime | None:
    """Parse kubernetes timestamp strings into aware datetimes."""
    if isinstance(timestamp, datetime):
        return timestamp if timestamp.tzinfo else timestamp.replace(tzinfo=timezone.utc)
    if not isinstance(timestamp, str) or not timestamp:
        return None
    with suppress(ValueError, TypeError):
        parsed = datetime.fromisoformat(timestamp.replace("Z", "+00:00"))
        return parsed if parsed.tzinfo else parsed.replace(tzinfo=timezone.utc)
    return None


def format_age(timestamp: datetime | None, now: datetime | None = None) -> str:
    """Render ``now - timestamp`` as "45s", "5m", "2h" or "3d".

    Missing timestamps render as "Unknown".
    """
    if timestamp is None:
        return UNKNOWN_AGE
    now = now or datetime.now(timezone.utc)
    seconds = max(0, int((now - timestamp).total_seconds()))
    if seconds < 60:
        return f"{seconds}s"
    if seconds < 3600:
        return f"{seconds // 60}m"
    if seconds < 86400:
        return f"{seconds // 3600}h"
    return f"{seconds // 86400}d"


def format_rfc3339(timestamp: datetime) -> str:
    """Render an aware datetime as an RFC3339 UTC string with second precision."""
    return timestamp.astimezone(timezone.utc).strftime("%Y-%m-%dT%H:%M:%SZ")
