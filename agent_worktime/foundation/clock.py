"""Epoch-millisecond clock helpers.

Status timestamps travel through the system as integer epoch
milliseconds.  This module is the single place that turns them into
human-readable UTC strings.
"""

from __future__ import annotations

from datetime import datetime, timezone


def from_millis(ms: int) -> datetime:
    """Return a UTC-aware datetime for an epoch-millisecond value."""
    return datetime.fromtimestamp(ms / 1000, tz=timezone.utc)


def to_iso(ms: int | None) -> str | None:
    """ISO-8601 UTC string with millisecond precision, e.g. ``2016-02-21T10:00:00.000Z``."""
    if ms is None:
        return None
    return from_millis(ms).isoformat(timespec="milliseconds").replace("+00:00", "Z")
