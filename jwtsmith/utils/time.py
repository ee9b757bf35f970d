"""UTC time helpers."""

from __future__ import annotations

from datetime import datetime, timezone


def utc_now() -> datetime:
    """Return timezone-aware UTC now."""
    return datetime.now(timezone.utc)


def current_time() -> int:
    """Return the current time as integer milliseconds since the epoch."""
    return int(utc_now().timestamp() * 1000)
