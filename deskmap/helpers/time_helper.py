"""Time utility helpers."""

from __future__ import annotations

import time
from datetime import datetime, timezone


def now_ms() -> int:
    """
    Get current timestamp in milliseconds since epoch.

    Returns:
        Current time as integer milliseconds
    """
    return int(time.time() * 1000)


def now_s() -> float:
    """Current wall-clock time in seconds since epoch."""
    return time.time()


def now_iso() -> str:
    """
    Current UTC time as an ISO-8601 string with millisecond precision.

    Matches the format browsers produce for Date.toISOString(), e.g.
    "2024-05-01T09:30:00.123Z".
    """
    return datetime.now(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")
