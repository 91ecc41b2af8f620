"""
Ranking rules for the public leaderboard.

Pure functions: the composite ordering key, the request-limit clamp and the
human-readable age bucket. The leaderboard service composes them over rows
read from the database.
"""

from __future__ import annotations

from datetime import datetime, timedelta
from typing import Any, Tuple

DEFAULT_LIMIT = 10
MAX_LIMIT = 50
ANONYMOUS_OWNER = "Anonymous Ghost Keeper"


def clamp_limit(
    raw: Any,
    default: int = DEFAULT_LIMIT,
    maximum: int = MAX_LIMIT,
) -> int:
    """
    Normalize a caller-supplied row limit into ``[1, maximum]``.

    Absent or non-numeric input uses ``default``; numbers are truncated to an
    integer and clamped.

    >>> [clamp_limit(v) for v in (None, "abc", 0, -5, 1000, "7")]
    [10, 10, 1, 1, 50, 7]
    """
    if raw is None or isinstance(raw, bool):
        return default

    try:
        value = int(float(raw)) if isinstance(raw, str) else int(raw)
    except (TypeError, ValueError, OverflowError):
        return default

    return max(1, min(maximum, value))


def ranking_key(level: int, experience: int, created_at: datetime) -> Tuple[int, int, float]:
    """
    Sort key for ``sorted(..., key=...)``: level desc, experience desc, created_at asc.

    ``sorted`` is stable, so rows equal on all three keys keep their input order.
    """
    return (-level, -experience, created_at.timestamp())


def _plural(count: int, unit: str) -> str:
    return f"{count} {unit}{'' if count == 1 else 's'} old"


def format_age(created_at: datetime, now: datetime) -> str:
    """
    Age bucket for a pet born at ``created_at``, e.g. "3 hours old".

    Buckets: under an hour "Just born"; under a day in hours; one day;
    2 to 6 days; whole weeks while under four; whole 30-day months after.
    A ``created_at`` in the future (clock skew) is treated as just born.
    """
    diff = now - created_at
    if diff < timedelta(hours=1):
        return "Just born"

    hours = int(diff.total_seconds() // 3600)
    if hours < 24:
        return _plural(hours, "hour")

    days = diff.days
    if days == 1:
        return "1 day old"
    if days < 7:
        return _plural(days, "day")

    weeks = days // 7
    if weeks < 4:
        return _plural(weeks, "week")

    return _plural(days // 30, "month")
