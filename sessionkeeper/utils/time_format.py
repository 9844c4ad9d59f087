"""Relative time formatting for session listings."""

from datetime import UTC, datetime
from typing import Optional, Union

# (unit, seconds per unit), largest first
_UNITS = (
    ("month", 30 * 86400),
    ("week", 7 * 86400),
    ("day", 86400),
    ("hour", 3600),
)


def relative_time(
    dt: Union[datetime, float, int], now: Optional[datetime] = None
) -> str:
    """Format a datetime or epoch timestamp (seconds) as relative time.

    Args:
        dt: A timezone-aware datetime or seconds since epoch (file mtime).
        now: Reference time, defaults to the current time.

    Returns:
        Human-readable relative time string like '2 hours ago'.
    """
    if not isinstance(dt, datetime):
        dt = datetime.fromtimestamp(dt, tz=UTC)
    if now is None:
        now = datetime.now(UTC)

    seconds = int((now - dt).total_seconds())
    if seconds < 60:
        return "just now"

    for unit, size in _UNITS:
        count = seconds // size
        if count >= 1:
            return f"{count} {unit}{'' if count == 1 else 's'} ago"

    return f"{seconds // 60} min ago"
