"""
Timezone-aware datetime utilities.

The database stores naive UTC datetimes. Everything above the repositories
works with timezone-aware values; these helpers convert at the boundary.
"""

import re
from datetime import datetime, time, timezone
from typing import Optional
from zoneinfo import ZoneInfo

# UTC timezone constant
UTC = timezone.utc

_HHMM_PATTERN = re.compile(r"^([01]\d|2[0-3]):([0-5]\d)$")


def now_utc() -> datetime:
    """
    Get current UTC datetime (timezone-aware).

    Returns:
        datetime: Current UTC time with tzinfo set to UTC
    """
    return datetime.now(UTC)


def ensure_utc(dt: Optional[datetime]) -> Optional[datetime]:
    """
    Ensure datetime is timezone-aware and in UTC.

    Args:
        dt: datetime to convert (can be None, naive, or timezone-aware)

    Returns:
        Optional[datetime]: UTC timezone-aware datetime, or None if input is None
    """
    if dt is None:
        return None

    if dt.tzinfo is None:
        # Naive datetime - assume UTC
        return dt.replace(tzinfo=UTC)

    return dt.astimezone(UTC)


def to_naive_utc(dt: Optional[datetime]) -> Optional[datetime]:
    """Convert a datetime to naive UTC for storage."""
    if dt is None:
        return None
    return ensure_utc(dt).replace(tzinfo=None)


def get_zone(name: str) -> ZoneInfo:
    """Resolve an IANA timezone name."""
    return ZoneInfo(name)


def is_valid_hhmm(value: str) -> bool:
    """Check that a string is a 24h HH:MM time."""
    return bool(_HHMM_PATTERN.match(value))


def parse_hhmm(value: str) -> time:
    """
    Parse an HH:MM time-of-day string.

    Args:
        value: Time string such as "09:00"

    Returns:
        time: Parsed time of day

    Raises:
        ValueError: If the string is not a valid HH:MM time
    """
    match = _HHMM_PATTERN.match(value or "")
    if not match:
        raise ValueError(f"Invalid time of day: {value!r} (expected HH:MM)")
    return time(int(match.group(1)), int(match.group(2)))
