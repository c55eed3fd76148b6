"""
Timestamp helpers.

All persisted timestamps are timezone-aware UTC. SQLite hands naive values
back, so reads are normalized here.

Dependencies: None
System role: Recency ordering for sessions and messages
"""

from datetime import datetime, timedelta, timezone


def utc_now() -> datetime:
    """Return the current time as an aware UTC datetime."""
    return datetime.now(timezone.utc)


def ensure_aware(value: datetime) -> datetime:
    """Attach UTC to a naive datetime; aware values are converted to UTC."""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def next_timestamp(previous: datetime | None = None) -> datetime:
    """
    Return a timestamp strictly later than previous.

    Consecutive writes within one clock tick still produce increasing
    updated_at values, so recency ordering stays total.

    Args:
        previous: Last stored value, or None

    Returns:
        datetime: max(now, previous + 1 microsecond)
    """
    now = utc_now()
    if previous is None:
        return now
    previous = ensure_aware(previous)
    if now <= previous:
        return previous + timedelta(microseconds=1)
    return now
