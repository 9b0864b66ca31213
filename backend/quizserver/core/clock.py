"""Timezone helpers.

All timestamps are kept in UTC. SQLite hands datetimes back without tzinfo,
so anything read from the database goes through :func:`as_utc` before it is
compared or serialised.
"""

from datetime import datetime, timezone


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def as_utc(value: datetime | None) -> datetime | None:
    """Attach UTC to naive datetimes and convert aware ones to UTC."""
    if value is None:
        return None
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)
