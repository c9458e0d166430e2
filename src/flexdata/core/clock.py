"""Timestamp helpers.

All timestamps are timezone-aware UTC. SQLite hands back naive datetimes,
so values read from storage or the wire go through ``as_utc``.
"""

from datetime import datetime, timezone


def utc_now() -> datetime:
    """Current time as an aware UTC datetime."""
    return datetime.now(timezone.utc)


def as_utc(value: datetime | str | None) -> datetime:
    """Coerce a datetime or ISO 8601 string to an aware UTC datetime.

    ``None`` maps to the current time so freshly built items sort last
    among equal keys.
    """
    if value is None:
        return utc_now()
    if isinstance(value, str):
        value = datetime.fromisoformat(value.replace("Z", "+00:00"))
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)
