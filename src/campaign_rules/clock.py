"""
UTC instant helpers.

Every time-sensitive rule in this package takes an explicit ``now``; these
helpers resolve the default and make sure naive and aware datetimes never
get compared with each other.
"""

from datetime import datetime, timezone


def utc_now() -> datetime:
    """Return the current instant as a timezone-aware UTC datetime."""
    return datetime.now(timezone.utc)


def as_utc(value: datetime) -> datetime:
    """Normalize a datetime to UTC. Naive values are taken to be UTC already."""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def resolve_now(now: datetime | None) -> datetime:
    """Return ``now`` normalized to UTC, or the real clock when it is None."""
    if now is None:
        return utc_now()
    return as_utc(now)
