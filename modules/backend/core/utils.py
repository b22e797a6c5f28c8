"""
Core Utilities.

Shared utility functions used across the backend.
All modules should import utilities from this module.
"""

from datetime import datetime, timedelta, timezone


def utc_now() -> datetime:
    """
    Return current UTC time as timezone-naive datetime.

    All datetime values in the application should be timezone-naive
    and assumed to be UTC. This ensures consistent behavior across
    the codebase and simplifies database storage.

    Returns:
        Current UTC time with tzinfo stripped
    """
    return datetime.now(timezone.utc).replace(tzinfo=None)


def next_timestamp(previous: datetime | None) -> datetime:
    """
    Return a timestamp strictly later than ``previous``.

    Uses the current UTC time unless the clock has not moved past
    ``previous`` (coarse clocks, fast successive writes), in which case
    ``previous`` is bumped by one microsecond.

    Args:
        previous: Last timestamp written for the record, or None

    Returns:
        Timezone-naive UTC datetime greater than ``previous``
    """
    now = utc_now()
    if previous is not None and now <= previous:
        return previous + timedelta(microseconds=1)
    return now
