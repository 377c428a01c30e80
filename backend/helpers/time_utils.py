"""
UTC timestamp helpers for change-feed cursors.
"""

from datetime import datetime, timezone


def utc_now() -> datetime:
    """Current UTC time (timezone-aware)."""
    return datetime.now(timezone.utc)


def to_naive_utc(dt: datetime) -> datetime:
    """
    Normalize a datetime for comparison with stored timestamps.

    Timestamp columns hold naive UTC values, so aware datetimes are converted
    to UTC and stripped of tzinfo. Naive input is assumed to be UTC already.
    """
    if dt.tzinfo is not None:
        dt = dt.astimezone(timezone.utc).replace(tzinfo=None)
    return dt

