"""Timestamp utilities for UTC handling and runtime reporting.

This module provides utilities for working with timestamps in UTC:
- Getting current UTC time
- Formatting timestamps for reports
- Formatting elapsed durations for humans
"""

from datetime import datetime, timezone


def utc_now() -> datetime:
    """Get current UTC time as timezone-aware datetime.

    Returns:
        Current UTC time with timezone info

    Example:
        >>> now = utc_now()
        >>> now.tzinfo == timezone.utc
        True
    """
    return datetime.now(timezone.utc)


def format_timestamp(dt: datetime) -> str:
    """Format a datetime as ISO 8601 string in UTC.

    Timezone-naive datetimes are treated as UTC.

    Example:
        >>> from datetime import datetime, timezone
        >>> format_timestamp(datetime(2025, 11, 4, 12, 0, 0, tzinfo=timezone.utc))
        '2025-11-04T12:00:00Z'
    """
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    return dt.astimezone(timezone.utc).strftime("%Y-%m-%dT%H:%M:%SZ")


def format_duration(seconds: float) -> str:
    """Format an elapsed time for humans.

    Args:
        seconds: Elapsed seconds (negative values are clamped to 0)

    Returns:
        "12.34s" under a minute, "3m 05.00s" under an hour, else "1h 02m 03.00s"

    Example:
        >>> format_duration(75.5)
        '1m 15.50s'
    """
    seconds = max(0.0, seconds)
    if seconds < 60:
        return f"{seconds:.2f}s"

    minutes, secs = divmod(seconds, 60)
    if minutes < 60:
        return f"{int(minutes)}m {secs:05.2f}s"

    hours, minutes = divmod(int(minutes), 60)
    return f"{hours}h {minutes:02d}m {secs:05.2f}s"
