"""Utility functions for time handling."""

from .timestamps import format_duration, format_timestamp, utc_now

__all__ = [
    "utc_now",
    "format_timestamp",
    "format_duration",
]
