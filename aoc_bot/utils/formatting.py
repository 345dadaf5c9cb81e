"""
Formatting utilities for leaderboard output.

Handles durations, ranks and timezone-aware timestamps.
"""

from datetime import datetime, timedelta, tzinfo


def format_timedelta(delta: timedelta) -> str:
    """
    Format a duration into a compact human-readable string.

    Examples:
        0:04:05       (4 minutes 5 seconds)
        13:07:00      (13 hours 7 minutes)
        2d 01:00:00   (2 days 1 hour)
        -0:00:30      (negative durations keep their sign)

    Args:
        delta: Duration to format, sub-second parts are truncated

    Returns:
        Formatted duration string
    """
    total_seconds = int(delta.total_seconds())
    sign = "-" if total_seconds < 0 else ""
    total_seconds = abs(total_seconds)

    days, remainder = divmod(total_seconds, 86400)
    hours, remainder = divmod(remainder, 3600)
    minutes, secs = divmod(remainder, 60)

    if days > 0:
        return f"{sign}{days}d {hours:02d}:{minutes:02d}:{secs:02d}"
    return f"{sign}{hours}:{minutes:02d}:{secs:02d}"


def format_rank(rank: int) -> str:
    """Format a rank for display, e.g. ``1.``"""
    if rank < 1:
        raise ValueError("Ranks start at 1")
    return f"{rank}."


def format_ymd_hms(instant: datetime, tz: tzinfo) -> str:
    """Format an aware instant in the given timezone as ``YYYY-MM-DD HH:MM:SS``."""
    return instant.astimezone(tz).strftime("%Y-%m-%d %H:%M:%S")


def format_local(instant: datetime, tz: tzinfo) -> str:
    """Format an aware instant in the given timezone as ``YYYY-MM-DD HH:MM:SS+HHMM``."""
    return instant.astimezone(tz).strftime("%Y-%m-%d %H:%M:%S%z")
