"""
Shared formatting helpers for the MCP tools.
"""

from datetime import datetime
from typing import Optional


def format_duration(seconds: float) -> str:
    """Format seconds into human-readable duration.

    Args:
        seconds: Duration in seconds (fractions are dropped)

    Returns:
        Formatted string like "1h01m01s" or "25m30s"
    """
    if not seconds or seconds <= 0:
        return "0s"
    seconds = int(seconds)
    h = seconds // 3600
    m = (seconds % 3600) // 60
    s = seconds % 60
    if h > 0:
        return f"{h}h{m:02d}m{s:02d}s"
    if m > 0:
        return f"{m}m{s:02d}s"
    return f"{s}s"


def format_local_time(value: Optional[datetime]) -> Optional[str]:
    """Format a datetime in its recorded offset, to the second: 2024-03-07T08:15:00-08:00."""
    if value is None:
        return None
    return value.replace(microsecond=0).isoformat()
