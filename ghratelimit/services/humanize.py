"""Coarse, human-readable rendering of durations."""

from __future__ import annotations

from datetime import timedelta


def human_duration(d: timedelta) -> str:
    """Return a human-readable approximation of *d* (eg. "About a minute").

    Non-positive durations render as ``"Less than a second"``.  Hours are
    rounded with ``int(hours + 0.5)``, so 90 minutes is already "2 hours".
    """
    total = d.total_seconds()

    seconds = int(total)
    if seconds < 1:
        return "Less than a second"
    if seconds == 1:
        return "1 second"
    if seconds < 60:
        return f"{seconds} seconds"

    minutes = int(total / 60)
    if minutes == 1:
        return "About a minute"
    if minutes < 60:
        return f"{minutes} minutes"

    hours = int(total / 3600 + 0.5)
    if hours == 1:
        return "About an hour"
    if hours < 48:
        return f"{hours} hours"
    if hours < 24 * 7 * 2:
        return f"{hours // 24} days"
    if hours < 24 * 30 * 2:
        return f"{hours // 24 // 7} weeks"
    if hours < 24 * 365 * 2:
        return f"{hours // 24 // 30} months"
    return f"{int(total / 3600) // 24 // 365} years"
