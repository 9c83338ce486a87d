from __future__ import annotations


def format_duration(total_seconds: float) -> str:
    """
    Readable elapsed time, two most significant units only.

    90000 -> "1 days and 1 hours", 3661 -> "1 hours and 1 minutes",
    45 -> "45 seconds".
    """
    secs = int(total_seconds)
    if secs < 0:
        raise ValueError("duration cannot be negative")

    mins = secs // 60
    hours = mins // 60
    days = hours // 24

    if days > 0:
        return f"{days} days and {hours % 24} hours"
    if hours > 0:
        return f"{hours} hours and {mins % 60} minutes"
    if mins > 0:
        return f"{mins} minutes and {secs % 60} seconds"
    return f"{secs} seconds"
