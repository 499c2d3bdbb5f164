"""Text formatting helpers shared by messages, recommendations and reports."""

from timer_insights.analyzers.base import round_half_up


def format_hour(hour: int) -> str:
    """Format a 0-23 hour as a 12-hour clock label, e.g. ``9 AM``."""
    period = "PM" if hour >= 12 else "AM"
    if hour == 0:
        display = 12
    elif hour > 12:
        display = hour - 12
    else:
        display = hour
    return f"{display} {period}"


def format_duration(seconds: int | float) -> str:
    """Format seconds as ``25 minutes``, ``1 hour`` or ``1h 30m``."""
    minutes = round_half_up(seconds / 60)
    if minutes < 60:
        return f"{minutes} minutes"
    hours, remainder = divmod(minutes, 60)
    if remainder:
        return f"{hours}h {remainder}m"
    return f"{hours} hour{'s' if hours > 1 else ''}"


def format_focus_time(seconds: int) -> str:
    """Format a total as ``2h 5m`` or ``45 minutes``."""
    hours, rest = divmod(seconds, 3600)
    minutes = rest // 60
    if hours > 0:
        return f"{hours}h {minutes}m"
    return f"{minutes} minutes"


def plural(count: int, word: str) -> str:
    return f"{count} {word}{'' if count == 1 else 's'}"
