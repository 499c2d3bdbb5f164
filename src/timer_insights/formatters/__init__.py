"""Formatters for insights output."""

from timer_insights.formatters.report import format_insights_markdown
from timer_insights.formatters.templates import (
    format_duration,
    format_focus_time,
    format_hour,
)

__all__ = [
    "format_duration",
    "format_focus_time",
    "format_hour",
    "format_insights_markdown",
]
