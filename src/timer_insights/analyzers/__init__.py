"""Metric analyzers over timer session history.

Each analyzer is an independent pass over the full session list and
returns one typed result:
- analyze_peak_hours: busiest three-hour window of the day
- analyze_duration_patterns: session lengths that get finished
- analyze_mode_mastery: best-performing timer mode
- analyze_consistency: active days, streaks and cadence
- analyze_productivity_trend: this week against last week
"""

from timer_insights.analyzers.consistency import analyze_consistency
from timer_insights.analyzers.duration import analyze_duration_patterns
from timer_insights.analyzers.modes import analyze_mode_mastery
from timer_insights.analyzers.peak_hours import analyze_peak_hours
from timer_insights.analyzers.trend import analyze_productivity_trend

__all__ = [
    "analyze_consistency",
    "analyze_duration_patterns",
    "analyze_mode_mastery",
    "analyze_peak_hours",
    "analyze_productivity_trend",
]
