"""Peak-hours analyzer: when in the day sessions cluster."""

from __future__ import annotations

from timer_insights.analyzers.base import confidence_for, rate
from timer_insights.models import (
    HourlyBucket,
    PeakHoursInsight,
    PeakWindow,
    TimerSessionData,
)

WINDOW_HOURS = 3
MEDIUM_CONFIDENCE_AT = 10
HIGH_CONFIDENCE_AT = 20


def analyze_peak_hours(sessions: list[TimerSessionData]) -> PeakHoursInsight:
    """Find the busiest three-hour window of the day.

    Sessions are bucketed by the hour they started. The window may wrap past
    midnight (e.g. 23:00-02:00); on equal session counts the earliest-starting
    window wins.

    Args:
        sessions: Sessions to analyze, in any order.

    Returns:
        The peak window and a full 24-hour distribution.
    """
    counts = [0] * 24
    completed = [0] * 24
    durations = [0] * 24

    for session in sessions:
        hour = session.start_time.hour
        counts[hour] += 1
        durations[hour] += session.duration
        if session.completed:
            completed[hour] += 1

    distribution = [
        HourlyBucket(
            hour=hour,
            sessions=counts[hour],
            duration=durations[hour],
            completion_rate=rate(completed[hour], counts[hour]),
        )
        for hour in range(24)
    ]

    best_start = 0
    best_count = -1
    for start in range(24):
        window = [(start + offset) % 24 for offset in range(WINDOW_HOURS)]
        window_count = sum(counts[h] for h in window)
        if window_count > best_count:
            best_start, best_count = start, window_count

    window = [(best_start + offset) % 24 for offset in range(WINDOW_HOURS)]
    window_sessions = sum(counts[h] for h in window)

    return PeakHoursInsight(
        peak_window=PeakWindow(
            start_hour=best_start,
            end_hour=(best_start + WINDOW_HOURS) % 24,
            sessions_count=window_sessions,
            total_duration=sum(durations[h] for h in window),
            completion_rate=rate(sum(completed[h] for h in window), window_sessions),
        ),
        hourly_distribution=distribution,
        confidence=confidence_for(len(sessions), MEDIUM_CONFIDENCE_AT, HIGH_CONFIDENCE_AT),
    )
