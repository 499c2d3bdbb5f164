"""Week-over-week productivity trend."""

from __future__ import annotations

from datetime import datetime, timedelta

from timer_insights.analyzers.base import (
    completion_rate,
    mean,
    percent_change,
    resolve_now,
    round_half_up,
)
from timer_insights.models import (
    PeriodChange,
    PeriodStats,
    ProductivityTrendInsight,
    TimerSessionData,
    TrendDirection,
)

PERIOD = timedelta(days=7)
STABLE_THRESHOLD = 10  # percent


def _period_stats(sessions: list[TimerSessionData]) -> PeriodStats:
    durations = [s.duration for s in sessions]
    return PeriodStats(
        sessions=len(sessions),
        duration=sum(durations),
        avg_duration=round_half_up(mean(durations)),
        completion_rate=completion_rate(sessions),
    )


def analyze_productivity_trend(
    sessions: list[TimerSessionData],
    now: datetime | None = None,
) -> ProductivityTrendInsight:
    """Compare the last 7 days against the 7 days before them.

    Args:
        sessions: Sessions to analyze, in any order.
        now: Reference time; defaults to the current local time.

    Returns:
        Per-period stats, the percentage change, and an up/down/stable label
        driven by the change in session count.
    """
    now = resolve_now(now)
    current_start = now - PERIOD
    previous_start = current_start - PERIOD

    current = [s for s in sessions if current_start <= s.start_time <= now]
    previous = [s for s in sessions if previous_start <= s.start_time < current_start]

    current_stats = _period_stats(current)
    previous_stats = _period_stats(previous)

    change = PeriodChange(
        sessions=percent_change(current_stats.sessions, previous_stats.sessions),
        duration=percent_change(current_stats.duration, previous_stats.duration),
        completion_rate=current_stats.completion_rate - previous_stats.completion_rate,
    )

    if change.sessions >= STABLE_THRESHOLD:
        trend = TrendDirection.UP
    elif change.sessions <= -STABLE_THRESHOLD:
        trend = TrendDirection.DOWN
    else:
        trend = TrendDirection.STABLE

    return ProductivityTrendInsight(
        current_period=current_stats,
        previous_period=previous_stats,
        change=change,
        trend=trend,
    )
