"""Consistency analyzer: active days, streaks, and cadence."""

from __future__ import annotations

import statistics
from datetime import date, datetime, timedelta

from timer_insights.analyzers.base import resolve_now, round_half_up
from timer_insights.models import (
    ConsistencyInsight,
    ConsistencyMetrics,
    ConsistencyTrend,
    TimerSessionData,
)

ACTIVE_RATIO_WEIGHT = 0.4
STREAK_WEIGHT = 0.3
REGULARITY_WEIGHT = 0.3
STREAK_TARGET_DAYS = 7
TREND_WINDOW = timedelta(days=7)
TREND_THRESHOLD = 0.2


def active_days(sessions: list[TimerSessionData]) -> list[date]:
    """Distinct local calendar dates with at least one session, ascending."""
    return sorted({s.start_time.date() for s in sessions})


def current_streak(days: list[date], today: date) -> int:
    """Consecutive active days ending today or yesterday; 0 otherwise."""
    past = {d for d in days if d <= today}
    if not past:
        return 0
    latest = max(past)
    if latest < today - timedelta(days=1):
        return 0

    streak = 0
    cursor = latest
    while cursor in past:
        streak += 1
        cursor -= timedelta(days=1)
    return streak


def longest_streak(days: list[date]) -> int:
    """Longest run of consecutive active days anywhere in history."""
    longest = 0
    run = 0
    previous: date | None = None
    for day in days:
        if previous is not None and day - previous == timedelta(days=1):
            run += 1
        else:
            run = 1
        longest = max(longest, run)
        previous = day
    return longest


def regularity_score(days: list[date]) -> int:
    """0-100 score for how even the gaps between active days are.

    Uses the coefficient of variation of the gaps: identical gaps score
    100, and the score falls as the gaps spread out.
    """
    if len(days) < 2:
        return 0
    gaps = [(b - a).days for a, b in zip(days, days[1:])]
    average = statistics.fmean(gaps)
    if average == 0:
        return 0
    variation = statistics.pstdev(gaps) / average
    return round_half_up(min(100.0, max(0.0, 100 * (1 - variation))))


def analyze_consistency(
    sessions: list[TimerSessionData],
    now: datetime | None = None,
) -> ConsistencyInsight:
    """Score how consistently the timer is used.

    Args:
        sessions: Sessions to analyze, in any order.
        now: Reference time; defaults to the current local time.

    Returns:
        Consistency score, streak metrics and a density trend. Empty input
        yields all-zero metrics.
    """
    if not sessions:
        return ConsistencyInsight()

    now = resolve_now(now)
    today = now.date()
    days = active_days(sessions)

    total_days = max(1, (today - days[0]).days + 1)
    streak = current_streak(days, today)
    regularity = regularity_score(days)

    active_ratio = min(1.0, len(days) / total_days)
    streak_ratio = min(1.0, streak / STREAK_TARGET_DAYS)
    score = round_half_up(
        100 * (ACTIVE_RATIO_WEIGHT * active_ratio + STREAK_WEIGHT * streak_ratio)
        + REGULARITY_WEIGHT * regularity
    )

    return ConsistencyInsight(
        score=min(100, max(0, score)),
        metrics=ConsistencyMetrics(
            active_days=len(days),
            total_days=total_days,
            current_streak=streak,
            longest_streak=longest_streak(days),
            avg_sessions_per_day=round(len(sessions) / len(days), 2),
            regularity_score=regularity,
        ),
        trend=_density_trend(sessions, now),
    )


def _density_trend(sessions: list[TimerSessionData], now: datetime) -> ConsistencyTrend:
    """Compare session counts of the last week against the week before."""
    recent_start = now - TREND_WINDOW
    earlier_start = recent_start - TREND_WINDOW

    recent = sum(1 for s in sessions if recent_start <= s.start_time <= now)
    earlier = sum(1 for s in sessions if earlier_start <= s.start_time < recent_start)

    if earlier == 0:
        return ConsistencyTrend.IMPROVING if recent > 0 else ConsistencyTrend.STABLE

    delta = (recent - earlier) / earlier
    if delta >= TREND_THRESHOLD:
        return ConsistencyTrend.IMPROVING
    if delta <= -TREND_THRESHOLD:
        return ConsistencyTrend.DECLINING
    return ConsistencyTrend.STABLE
