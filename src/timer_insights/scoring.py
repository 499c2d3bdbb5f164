"""Composite productivity score."""

from __future__ import annotations

from datetime import datetime

from timer_insights.analyzers.base import (
    completion_rate,
    mean,
    resolve_now,
    round_half_up,
    split_halves,
)
from timer_insights.analyzers.consistency import active_days, analyze_consistency
from timer_insights.models import Grade, ProductivityScore, ScoreBreakdown, TimerSessionData

# percent of the overall score
WEIGHTS: dict[str, int] = {
    "consistency": 25,
    "completion": 25,
    "duration": 20,
    "frequency": 15,
    "improvement": 15,
}

OPTIMAL_MIN_MINUTES = 15
OPTIMAL_MAX_MINUTES = 45
LONG_FALLOFF_MINUTES = 135
SESSION_CEILING = 50
ACTIVE_DAY_CEILING = 30

GRADE_THRESHOLDS: tuple[tuple[int, Grade], ...] = (
    (95, Grade.A_PLUS),
    (85, Grade.A),
    (70, Grade.B),
    (55, Grade.C),
    (40, Grade.D),
)


def grade_for(overall: int) -> Grade:
    """Map an overall score to its letter grade."""
    for threshold, grade in GRADE_THRESHOLDS:
        if overall >= threshold:
            return grade
    return Grade.F


def duration_score(avg_seconds: float) -> int:
    """Score an average session length.

    Full marks inside the 15-45 minute window. Shorter sessions fall
    linearly to 0 at zero minutes; longer ones fall to 0 at three hours.
    """
    minutes = avg_seconds / 60
    if minutes < OPTIMAL_MIN_MINUTES:
        score = 100 * minutes / OPTIMAL_MIN_MINUTES
    elif minutes <= OPTIMAL_MAX_MINUTES:
        score = 100.0
    else:
        score = 100 - (minutes - OPTIMAL_MAX_MINUTES) * 100 / LONG_FALLOFF_MINUTES
    return round_half_up(min(100.0, max(0.0, score)))


def frequency_score(session_count: int, active_day_count: int) -> int:
    session_part = min(100.0, session_count * 100 / SESSION_CEILING)
    day_part = min(100.0, active_day_count * 100 / ACTIVE_DAY_CEILING)
    return round_half_up(0.5 * session_part + 0.5 * day_part)


def improvement_score(sessions: list[TimerSessionData]) -> int:
    """50 is neutral; above 50 means newer sessions finish more often.

    Holding a perfect completion rate across both halves scores 100.
    """
    if len(sessions) < 2:
        return 50
    older, newer = split_halves(sessions)
    older_rate, newer_rate = completion_rate(older), completion_rate(newer)
    if older_rate == newer_rate == 100:
        return 100
    delta = newer_rate - older_rate
    return round_half_up(min(100.0, max(0.0, 50 + delta / 2)))


def calculate_productivity_score(
    sessions: list[TimerSessionData],
    now: datetime | None = None,
) -> ProductivityScore:
    """Combine five weighted sub-scores into an overall score and grade.

    Args:
        sessions: Sessions to score, in any order.
        now: Reference time for the consistency sub-score.

    Returns:
        Overall score, letter grade and breakdown. An empty list scores 0 (F).
    """
    if not sessions:
        return ProductivityScore()

    now = resolve_now(now)
    breakdown = ScoreBreakdown(
        consistency=analyze_consistency(sessions, now).score,
        duration=duration_score(mean([s.duration for s in sessions])),
        completion=completion_rate(sessions),
        frequency=frequency_score(len(sessions), len(active_days(sessions))),
        improvement=improvement_score(sessions),
    )

    weighted = sum(getattr(breakdown, name) * weight for name, weight in WEIGHTS.items())
    overall = round_half_up(weighted / 100)
    overall = min(100, max(0, overall))

    return ProductivityScore(overall=overall, breakdown=breakdown, grade=grade_for(overall))
