"""Insights pipeline: analyzers → messages → cache."""

from __future__ import annotations

import logging
from datetime import datetime

from timer_insights.analyzers import (
    analyze_consistency,
    analyze_duration_patterns,
    analyze_mode_mastery,
    analyze_peak_hours,
    analyze_productivity_trend,
)
from timer_insights.analyzers.base import resolve_now
from timer_insights.cache import InsightsCacheStore
from timer_insights.messages import generate_insight_messages
from timer_insights.models import AIInsights, DataQuality, DataRange, TimerSessionData
from timer_insights.scoring import calculate_productivity_score
from timer_insights.summary import generate_weekly_summary

logger = logging.getLogger(__name__)

PEAK_HOURS_MIN_SESSIONS = 5
MODE_MASTERY_MIN_SESSIONS = 10

_default_store: InsightsCacheStore | None = None


def classify_data_quality(session_count: int) -> DataQuality:
    """Sample-size tier: <5, 5-19, 20-49, 50+."""
    if session_count < 5:
        return DataQuality.INSUFFICIENT
    if session_count < 20:
        return DataQuality.LIMITED
    if session_count < 50:
        return DataQuality.GOOD
    return DataQuality.EXCELLENT


def _data_range(sessions: list[TimerSessionData], now: datetime) -> DataRange:
    if not sessions:
        return DataRange(start=now, end=now, sessions_analyzed=0)
    starts = [s.start_time for s in sessions]
    return DataRange(start=min(starts), end=max(starts), sessions_analyzed=len(sessions))


def generate_ai_insights(
    sessions: list[TimerSessionData],
    now: datetime | None = None,
) -> AIInsights:
    """Run every analyzer over ``sessions`` and assemble the result.

    Peak hours need at least 5 sessions and mode mastery at least 10; below
    those gates the fields are None. The other insights are always present
    and signal thin data through their confidence and trend labels.

    Args:
        sessions: Session records in any order.
        now: Reference time; defaults to the current local time.

    Returns:
        Fully populated insights, messages and recommendations included.
    """
    now = resolve_now(now)
    count = len(sessions)

    insights = AIInsights(
        generated_at=now,
        data_range=_data_range(sessions, now),
        data_quality=classify_data_quality(count),
        productivity_score=calculate_productivity_score(sessions, now),
        consistency=analyze_consistency(sessions, now),
        weekly_summary=generate_weekly_summary(sessions, now),
        peak_hours=analyze_peak_hours(sessions) if count >= PEAK_HOURS_MIN_SESSIONS else None,
        mode_mastery=(
            analyze_mode_mastery(sessions) if count >= MODE_MASTERY_MIN_SESSIONS else None
        ),
        duration_pattern=analyze_duration_patterns(sessions),
        productivity_trend=analyze_productivity_trend(sessions, now),
    )
    logger.debug("Generated insights for %d sessions (%s)", count, insights.data_quality.value)
    return generate_insight_messages(insights)


def default_cache_store() -> InsightsCacheStore:
    """The process-wide cache store built from the loaded configuration."""
    global _default_store
    if _default_store is None:
        from timer_insights.config import load_config

        _default_store = load_config().to_cache_store()
    return _default_store


def get_ai_insights(
    sessions: list[TimerSessionData],
    cache: InsightsCacheStore | None = None,
    now: datetime | None = None,
) -> AIInsights:
    """Return cached insights when still valid, otherwise compute and cache them.

    Args:
        sessions: Session records in any order.
        cache: Cache store to use; defaults to the configured store.
        now: Reference time passed to the analyzers on a miss.
    """
    store = cache if cache is not None else default_cache_store()

    cached = store.load(len(sessions))
    if cached is not None:
        return cached

    insights = generate_ai_insights(sessions, now)
    store.save(insights)
    return insights


def clear_insights_cache(cache: InsightsCacheStore | None = None) -> None:
    """Drop the cached insights record."""
    store = cache if cache is not None else default_cache_store()
    store.clear()
