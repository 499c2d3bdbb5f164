"""Duration-pattern analyzer: which session lengths get finished."""

from __future__ import annotations

from timer_insights.analyzers.base import (
    completion_rate,
    confidence_for,
    mean,
    round_half_up,
    split_halves,
)
from timer_insights.models import (
    DurationBucket,
    DurationPatternInsight,
    DurationTrend,
    OptimalDuration,
    TimerSessionData,
)

# (label, min seconds inclusive, max seconds exclusive)
BUCKETS: tuple[tuple[str, int, int | None], ...] = (
    ("<5min", 0, 300),
    ("5-15min", 300, 900),
    ("15-30min", 900, 1800),
    ("30-60min", 1800, 3600),
    (">60min", 3600, None),
)

TREND_THRESHOLD = 0.2
MIN_TREND_SESSIONS = 4
MEDIUM_CONFIDENCE_AT = 10
HIGH_CONFIDENCE_AT = 20


def _bucket_index(duration: int) -> int:
    for index, (_label, low, high) in enumerate(BUCKETS):
        if duration >= low and (high is None or duration < high):
            return index
    return 0


def analyze_duration_patterns(sessions: list[TimerSessionData]) -> DurationPatternInsight:
    """Bucket sessions by length and find the length finished most often.

    The optimal bucket is the non-empty one with the highest completion rate,
    the shortest bucket winning ties. ``avg_duration`` is the average over
    every session, not just the optimal bucket.
    """
    grouped: list[list[TimerSessionData]] = [[] for _ in BUCKETS]
    for session in sessions:
        grouped[_bucket_index(session.duration)].append(session)

    buckets = [
        DurationBucket(
            range=label,
            min=low,
            max=high,
            count=len(members),
            completion_rate=completion_rate(members),
        )
        for (label, low, high), members in zip(BUCKETS, grouped, strict=True)
    ]

    optimal = buckets[0]
    non_empty = [b for b in buckets if b.count > 0]
    if non_empty:
        # max() keeps the first of equal rates, i.e. the shortest bucket
        optimal = max(non_empty, key=lambda b: b.completion_rate)

    return DurationPatternInsight(
        optimal_duration=OptimalDuration(
            min=optimal.min,
            max=optimal.max,
            avg_duration=round_half_up(mean([s.duration for s in sessions])),
            completion_rate=optimal.completion_rate,
        ),
        duration_buckets=buckets,
        trend=_duration_trend(sessions),
        confidence=confidence_for(len(sessions), MEDIUM_CONFIDENCE_AT, HIGH_CONFIDENCE_AT),
    )


def _duration_trend(sessions: list[TimerSessionData]) -> DurationTrend:
    """Compare the mean duration of the newer half against the older half."""
    if len(sessions) < MIN_TREND_SESSIONS:
        return DurationTrend.STABLE

    older, newer = split_halves(sessions)
    older_mean = mean([s.duration for s in older])
    newer_mean = mean([s.duration for s in newer])

    if older_mean == 0:
        return DurationTrend.INCREASING if newer_mean > 0 else DurationTrend.STABLE

    delta = (newer_mean - older_mean) / older_mean
    if delta >= TREND_THRESHOLD:
        return DurationTrend.INCREASING
    if delta <= -TREND_THRESHOLD:
        return DurationTrend.DECREASING
    return DurationTrend.STABLE
