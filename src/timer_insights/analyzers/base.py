"""Shared helpers for the metric analyzers."""

from __future__ import annotations

import math
from datetime import datetime

from timer_insights.models import Confidence, TimerSessionData


def resolve_now(now: datetime | None) -> datetime:
    """Return ``now`` as naive local time, defaulting to the current time."""
    if now is None:
        return datetime.now()
    if now.tzinfo is not None:
        return now.astimezone().replace(tzinfo=None)
    return now


def round_half_up(value: float) -> int:
    """Round to the nearest integer with halves rounded up (12.5 -> 13, -2.5 -> -2)."""
    return math.floor(value + 0.5)


def rate(part: int, whole: int) -> int:
    """Rounded percentage of ``part`` in ``whole``; 0 when ``whole`` is 0."""
    if whole <= 0:
        return 0
    return round_half_up(100 * part / whole)


def mean(values: list[int] | list[float]) -> float:
    if not values:
        return 0.0
    return sum(values) / len(values)


def percent_change(current: float, previous: float) -> int:
    """Rounded percentage delta.

    An empty previous value is reported as +100% when there is any current
    activity, and 0 otherwise.
    """
    if previous == 0:
        return 100 if current > 0 else 0
    return round_half_up((current - previous) / previous * 100)


def completion_rate(sessions: list[TimerSessionData]) -> int:
    return rate(sum(1 for s in sessions if s.completed), len(sessions))


def confidence_for(count: int, medium_at: int, high_at: int) -> Confidence:
    """Classify a sample size against two thresholds."""
    if count >= high_at:
        return Confidence.HIGH
    if count >= medium_at:
        return Confidence.MEDIUM
    return Confidence.LOW


def sort_by_start(sessions: list[TimerSessionData]) -> list[TimerSessionData]:
    return sorted(sessions, key=lambda s: s.start_time)


def split_halves(
    sessions: list[TimerSessionData],
) -> tuple[list[TimerSessionData], list[TimerSessionData]]:
    """Split sessions chronologically into (older, newer) halves."""
    ordered = sort_by_start(sessions)
    middle = len(ordered) // 2
    return ordered[:middle], ordered[middle:]
