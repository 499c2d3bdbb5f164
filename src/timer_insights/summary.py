"""Trailing seven-day summary."""

from __future__ import annotations

from collections import defaultdict
from datetime import date, datetime, timedelta

from timer_insights.analyzers.base import completion_rate, resolve_now
from timer_insights.models import (
    LongestSession,
    ProductiveDay,
    SummaryPeriod,
    TimerSessionData,
    WeeklyHighlights,
    WeeklySummary,
)

WINDOW = timedelta(days=7)


def generate_weekly_summary(
    sessions: list[TimerSessionData],
    now: datetime | None = None,
) -> WeeklySummary:
    """Summarize the sessions started in ``[now - 7 days, now]``.

    The most productive day is the one with the most focused time; ties go
    to the day with more sessions, then the earlier day.
    """
    now = resolve_now(now)
    start = now - WINDOW
    period = SummaryPeriod(start=start, end=now)

    week = [s for s in sessions if start <= s.start_time <= now]
    if not week:
        return WeeklySummary(period=period)

    by_day: dict[date, list[TimerSessionData]] = defaultdict(list)
    for session in week:
        by_day[session.start_time.date()].append(session)

    best_day = min(
        by_day.items(),
        key=lambda item: (-sum(s.duration for s in item[1]), -len(item[1]), item[0]),
    )
    longest = max(week, key=lambda s: s.duration)

    return WeeklySummary(
        period=period,
        highlights=WeeklyHighlights(
            total_sessions=len(week),
            total_duration=sum(s.duration for s in week),
            active_days=len(by_day),
            completion_rate=completion_rate(week),
            most_productive_day=ProductiveDay(
                date=best_day[0],
                sessions=len(best_day[1]),
                duration=sum(s.duration for s in best_day[1]),
            ),
            longest_session=LongestSession(
                duration=longest.duration,
                date=longest.start_time,
                mode=longest.mode.value,
            ),
        ),
    )
