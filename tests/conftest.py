"""Shared fixtures: session factories pinned to a fixed reference time."""

import itertools
from collections.abc import Callable
from datetime import datetime, timedelta

import pytest

from timer_insights.models import TimerMode, TimerSessionData

# A Wednesday afternoon; sessions default to 10:00 so "days_ago=0" is earlier today.
NOW = datetime(2026, 3, 18, 15, 0)

SessionFactory = Callable[..., TimerSessionData]


@pytest.fixture
def now() -> datetime:
    return NOW


@pytest.fixture
def make_session() -> SessionFactory:
    """Build sessions relative to NOW.

    ``days_ago`` and ``hour`` place the start time; ``start`` overrides both.
    """
    counter = itertools.count(1)

    def _make(
        days_ago: int = 0,
        hour: int = 10,
        duration: int = 1500,
        completed: bool = True,
        mode: TimerMode = TimerMode.COUNTDOWN,
        start: datetime | None = None,
    ) -> TimerSessionData:
        if start is None:
            start = (NOW - timedelta(days=days_ago)).replace(
                hour=hour, minute=0, second=0, microsecond=0
            )
        return TimerSessionData(
            id=f"session-{next(counter)}",
            mode=mode,
            duration=duration,
            start_time=start,
            end_time=start + timedelta(seconds=duration),
            completed=completed,
        )

    return _make


@pytest.fixture
def daily_sessions(make_session: SessionFactory) -> list[TimerSessionData]:
    """Fifty completed 25-minute sessions, one per day, ending today."""
    return [make_session(days_ago=i, duration=1500, completed=True) for i in range(50)]
