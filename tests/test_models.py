"""Tests for the session input model."""

from datetime import datetime, timedelta, timezone

import pytest
from pydantic import ValidationError

from timer_insights.models import TimerMode, TimerSessionData


def _session(**overrides) -> TimerSessionData:
    start = datetime(2026, 3, 18, 10, 0)
    fields = {
        "id": "s1",
        "mode": TimerMode.COUNTDOWN,
        "duration": 1500,
        "start_time": start,
        "end_time": start + timedelta(seconds=1500),
        "completed": True,
    }
    fields.update(overrides)
    return TimerSessionData(**fields)


class TestTimerSessionData:
    def test_valid_session(self) -> None:
        """A well-formed session validates."""
        session = _session()
        assert session.mode == TimerMode.COUNTDOWN
        assert session.intervals is None

    def test_mode_from_string(self) -> None:
        """Modes parse from their string values."""
        assert _session(mode="Intervals").mode == TimerMode.INTERVALS

    def test_unknown_mode_rejected(self) -> None:
        """Unknown modes are rejected."""
        with pytest.raises(ValidationError):
            _session(mode="Pomodoro")

    def test_negative_duration_rejected(self) -> None:
        """Negative durations are rejected."""
        with pytest.raises(ValidationError):
            _session(duration=-5)

    def test_end_before_start_rejected(self) -> None:
        """An end before the start is rejected."""
        start = datetime(2026, 3, 18, 10, 0)
        with pytest.raises(ValidationError):
            _session(start_time=start, end_time=start - timedelta(minutes=1))

    def test_aware_timestamps_become_local_naive(self) -> None:
        """Aware timestamps are converted to naive local time."""
        start = datetime(2026, 3, 18, 10, 0, tzinfo=timezone.utc)
        session = _session(start_time=start, end_time=start + timedelta(minutes=25))
        assert session.start_time.tzinfo is None
        assert session.start_time == start.astimezone().replace(tzinfo=None)

    def test_frozen(self) -> None:
        """Sessions are immutable."""
        session = _session()
        with pytest.raises(ValidationError):
            session.duration = 10
