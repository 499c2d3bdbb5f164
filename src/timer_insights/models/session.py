"""Timer session input model.

A session is one completed-or-abandoned run of a timer. Records are
supplied by the caller and treated as already-validated input; the
validators here only normalise timestamps and reject impossible values.
"""

from __future__ import annotations

from datetime import datetime
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator


class TimerMode(str, Enum):
    """The closed set of timer modes."""

    STOPWATCH = "Stopwatch"
    COUNTDOWN = "Countdown"
    INTERVALS = "Intervals"


class IntervalSettings(BaseModel):
    """Work/break configuration of an Intervals session."""

    model_config = ConfigDict(frozen=True)

    work_duration: int = 1500
    break_duration: int = 300
    rounds: int = 4


def to_local_naive(value: datetime) -> datetime:
    """Convert an aware datetime to naive local time; naive values pass through."""
    if value.tzinfo is not None:
        return value.astimezone().replace(tzinfo=None)
    return value


class TimerSessionData(BaseModel):
    """One timer run."""

    model_config = ConfigDict(frozen=True)

    id: str
    mode: TimerMode
    duration: int = Field(ge=0)  # seconds
    start_time: datetime
    end_time: datetime
    completed: bool
    intervals: IntervalSettings | None = None

    @field_validator("start_time", "end_time")
    @classmethod
    def _normalise_timestamp(cls, value: datetime) -> datetime:
        return to_local_naive(value)

    @model_validator(mode="after")
    def _check_order(self) -> TimerSessionData:
        if self.end_time < self.start_time:
            raise ValueError("end_time must not precede start_time")
        return self
