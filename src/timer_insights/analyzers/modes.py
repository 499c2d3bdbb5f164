"""Mode-mastery analyzer: which timer mode works best."""

from __future__ import annotations

from timer_insights.analyzers.base import completion_rate, confidence_for, mean, round_half_up
from timer_insights.models import (
    BestMode,
    ModeMasteryInsight,
    ModeStats,
    TimerMode,
    TimerSessionData,
)

MEDIUM_CONFIDENCE_AT = 20
HIGH_CONFIDENCE_AT = 30


def analyze_mode_mastery(sessions: list[TimerSessionData]) -> ModeMasteryInsight:
    """Compare completion and duration across the three timer modes.

    Every mode is reported, with zeroed stats when unused. Safe to call on
    any number of sessions; the orchestrator decides when it is meaningful.
    """
    comparison: list[ModeStats] = []
    for mode in TimerMode:
        members = [s for s in sessions if s.mode == mode]
        durations = [s.duration for s in members]
        comparison.append(
            ModeStats(
                mode=mode,
                sessions=len(members),
                duration=sum(durations),
                completion_rate=completion_rate(members),
                avg_duration=round_half_up(mean(durations)),
            )
        )

    used = [m for m in comparison if m.sessions > 0]
    if used:
        best = sorted(used, key=lambda m: (-m.completion_rate, -m.sessions, m.mode.value))[0]
    else:
        best = comparison[0]

    return ModeMasteryInsight(
        best_mode=BestMode(
            mode=best.mode,
            sessions_count=best.sessions,
            total_duration=best.duration,
            completion_rate=best.completion_rate,
            avg_duration=best.avg_duration,
        ),
        mode_comparison=comparison,
        confidence=confidence_for(len(sessions), MEDIUM_CONFIDENCE_AT, HIGH_CONFIDENCE_AT),
    )
