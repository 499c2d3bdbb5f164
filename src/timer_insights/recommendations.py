"""Rule-based recommendations.

Each rule is an independent function that inspects an assembled AIInsights
and returns one Recommendation or None. Rules run in the order of ``RULES``;
ids are assigned in emission order, then the list is stably sorted by
priority and capped.
"""

from __future__ import annotations

from collections.abc import Callable

from timer_insights.analyzers.base import round_half_up
from timer_insights.formatters.templates import format_hour
from timer_insights.models import (
    AIInsights,
    DataQuality,
    Priority,
    Recommendation,
    RecommendationCategory,
    TrendDirection,
)

MAX_RECOMMENDATIONS = 5

PRIORITY_ORDER: dict[Priority, int] = {
    Priority.HIGH: 1,
    Priority.MEDIUM: 2,
    Priority.LOW: 3,
}

Rule = Callable[[AIInsights], Recommendation | None]


def _recommend(
    category: RecommendationCategory,
    priority: Priority,
    icon: str,
    title: str,
    description: str,
    actionable: bool = True,
) -> Recommendation:
    # id is assigned by generate_recommendations
    return Recommendation(
        id="",
        category=category,
        priority=priority,
        icon=icon,
        title=title,
        description=description,
        actionable=actionable,
    )


def build_more_data(insights: AIInsights) -> Recommendation | None:
    if insights.data_quality != DataQuality.INSUFFICIENT:
        return None
    return _recommend(
        RecommendationCategory.GENERAL,
        Priority.HIGH,
        "info",
        "Build Your Data",
        "Complete at least 5 sessions to unlock personalized insights and recommendations.",
    )


def longer_sessions(insights: AIInsights) -> Recommendation | None:
    pattern = insights.duration_pattern
    if pattern is None or round_half_up(pattern.optimal_duration.avg_duration / 60) >= 15:
        return None
    return _recommend(
        RecommendationCategory.DURATION,
        Priority.HIGH,
        "schedule",
        "Try Longer Sessions",
        "Your average session is quite short. "
        "Try 25-minute focused sessions for better deep work.",
    )


def scheduled_breaks(insights: AIInsights) -> Recommendation | None:
    pattern = insights.duration_pattern
    if pattern is None or round_half_up(pattern.optimal_duration.avg_duration / 60) <= 60:
        return None
    return _recommend(
        RecommendationCategory.DURATION,
        Priority.MEDIUM,
        "coffee",
        "Take More Breaks",
        "Long sessions detected. Consider the Pomodoro technique: 25 min work + 5 min break.",
    )


def leverage_peak_hours(insights: AIInsights) -> Recommendation | None:
    peak = insights.peak_hours
    if peak is None or peak.peak_window.completion_rate < 70:
        return None
    window = peak.peak_window
    return _recommend(
        RecommendationCategory.TIMING,
        Priority.HIGH,
        "schedule",
        "Leverage Your Peak Hours",
        f"Schedule your most important tasks between {format_hour(window.start_hour)} - "
        f"{format_hour(window.end_hour)} when you're most productive.",
    )


def daily_habits(insights: AIInsights) -> Recommendation | None:
    if insights.consistency.score >= 50:
        return None
    return _recommend(
        RecommendationCategory.CONSISTENCY,
        Priority.HIGH,
        "calendar_today",
        "Build Daily Habits",
        "Set a goal to use the timer at least once per day. Consistency beats intensity!",
    )


def restart_streak(insights: AIInsights) -> Recommendation | None:
    metrics = insights.consistency.metrics
    if metrics.current_streak != 0 or metrics.longest_streak == 0:
        return None
    return _recommend(
        RecommendationCategory.CONSISTENCY,
        Priority.MEDIUM,
        "local_fire_department",
        "Restart Your Streak",
        f"You had a {metrics.longest_streak}-day streak before. You can do it again! "
        "Start today.",
    )


def use_best_mode(insights: AIInsights) -> Recommendation | None:
    mastery = insights.mode_mastery
    total = insights.data_range.sessions_analyzed
    if mastery is None or total == 0:
        return None
    best = mastery.best_mode
    if best.sessions_count * 100 / total >= 50:
        return None
    return _recommend(
        RecommendationCategory.MODE,
        Priority.MEDIUM,
        "star",
        f"Use {best.mode.value} Mode More",
        f"{best.mode.value} mode has your highest completion rate "
        f"({best.completion_rate}%). Try using it more often!",
    )


def back_on_track(insights: AIInsights) -> Recommendation | None:
    trend = insights.productivity_trend
    if trend is None or trend.trend != TrendDirection.DOWN:
        return None
    return _recommend(
        RecommendationCategory.GENERAL,
        Priority.HIGH,
        "trending_up",
        "Get Back on Track",
        "Productivity dipped this week. Set a small goal for tomorrow - even 15 minutes counts!",
    )


def improve_completion(insights: AIInsights) -> Recommendation | None:
    if insights.weekly_summary.highlights.completion_rate >= 60:
        return None
    return _recommend(
        RecommendationCategory.GENERAL,
        Priority.MEDIUM,
        "check_circle",
        "Improve Completion Rate",
        "Many sessions are being stopped early. "
        "Try starting with shorter, achievable session lengths.",
    )


def congratulate(insights: AIInsights) -> Recommendation | None:
    if insights.consistency.score < 70 or insights.productivity_score.overall < 75:
        return None
    return _recommend(
        RecommendationCategory.GENERAL,
        Priority.LOW,
        "emoji_events",
        "You're Crushing It!",
        "Your consistency and productivity scores are excellent. Keep up the amazing work!",
        actionable=False,
    )


RULES: tuple[Rule, ...] = (
    longer_sessions,
    scheduled_breaks,
    leverage_peak_hours,
    daily_habits,
    restart_streak,
    use_best_mode,
    back_on_track,
    improve_completion,
    congratulate,
)


def generate_recommendations(
    insights: AIInsights,
    rules: tuple[Rule, ...] = RULES,
) -> list[Recommendation]:
    """Evaluate the rules against ``insights``.

    Insufficient data short-circuits to a single "Build Your Data"
    recommendation.

    Returns:
        At most five recommendations, high priority first, with unique ids.
    """
    starter = build_more_data(insights)
    if starter is not None:
        return [starter.model_copy(update={"id": "rec-1"})]

    recommendations: list[Recommendation] = []
    for rule in rules:
        recommendation = rule(insights)
        if recommendation is not None:
            recommendations.append(
                recommendation.model_copy(update={"id": f"rec-{len(recommendations) + 1}"})
            )

    recommendations.sort(key=lambda r: PRIORITY_ORDER[r.priority])
    return recommendations[:MAX_RECOMMENDATIONS]
