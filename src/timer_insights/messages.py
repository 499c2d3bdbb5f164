"""Human-readable messages for each computed insight.

Pure text formatting over an assembled AIInsights: every function returns
a copy of its input with ``message`` filled in and computes nothing new.
"""

from __future__ import annotations

from timer_insights.analyzers.base import round_half_up
from timer_insights.formatters.templates import (
    format_duration,
    format_focus_time,
    format_hour,
    plural,
)
from timer_insights.models import (
    AIInsights,
    ConsistencyInsight,
    ConsistencyTrend,
    DurationPatternInsight,
    DurationTrend,
    ModeMasteryInsight,
    PeakHoursInsight,
    ProductivityScore,
    ProductivityTrendInsight,
    TimerMode,
    TrendDirection,
    WeeklySummary,
)
from timer_insights.recommendations import generate_recommendations

MODE_EMOJI: dict[TimerMode, str] = {
    TimerMode.STOPWATCH: "⏱️",
    TimerMode.COUNTDOWN: "⏲️",
    TimerMode.INTERVALS: "🔄",
}


def generate_insight_messages(insights: AIInsights) -> AIInsights:
    """Attach messages to every present insight and build recommendations."""
    return insights.model_copy(
        update={
            "productivity_score": score_message(insights.productivity_score),
            "peak_hours": peak_hours_message(insights.peak_hours) if insights.peak_hours else None,
            "duration_pattern": (
                duration_message(insights.duration_pattern) if insights.duration_pattern else None
            ),
            "mode_mastery": (
                mode_mastery_message(insights.mode_mastery) if insights.mode_mastery else None
            ),
            "consistency": consistency_message(insights.consistency),
            "productivity_trend": (
                trend_message(insights.productivity_trend) if insights.productivity_trend else None
            ),
            "weekly_summary": weekly_summary_message(insights.weekly_summary),
            "recommendations": generate_recommendations(insights),
        }
    )


def score_message(score: ProductivityScore) -> ProductivityScore:
    grade = score.grade.value
    if score.overall >= 90:
        message = (
            f"Outstanding! You're in the top tier with a {grade} productivity grade. "
            "Keep up the excellent work! 🌟"
        )
    elif score.overall >= 80:
        message = (
            f"Great job! Your {grade} grade shows strong productivity habits. "
            "You're doing excellent! 🎯"
        )
    elif score.overall >= 70:
        message = (
            f"Good work! Your {grade} grade indicates solid productivity. Room for improvement! 💪"
        )
    elif score.overall >= 60:
        message = f"You're making progress with a {grade} grade. Keep building those habits! 📈"
    elif score.overall >= 50:
        message = f"Your {grade} grade shows potential. Focus on consistency to improve! 🎓"
    else:
        message = (
            f"Starting your journey with a {grade} grade. Every expert was once a beginner! 🌱"
        )
    return score.model_copy(update={"message": message})


def peak_hours_message(insight: PeakHoursInsight) -> PeakHoursInsight:
    window = insight.peak_window
    total = sum(h.sessions for h in insight.hourly_distribution)
    share = round_half_up(100 * window.sessions_count / total) if total else 0

    message = (
        f"Your peak productivity is between {format_hour(window.start_hour)} - "
        f"{format_hour(window.end_hour)}. "
        f"You complete {window.completion_rate}% of your sessions during this time "
        f"({window.sessions_count} sessions, {share}% of total). "
    )
    if window.completion_rate >= 80:
        message += "This is your power window! 🔥"
    elif window.completion_rate >= 60:
        message += "Focus your important work here! 🎯"
    else:
        message += "Consider scheduling key tasks during these hours. ⏰"
    return insight.model_copy(update={"message": message})


def duration_message(insight: DurationPatternInsight) -> DurationPatternInsight:
    optimal = insight.optimal_duration
    if optimal.max is None:
        range_text = f"{format_duration(optimal.min)}+"
    else:
        range_text = f"{format_duration(optimal.min)} - {format_duration(optimal.max)}"

    message = (
        f"You work best in {range_text} sessions with a {optimal.completion_rate}% "
        "completion rate. "
        f"Your average session is {round_half_up(optimal.avg_duration / 60)} minutes. "
    )
    if insight.trend == DurationTrend.INCREASING:
        message += "You're trending toward longer sessions. 📈"
    elif insight.trend == DurationTrend.DECREASING:
        message += "You're trending toward shorter, focused sessions. ⚡"
    else:
        message += "You've found your rhythm! 🎵"
    return insight.model_copy(update={"message": message})


def mode_mastery_message(insight: ModeMasteryInsight) -> ModeMasteryInsight:
    best = insight.best_mode
    mode = best.mode.value
    message = (
        f"{MODE_EMOJI[best.mode]} {mode} mode works best for you! "
        f"With {best.sessions_count} sessions and a {best.completion_rate}% completion rate, "
        "this mode helps you stay focused. "
    )
    if any(m.sessions > 0 for m in insight.mode_comparison if m.mode != best.mode):
        message += f"Consider using {mode} mode more often for better results! 🎯"
    else:
        message += "Keep leveraging this mode for maximum productivity! 💪"
    return insight.model_copy(update={"message": message})


def consistency_message(insight: ConsistencyInsight) -> ConsistencyInsight:
    metrics = insight.metrics
    if insight.score >= 80:
        message = "Exceptional consistency! 🌟 "
    elif insight.score >= 60:
        message = "Strong consistency! 💪 "
    elif insight.score >= 40:
        message = "Building momentum! 📈 "
    else:
        message = "Starting your journey! 🌱 "

    message += f"You've been active {metrics.active_days} out of {metrics.total_days} days. "
    if metrics.current_streak > 0:
        message += f"Current streak: {plural(metrics.current_streak, 'day')} 🔥 "
    if metrics.longest_streak > metrics.current_streak:
        message += f"Your longest streak was {metrics.longest_streak} days. "

    if insight.trend == ConsistencyTrend.IMPROVING:
        message += "You're on an upward trajectory! Keep it up! 🚀"
    elif insight.trend == ConsistencyTrend.DECLINING:
        message += "Time to get back on track! You've got this! 💪"
    else:
        message += "Maintain this steady pace! 🎯"
    return insight.model_copy(update={"message": message})


def trend_message(insight: ProductivityTrendInsight) -> ProductivityTrendInsight:
    average_change = abs(round_half_up((insight.change.sessions + insight.change.duration) / 2))
    if insight.trend == TrendDirection.UP:
        message = (
            f"📈 You're on fire! Productivity up {average_change}% compared to last week. "
            "Keep this momentum going! 🚀"
        )
    elif insight.trend == TrendDirection.DOWN:
        message = (
            f"📉 Productivity dipped {average_change}% this week. "
            "Don't worry - every journey has ups and downs. Let's bounce back! 💪"
        )
    else:
        message = (
            "📊 Steady as she goes! Productivity remained stable this week. "
            "Consistency is key! 🎯"
        )
    return insight.model_copy(update={"message": message})


def weekly_summary_message(summary: WeeklySummary) -> WeeklySummary:
    highlights = summary.highlights
    if highlights.total_sessions == 0:
        message = "No sessions recorded this week. Start your productivity journey today! 🌟"
        return summary.model_copy(update={"message": message})

    message = (
        f"This week: {plural(highlights.total_sessions, 'session')}, "
        f"{format_focus_time(highlights.total_duration)} focused time across "
        f"{plural(highlights.active_days, 'day')}. "
        f"Completion rate: {highlights.completion_rate}%. "
    )
    if highlights.completion_rate >= 80:
        message += "Outstanding! 🌟"
    elif highlights.completion_rate >= 60:
        message += "Great work! 🎯"
    else:
        message += "Keep pushing! 💪"
    return summary.model_copy(update={"message": message})
