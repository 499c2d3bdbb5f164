"""Markdown rendering of an AIInsights result."""

from __future__ import annotations

from timer_insights.formatters.templates import format_duration, format_focus_time
from timer_insights.models import AIInsights, Priority

PRIORITY_MARKERS: dict[Priority, str] = {
    Priority.HIGH: "🔴",
    Priority.MEDIUM: "🟡",
    Priority.LOW: "🟢",
}


def format_insights_markdown(insights: AIInsights) -> str:
    """Render insights as a markdown report.

    Sections appear in dashboard order: score, key insights, weekly
    summary, recommendations. Insights that were not computed are left out.
    """
    score = insights.productivity_score
    breakdown = score.breakdown
    lines = [
        "# AI Insights",
        "",
        f"_{insights.data_range.sessions_analyzed} sessions analyzed · "
        f"data quality: {insights.data_quality.value} · "
        f"generated {insights.generated_at.strftime('%Y-%m-%d %H:%M')}_",
        "",
        f"## Productivity Score: {score.overall} ({score.grade.value})",
        "",
        score.message,
        "",
        "| Consistency | Duration | Completion | Frequency | Improvement |",
        "|---|---|---|---|---|",
        f"| {breakdown.consistency} | {breakdown.duration} | {breakdown.completion} "
        f"| {breakdown.frequency} | {breakdown.improvement} |",
        "",
        "## Key Insights",
        "",
    ]

    sections: list[tuple[str, str]] = [("Consistency", insights.consistency.message)]
    if insights.peak_hours:
        sections.append(("Peak Hours", insights.peak_hours.message))
    if insights.duration_pattern:
        sections.append(("Session Length", insights.duration_pattern.message))
    if insights.mode_mastery:
        sections.append(("Mode Mastery", insights.mode_mastery.message))
    if insights.productivity_trend:
        sections.append(("Weekly Trend", insights.productivity_trend.message))

    for title, message in sections:
        lines.append(f"- **{title}**: {message}")
    lines.append("")

    summary = insights.weekly_summary
    highlights = summary.highlights
    lines.extend([
        "## This Week",
        "",
        summary.message,
        "",
    ])
    if highlights.total_sessions:
        best_day = highlights.most_productive_day
        longest = highlights.longest_session
        lines.extend([
            f"- **Focused time**: {format_focus_time(highlights.total_duration)}",
            f"- **Most productive day**: {best_day.date.isoformat() if best_day.date else '-'} "
            f"({best_day.sessions} sessions, {format_duration(best_day.duration)})",
            f"- **Longest session**: {format_duration(longest.duration)} ({longest.mode})",
            "",
        ])

    lines.extend(["## Recommendations", ""])
    if not insights.recommendations:
        lines.append("No recommendations right now.")
    for rec in insights.recommendations:
        lines.append(f"- {PRIORITY_MARKERS[rec.priority]} **{rec.title}**: {rec.description}")
    lines.append("")

    return "\n".join(lines)
