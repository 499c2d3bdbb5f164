"""Data models for timer sessions and the insights derived from them."""

from timer_insights.models.insight import (
    AIInsights,
    BestMode,
    Confidence,
    ConsistencyInsight,
    ConsistencyMetrics,
    ConsistencyTrend,
    DataQuality,
    DataRange,
    DurationBucket,
    DurationPatternInsight,
    DurationTrend,
    Grade,
    HourlyBucket,
    InsightsCache,
    LongestSession,
    ModeMasteryInsight,
    ModeStats,
    OptimalDuration,
    PeakHoursInsight,
    PeakWindow,
    PeriodChange,
    PeriodStats,
    Priority,
    ProductiveDay,
    ProductivityScore,
    ProductivityTrendInsight,
    Recommendation,
    RecommendationCategory,
    ScoreBreakdown,
    SummaryPeriod,
    TrendDirection,
    WeeklyHighlights,
    WeeklySummary,
)
from timer_insights.models.session import IntervalSettings, TimerMode, TimerSessionData

__all__ = [
    "AIInsights",
    "BestMode",
    "Confidence",
    "ConsistencyInsight",
    "ConsistencyMetrics",
    "ConsistencyTrend",
    "DataQuality",
    "DataRange",
    "DurationBucket",
    "DurationPatternInsight",
    "DurationTrend",
    "Grade",
    "HourlyBucket",
    "InsightsCache",
    "IntervalSettings",
    "LongestSession",
    "ModeMasteryInsight",
    "ModeStats",
    "OptimalDuration",
    "PeakHoursInsight",
    "PeakWindow",
    "PeriodChange",
    "PeriodStats",
    "Priority",
    "ProductiveDay",
    "ProductivityScore",
    "ProductivityTrendInsight",
    "Recommendation",
    "RecommendationCategory",
    "ScoreBreakdown",
    "SummaryPeriod",
    "TimerMode",
    "TimerSessionData",
    "TrendDirection",
    "WeeklyHighlights",
    "WeeklySummary",
]
