"""Result models produced by the insights pipeline."""

from __future__ import annotations

from datetime import date as Date
from datetime import datetime
from enum import Enum
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

from timer_insights.models.session import TimerMode


class Confidence(str, Enum):
    """Reliability of a metric, driven by sample size."""

    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


class DataQuality(str, Enum):
    """Sample-size tier of the whole session history."""

    INSUFFICIENT = "insufficient"
    LIMITED = "limited"
    GOOD = "good"
    EXCELLENT = "excellent"


class DurationTrend(str, Enum):
    INCREASING = "increasing"
    DECREASING = "decreasing"
    STABLE = "stable"


class ConsistencyTrend(str, Enum):
    IMPROVING = "improving"
    DECLINING = "declining"
    STABLE = "stable"


class TrendDirection(str, Enum):
    UP = "up"
    DOWN = "down"
    STABLE = "stable"


class Grade(str, Enum):
    A_PLUS = "A+"
    A = "A"
    B = "B"
    C = "C"
    D = "D"
    F = "F"


class Priority(str, Enum):
    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"


class RecommendationCategory(str, Enum):
    DURATION = "duration"
    TIMING = "timing"
    CONSISTENCY = "consistency"
    MODE = "mode"
    BREAKS = "breaks"
    GENERAL = "general"


# Peak hours


class HourlyBucket(BaseModel):
    hour: int = Field(ge=0, le=23)
    sessions: int = 0
    duration: int = 0
    completion_rate: int = 0


class PeakWindow(BaseModel):
    """Best contiguous three-hour window. ``end_hour`` is exclusive."""

    start_hour: int = Field(ge=0, le=23)
    end_hour: int = Field(ge=0, le=23)
    sessions_count: int = 0
    total_duration: int = 0
    completion_rate: int = 0


class PeakHoursInsight(BaseModel):
    type: Literal["peak-hours"] = "peak-hours"
    peak_window: PeakWindow
    hourly_distribution: list[HourlyBucket]
    message: str = ""
    confidence: Confidence = Confidence.LOW


# Duration pattern


class DurationBucket(BaseModel):
    range: str
    min: int
    max: int | None = None  # None for the open-ended bucket
    count: int = 0
    completion_rate: int = 0


class OptimalDuration(BaseModel):
    min: int
    max: int | None = None
    avg_duration: int = 0
    completion_rate: int = 0


class DurationPatternInsight(BaseModel):
    type: Literal["duration-pattern"] = "duration-pattern"
    optimal_duration: OptimalDuration
    duration_buckets: list[DurationBucket]
    trend: DurationTrend = DurationTrend.STABLE
    message: str = ""
    confidence: Confidence = Confidence.LOW


# Mode mastery


class ModeStats(BaseModel):
    mode: TimerMode
    sessions: int = 0
    duration: int = 0
    completion_rate: int = 0
    avg_duration: int = 0


class BestMode(BaseModel):
    mode: TimerMode
    sessions_count: int = 0
    total_duration: int = 0
    completion_rate: int = 0
    avg_duration: int = 0


class ModeMasteryInsight(BaseModel):
    type: Literal["mode-mastery"] = "mode-mastery"
    best_mode: BestMode
    mode_comparison: list[ModeStats]
    message: str = ""
    confidence: Confidence = Confidence.LOW


# Consistency


class ConsistencyMetrics(BaseModel):
    active_days: int = 0
    total_days: int = 0
    current_streak: int = 0
    longest_streak: int = 0
    avg_sessions_per_day: float = 0.0
    regularity_score: int = Field(default=0, ge=0, le=100)


class ConsistencyInsight(BaseModel):
    type: Literal["consistency"] = "consistency"
    score: int = Field(default=0, ge=0, le=100)
    metrics: ConsistencyMetrics = Field(default_factory=ConsistencyMetrics)
    message: str = ""
    trend: ConsistencyTrend = ConsistencyTrend.STABLE


# Productivity trend


class PeriodStats(BaseModel):
    sessions: int = 0
    duration: int = 0
    avg_duration: int = 0
    completion_rate: int = 0


class PeriodChange(BaseModel):
    """Session and duration deltas in percent; completion rate in points."""

    sessions: int = 0
    duration: int = 0
    completion_rate: int = 0


class ProductivityTrendInsight(BaseModel):
    type: Literal["productivity-trend"] = "productivity-trend"
    current_period: PeriodStats
    previous_period: PeriodStats
    change: PeriodChange
    trend: TrendDirection = TrendDirection.STABLE
    message: str = ""


# Score


class ScoreBreakdown(BaseModel):
    consistency: int = Field(default=0, ge=0, le=100)
    duration: int = Field(default=0, ge=0, le=100)
    completion: int = Field(default=0, ge=0, le=100)
    frequency: int = Field(default=0, ge=0, le=100)
    improvement: int = Field(default=0, ge=0, le=100)


class ProductivityScore(BaseModel):
    overall: int = Field(default=0, ge=0, le=100)
    breakdown: ScoreBreakdown = Field(default_factory=ScoreBreakdown)
    grade: Grade = Grade.F
    message: str = ""


# Weekly summary


class SummaryPeriod(BaseModel):
    start: datetime
    end: datetime


class ProductiveDay(BaseModel):
    date: Date | None = None
    sessions: int = 0
    duration: int = 0


class LongestSession(BaseModel):
    duration: int = 0
    date: datetime | None = None
    mode: str = ""


class WeeklyHighlights(BaseModel):
    total_sessions: int = 0
    total_duration: int = 0
    active_days: int = 0
    completion_rate: int = 0
    most_productive_day: ProductiveDay = Field(default_factory=ProductiveDay)
    longest_session: LongestSession = Field(default_factory=LongestSession)


class WeeklySummary(BaseModel):
    period: SummaryPeriod
    highlights: WeeklyHighlights = Field(default_factory=WeeklyHighlights)
    message: str = ""


# Recommendations


class Recommendation(BaseModel):
    id: str
    category: RecommendationCategory
    priority: Priority
    icon: str
    title: str
    description: str
    actionable: bool = True


# Aggregate


class DataRange(BaseModel):
    start: datetime
    end: datetime
    sessions_analyzed: int = 0


class AIInsights(BaseModel):
    """Everything the pipeline knows about a session history.

    ``peak_hours`` and ``mode_mastery`` are ``None`` below their sample-size
    gates; callers must handle their absence.
    """

    generated_at: datetime
    data_range: DataRange
    data_quality: DataQuality
    productivity_score: ProductivityScore
    consistency: ConsistencyInsight
    weekly_summary: WeeklySummary
    recommendations: list[Recommendation] = Field(default_factory=list)
    peak_hours: PeakHoursInsight | None = None
    mode_mastery: ModeMasteryInsight | None = None
    duration_pattern: DurationPatternInsight | None = None
    productivity_trend: ProductivityTrendInsight | None = None


class InsightsCache(BaseModel):
    """Stored cache record. Timestamps are epoch milliseconds."""

    model_config = ConfigDict(populate_by_name=True)

    insights: AIInsights
    cached_at: int = Field(alias="cachedAt")
    expires_at: int = Field(alias="expiresAt")
