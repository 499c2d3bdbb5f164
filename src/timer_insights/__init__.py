"""timer-insights: productivity analytics over focus-timer session history."""

__version__ = "0.1.0"

from timer_insights.core import (
    clear_insights_cache,
    generate_ai_insights,
    get_ai_insights,
)
from timer_insights.models import AIInsights, TimerMode, TimerSessionData

__all__ = [
    "AIInsights",
    "TimerMode",
    "TimerSessionData",
    "__version__",
    "clear_insights_cache",
    "generate_ai_insights",
    "get_ai_insights",
]
