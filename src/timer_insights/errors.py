"""Exceptions raised outside the analytics core."""


class InsightsError(Exception):
    """Base class for timer-insights errors."""


class HistoryLoadError(InsightsError):
    """A timer history file could not be read or is not a list of records."""
