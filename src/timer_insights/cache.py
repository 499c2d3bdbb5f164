"""Time-limited cache for computed insights.

The cache record is keyed by a fixed key and considered valid while it is
younger than the TTL and was computed from the same number of sessions.
Session count is a cheap fingerprint: edits that keep the count unchanged
stay stale until the TTL runs out.

Storage is a small key-value port so the pipeline can run against a JSON
file on disk or an in-memory dict in tests. Storage failures are logged and
treated as a cache miss; they never reach the caller.
"""

from __future__ import annotations

import json
import logging
import os
import tempfile
import time
from collections.abc import Callable
from pathlib import Path
from typing import Protocol

from pydantic import ValidationError

from timer_insights.models import AIInsights, InsightsCache

logger = logging.getLogger(__name__)

CACHE_KEY = "timer-ai-insights-cache"
DEFAULT_TTL_SECONDS = 300


class CacheBackend(Protocol):
    """Minimal durable key-value storage."""

    def get(self, key: str) -> str | None: ...

    def set(self, key: str, value: str) -> None: ...

    def delete(self, key: str) -> None: ...


class MemoryBackend:
    """Dict-backed storage, for tests and one-shot runs."""

    def __init__(self) -> None:
        self._data: dict[str, str] = {}

    def get(self, key: str) -> str | None:
        return self._data.get(key)

    def set(self, key: str, value: str) -> None:
        self._data[key] = value

    def delete(self, key: str) -> None:
        self._data.pop(key, None)


class FileBackend:
    """One JSON file per key under ``directory``."""

    def __init__(self, directory: Path) -> None:
        self._directory = directory

    def _path(self, key: str) -> Path:
        return self._directory / f"{key}.json"

    def get(self, key: str) -> str | None:
        path = self._path(key)
        if not path.exists():
            return None
        return path.read_text(encoding="utf-8")

    def set(self, key: str, value: str) -> None:
        path = self._path(key)
        path.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp_name = tempfile.mkstemp(dir=path.parent, suffix=".tmp")
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                f.write(value)
            os.replace(tmp_name, path)
        except BaseException:
            Path(tmp_name).unlink(missing_ok=True)
            raise

    def delete(self, key: str) -> None:
        self._path(key).unlink(missing_ok=True)


class InsightsCacheStore:
    """Reads and writes the insights cache record through a backend."""

    def __init__(
        self,
        backend: CacheBackend,
        ttl_seconds: int = DEFAULT_TTL_SECONDS,
        key: str = CACHE_KEY,
        clock: Callable[[], float] = time.time,
    ) -> None:
        self._backend = backend
        self._ttl_ms = ttl_seconds * 1000
        self._key = key
        self._clock = clock

    def _now_ms(self) -> int:
        return int(self._clock() * 1000)

    def load(self, session_count: int) -> AIInsights | None:
        """Return cached insights if fresh and computed from ``session_count`` sessions."""
        try:
            raw = self._backend.get(self._key)
        except (OSError, UnicodeDecodeError) as e:
            logger.warning("Failed to read insights cache: %s", e)
            return None
        if raw is None:
            logger.debug("Insights cache miss: no entry")
            return None

        try:
            entry = InsightsCache.model_validate(json.loads(raw))
        except (json.JSONDecodeError, ValidationError) as e:
            logger.warning("Corrupt insights cache entry, ignoring: %s", e)
            return None

        if self._now_ms() >= entry.expires_at:
            logger.debug("Insights cache miss: expired")
            return None
        if entry.insights.data_range.sessions_analyzed != session_count:
            logger.debug(
                "Insights cache miss: %d sessions cached, %d supplied",
                entry.insights.data_range.sessions_analyzed,
                session_count,
            )
            return None

        logger.debug("Insights cache hit")
        return entry.insights

    def save(self, insights: AIInsights) -> None:
        """Store ``insights`` with a fresh expiry. Failures are logged only."""
        cached_at = self._now_ms()
        entry = InsightsCache(
            insights=insights,
            cached_at=cached_at,
            expires_at=cached_at + self._ttl_ms,
        )
        try:
            self._backend.set(self._key, entry.model_dump_json(by_alias=True))
        except OSError as e:
            logger.warning("Failed to write insights cache: %s", e)
            return
        logger.debug("Cached insights for %d sessions", insights.data_range.sessions_analyzed)

    def clear(self) -> None:
        try:
            self._backend.delete(self._key)
        except OSError as e:
            logger.warning("Failed to clear insights cache: %s", e)
