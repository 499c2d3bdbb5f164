"""Configuration loaded from .timer-insights.toml, env vars, and CLI flags.

Loading order: defaults → TOML file → env vars → CLI flags.
"""

from __future__ import annotations

import logging
import os
import tomllib
from pathlib import Path

from pydantic import BaseModel, Field

from timer_insights.cache import (
    DEFAULT_TTL_SECONDS,
    FileBackend,
    InsightsCacheStore,
    MemoryBackend,
)

logger = logging.getLogger(__name__)

CONFIG_FILENAME = ".timer-insights.toml"
CONFIG_SEARCH_PATHS = [Path(".")]
GLOBAL_CONFIG_PATH = Path.home() / ".config" / "timer-insights" / "config.toml"

DEFAULT_HISTORY_FILES = [
    "timer-stopwatch-history.json",
    "timer-countdown-history.json",
    "timer-intervals-history.json",
]


class CacheConfig(BaseModel):
    """[cache] section."""

    directory: str = str(Path.home() / ".cache" / "timer-insights")
    ttl_seconds: int = DEFAULT_TTL_SECONDS
    enabled: bool = True


class HistoryConfig(BaseModel):
    """[history] section."""

    directory: str = "."
    files: list[str] = Field(default_factory=lambda: list(DEFAULT_HISTORY_FILES))


class InsightsConfig(BaseModel):
    """Top-level configuration."""

    cache: CacheConfig = Field(default_factory=CacheConfig)
    history: HistoryConfig = Field(default_factory=HistoryConfig)

    def to_cache_store(self) -> InsightsCacheStore:
        """Build the cache store this config describes.

        A disabled cache is backed by memory, so nothing outlives the process.
        """
        if not self.cache.enabled:
            return InsightsCacheStore(MemoryBackend(), ttl_seconds=self.cache.ttl_seconds)
        backend = FileBackend(Path(self.cache.directory).expanduser())
        return InsightsCacheStore(backend, ttl_seconds=self.cache.ttl_seconds)


def load_config(path: str | Path | None = None) -> InsightsConfig:
    """Load configuration from a TOML file, then overlay env vars.

    Search order:
    1. Explicit path (if provided)
    2. .timer-insights.toml in CWD
    3. ~/.config/timer-insights/config.toml
    """
    data: dict[str, object] = {}

    if path is not None:
        toml_path = Path(path)
        if toml_path.exists():
            data = _load_toml(toml_path)
        else:
            logger.warning("Config file not found: %s", toml_path)
    else:
        for search_dir in CONFIG_SEARCH_PATHS:
            candidate = search_dir / CONFIG_FILENAME
            if candidate.exists():
                data = _load_toml(candidate)
                logger.info("Loaded config from %s", candidate)
                break
        if not data and GLOBAL_CONFIG_PATH.exists():
            data = _load_toml(GLOBAL_CONFIG_PATH)
            logger.info("Loaded config from %s", GLOBAL_CONFIG_PATH)

    config = InsightsConfig.model_validate(data) if data else InsightsConfig()
    return _apply_env_vars(config)


def merge_cli_overrides(config: InsightsConfig, **cli_kwargs: object) -> InsightsConfig:
    """Overlay CLI flags that were explicitly provided (not None)."""
    data = config.model_dump()

    mapping: dict[str, tuple[str, str]] = {
        "cache_dir": ("cache", "directory"),
        "cache_ttl": ("cache", "ttl_seconds"),
        "cache_enabled": ("cache", "enabled"),
        "history_dir": ("history", "directory"),
        "history_files": ("history", "files"),
    }

    for key, value in cli_kwargs.items():
        if value is None or key not in mapping:
            continue
        section, field = mapping[key]
        data[section][field] = value

    return InsightsConfig.model_validate(data)


def _load_toml(path: Path) -> dict[str, object]:
    try:
        with open(path, "rb") as f:
            return tomllib.load(f)
    except (tomllib.TOMLDecodeError, OSError) as exc:
        logger.warning("Failed to parse %s: %s", path, exc)
        return {}


def _apply_env_vars(config: InsightsConfig) -> InsightsConfig:
    data = config.model_dump()

    env_mapping: dict[str, tuple[str, str]] = {
        "TIMER_INSIGHTS_CACHE_DIR": ("cache", "directory"),
        "TIMER_INSIGHTS_HISTORY_DIR": ("history", "directory"),
    }
    for env_var, (section, field) in env_mapping.items():
        value = os.environ.get(env_var)
        if value is not None:
            data[section][field] = value

    ttl_raw = os.environ.get("TIMER_INSIGHTS_CACHE_TTL")
    if ttl_raw is not None:
        try:
            data["cache"]["ttl_seconds"] = int(ttl_raw)
        except ValueError:
            logger.warning("Ignoring non-integer TIMER_INSIGHTS_CACHE_TTL=%r", ttl_raw)
    enabled_raw = os.environ.get("TIMER_INSIGHTS_CACHE_ENABLED")
    if enabled_raw is not None:
        data["cache"]["enabled"] = enabled_raw.lower() in ("true", "1", "yes")

    return InsightsConfig.model_validate(data)
