"""Load timer history exports into session records.

The timer keeps one history list per mode (``timer-stopwatch-history`` and
friends). Each record stores its duration in seconds and its timestamps as
epoch milliseconds::

    {"id": "...", "mode": "Countdown", "duration": 1500,
     "timestamp": 1760000000000, "targetDuration": 1500}
"""

from __future__ import annotations

import json
import logging
from datetime import datetime, timedelta
from pathlib import Path
from typing import Any

from pydantic import ValidationError

from timer_insights.analyzers.base import round_half_up
from timer_insights.errors import HistoryLoadError
from timer_insights.models import IntervalSettings, TimerMode, TimerSessionData

logger = logging.getLogger(__name__)

_MODES = {m.value: m for m in TimerMode}


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def is_valid_record(record: Any) -> bool:
    """Check the fields every history record must carry."""
    if not isinstance(record, dict):
        return False
    record_id = record.get("id")
    return (
        (isinstance(record_id, str) or _is_number(record_id))
        and _is_number(record.get("duration"))
        and record["duration"] >= 0
        and _is_number(record.get("timestamp"))
        and record["timestamp"] > 0
        and record.get("mode") in _MODES
    )


def _completed(record: dict[str, Any], mode: TimerMode, duration: int) -> bool:
    """Explicit flag first; otherwise a Countdown must reach its target."""
    if isinstance(record.get("completed"), bool):
        return record["completed"]
    target = record.get("targetDuration", record.get("targetTime"))
    if mode == TimerMode.COUNTDOWN and _is_number(target) and target > 0:
        return duration >= target
    return True


def _interval_settings(record: dict[str, Any]) -> IntervalSettings:
    rounds = (
        record.get("rounds") or record.get("targetLoopCount") or record.get("intervalCount") or 4
    )
    return IntervalSettings(
        work_duration=int(record.get("workDuration") or 1500),
        break_duration=int(record.get("breakDuration") or 300),
        rounds=int(rounds),
    )


def record_to_session(record: Any) -> TimerSessionData | None:
    """Convert one raw history record; returns None for invalid records."""
    if not is_valid_record(record):
        logger.debug("Invalid history record: %r", record)
        return None

    mode = _MODES[record["mode"]]
    duration = round_half_up(record["duration"])
    start_ms = record.get("startTime")
    if not (_is_number(start_ms) and start_ms > 0):
        start_ms = record["timestamp"]
    start = datetime.fromtimestamp(start_ms / 1000)

    try:
        return TimerSessionData(
            id=str(record["id"]),
            mode=mode,
            duration=duration,
            start_time=start,
            end_time=start + timedelta(seconds=duration),
            completed=_completed(record, mode, duration),
            intervals=_interval_settings(record) if mode == TimerMode.INTERVALS else None,
        )
    except ValidationError as e:
        logger.warning("Skipping history record %r: %s", record.get("id"), e)
        return None


def load_history_file(path: Path) -> list[TimerSessionData]:
    """Parse one history file (a JSON list of records).

    Raises:
        HistoryLoadError: The file is unreadable, not JSON, or not a list.
    """
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError) as e:
        raise HistoryLoadError(f"Cannot read history file {path}: {e}") from e

    if not isinstance(data, list):
        raise HistoryLoadError(f"History file {path} must contain a JSON list")

    sessions: list[TimerSessionData] = []
    skipped = 0
    for record in data:
        session = record_to_session(record)
        if session is None:
            skipped += 1
            continue
        sessions.append(session)

    if skipped:
        logger.warning("Skipped %d invalid record(s) in %s", skipped, path)
    return sessions


def load_history(directory: Path, files: list[str]) -> list[TimerSessionData]:
    """Load and concatenate every history file present in ``directory``."""
    sessions: list[TimerSessionData] = []
    for name in files:
        path = directory / name
        if not path.exists():
            logger.debug("No history file at %s", path)
            continue
        sessions.extend(load_history_file(path))
    return sessions
