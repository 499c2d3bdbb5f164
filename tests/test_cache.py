"""Tests for the insights cache."""

import json
import logging

import pytest

import timer_insights.core as core
from timer_insights.cache import (
    CACHE_KEY,
    FileBackend,
    InsightsCacheStore,
    MemoryBackend,
)
from timer_insights.core import clear_insights_cache, generate_ai_insights, get_ai_insights


class FakeClock:
    """Manually advanced clock, in seconds."""

    def __init__(self, start: float = 1_700_000_000.0) -> None:
        self.now = start

    def __call__(self) -> float:
        return self.now


class BrokenBackend:
    """Backend whose storage always fails."""

    def get(self, key: str) -> str | None:
        raise OSError("disk unavailable")

    def set(self, key: str, value: str) -> None:
        raise OSError("disk unavailable")

    def delete(self, key: str) -> None:
        raise OSError("disk unavailable")


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def backend() -> MemoryBackend:
    return MemoryBackend()


@pytest.fixture
def store(backend: MemoryBackend, clock: FakeClock) -> InsightsCacheStore:
    return InsightsCacheStore(backend, clock=clock)


@pytest.fixture
def sessions(make_session):
    return [make_session(days_ago=d) for d in range(6)]


@pytest.fixture
def generate_calls(monkeypatch) -> list[int]:
    """Record each call the pipeline makes to generate_ai_insights."""
    calls: list[int] = []

    def _counting(sessions, now=None):
        calls.append(len(sessions))
        return generate_ai_insights(sessions, now)

    monkeypatch.setattr(core, "generate_ai_insights", _counting)
    return calls


class TestInsightsCacheStore:
    """Tests for storing and validating cache entries."""

    def test_round_trip(self, store, sessions, now) -> None:
        """Stored values read back unchanged."""
        insights = generate_ai_insights(sessions, now)
        store.save(insights)
        assert store.load(len(sessions)) == insights

    def test_entry_layout(self, store, backend, clock, sessions, now) -> None:
        """The stored record uses camelCase timestamps five minutes apart."""
        store.save(generate_ai_insights(sessions, now))
        raw = json.loads(backend.get(CACHE_KEY))
        assert set(raw) == {"insights", "cachedAt", "expiresAt"}
        assert raw["cachedAt"] == int(clock.now * 1000)
        assert raw["expiresAt"] - raw["cachedAt"] == 300_000

    def test_miss_when_empty(self, store) -> None:
        """An empty backend is a miss."""
        assert store.load(0) is None

    def test_expires_after_ttl(self, store, clock, sessions, now) -> None:
        """Entries expire exactly at the TTL."""
        store.save(generate_ai_insights(sessions, now))
        clock.now += 299
        assert store.load(len(sessions)) is not None
        clock.now += 1
        assert store.load(len(sessions)) is None

    def test_custom_ttl(self, backend, clock, sessions, now) -> None:
        """A shorter TTL expires sooner."""
        store = InsightsCacheStore(backend, ttl_seconds=10, clock=clock)
        store.save(generate_ai_insights(sessions, now))
        clock.now += 11
        assert store.load(len(sessions)) is None

    def test_session_count_mismatch(self, store, sessions, now) -> None:
        """A different session count invalidates the entry."""
        store.save(generate_ai_insights(sessions, now))
        assert store.load(len(sessions) + 1) is None

    def test_corrupt_entry_is_a_miss(self, store, backend, caplog) -> None:
        """Unparseable JSON is logged and treated as a miss."""
        backend.set(CACHE_KEY, "{not json")
        with caplog.at_level(logging.WARNING, logger="timer_insights.cache"):
            assert store.load(3) is None
        assert "Corrupt insights cache entry" in caplog.text

    def test_wrong_shape_is_a_miss(self, store, backend) -> None:
        """JSON missing required fields is a miss."""
        backend.set(CACHE_KEY, json.dumps({"cachedAt": 1}))
        assert store.load(0) is None

    def test_storage_failures_are_swallowed(self, clock, sessions, now, caplog) -> None:
        """Backend errors are logged, never raised."""
        store = InsightsCacheStore(BrokenBackend(), clock=clock)
        with caplog.at_level(logging.WARNING, logger="timer_insights.cache"):
            assert store.load(len(sessions)) is None
            store.save(generate_ai_insights(sessions, now))
            store.clear()
        assert "Failed to read insights cache" in caplog.text
        assert "Failed to write insights cache" in caplog.text

    def test_clear(self, store, backend, sessions, now) -> None:
        """Clearing deletes the stored entry."""
        store.save(generate_ai_insights(sessions, now))
        store.clear()
        assert backend.get(CACHE_KEY) is None
        assert store.load(len(sessions)) is None


class TestFileBackend:
    """Tests for the on-disk backend."""

    def test_round_trip(self, tmp_path) -> None:
        """Stored values read back unchanged."""
        backend = FileBackend(tmp_path / "cache")
        backend.set("key", '{"a": 1}')
        assert backend.get("key") == '{"a": 1}'
        assert (tmp_path / "cache" / "key.json").exists()

    def test_missing_key(self, tmp_path) -> None:
        """A missing file reads as None."""
        assert FileBackend(tmp_path).get("missing") is None

    def test_no_temp_files_left(self, tmp_path) -> None:
        """Atomic writes leave only the final file behind."""
        backend = FileBackend(tmp_path)
        backend.set("key", "first")
        backend.set("key", "second")
        assert [p.name for p in tmp_path.iterdir()] == ["key.json"]
        assert backend.get("key") == "second"

    def test_delete_is_idempotent(self, tmp_path) -> None:
        """Deleting twice does not raise."""
        backend = FileBackend(tmp_path)
        backend.set("key", "value")
        backend.delete("key")
        backend.delete("key")
        assert backend.get("key") is None

    def test_undecodable_file_is_a_miss(self, tmp_path, clock, caplog) -> None:
        """A cache file that is not UTF-8 is logged and treated as a miss."""
        (tmp_path / f"{CACHE_KEY}.json").write_bytes(b"\xff\xfe\x00garbage")
        store = InsightsCacheStore(FileBackend(tmp_path), clock=clock)
        with caplog.at_level(logging.WARNING, logger="timer_insights.cache"):
            assert store.load(1) is None
        assert "Failed to read insights cache" in caplog.text

    def test_store_over_files(self, tmp_path, clock, sessions, now) -> None:
        """A new store reads what another store wrote to disk."""
        store = InsightsCacheStore(FileBackend(tmp_path), clock=clock)
        insights = generate_ai_insights(sessions, now)
        store.save(insights)

        reopened = InsightsCacheStore(FileBackend(tmp_path), clock=clock)
        assert reopened.load(len(sessions)) == insights


class TestGetAIInsights:
    """Tests for the cache-aware entry point."""

    def test_second_call_is_served_from_cache(
        self, store, sessions, now, generate_calls
    ) -> None:
        """A repeat call within the TTL does not recompute."""
        first = get_ai_insights(sessions, cache=store, now=now)
        second = get_ai_insights(sessions, cache=store, now=now)
        assert first == second
        assert generate_calls == [6]

    def test_recomputes_after_expiry(
        self, store, clock, sessions, now, generate_calls
    ) -> None:
        """An expired entry triggers recomputation."""
        get_ai_insights(sessions, cache=store, now=now)
        clock.now += 301
        get_ai_insights(sessions, cache=store, now=now)
        assert generate_calls == [6, 6]

    def test_recomputes_when_session_count_changes(
        self, store, sessions, make_session, now, generate_calls
    ) -> None:
        """A new session triggers recomputation."""
        get_ai_insights(sessions, cache=store, now=now)
        get_ai_insights(sessions + [make_session(days_ago=7)], cache=store, now=now)
        assert generate_calls == [6, 7]

    def test_storage_failure_still_returns_insights(self, clock, sessions, now) -> None:
        """Broken storage still yields insights."""
        store = InsightsCacheStore(BrokenBackend(), clock=clock)
        insights = get_ai_insights(sessions, cache=store, now=now)
        assert insights.data_range.sessions_analyzed == 6

    def test_undecodable_cache_file_is_recomputed(self, tmp_path, clock, sessions, now) -> None:
        """A garbled cache file is replaced by fresh insights."""
        (tmp_path / f"{CACHE_KEY}.json").write_bytes(b"\xff\xfe")
        store = InsightsCacheStore(FileBackend(tmp_path), clock=clock)

        insights = get_ai_insights(sessions, cache=store, now=now)

        assert insights.data_range.sessions_analyzed == 6
        assert store.load(len(sessions)) == insights

    def test_clear_forces_recompute(self, store, sessions, now, generate_calls) -> None:
        """Clearing the cache forces recomputation."""
        get_ai_insights(sessions, cache=store, now=now)
        clear_insights_cache(store)
        get_ai_insights(sessions, cache=store, now=now)
        assert generate_calls == [6, 6]
