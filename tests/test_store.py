"""Tests for the key-value stores, rate limiter and usage recorder."""

import asyncio
from unittest.mock import AsyncMock, Mock

import pytest

from promptcraft.utils.exceptions import ConfigurationError, StoreError
from promptcraft.utils.store import (
    KeyValueStore,
    MemoryStore,
    RateLimiter,
    SQLiteStore,
    UsageRecorder,
    create_store,
    hash_client_id,
)


class FakeClock:
    def __init__(self, now: float = 1_000_000.0):
        self.now = now

    def __call__(self) -> float:
        return self.now


class SlowStore(MemoryStore):
    """Yields to the event loop between a read and the following write."""

    async def get(self, key):
        record = await super().get(key)
        await asyncio.sleep(0)
        return record


class TestMemoryStore:
    @pytest.mark.asyncio
    async def test_put_get_delete(self):
        store = MemoryStore()
        await store.put("k", {"a": 1})
        assert await store.get("k") == {"a": 1}
        await store.delete("k")
        assert await store.get("k") is None

    @pytest.mark.asyncio
    async def test_records_are_copied(self):
        store = MemoryStore()
        record = {"a": [1]}
        await store.put("k", record)
        record["a"].append(2)
        fetched = await store.get("k")
        fetched["a"].append(3)
        assert await store.get("k") == {"a": [1]}

    @pytest.mark.asyncio
    async def test_expiry(self):
        clock = FakeClock()
        store = MemoryStore(clock=clock)
        await store.put("k", {"a": 1}, ttl=10)
        clock.now += 9
        assert await store.get("k") == {"a": 1}
        clock.now += 1
        assert await store.get("k") is None
        assert len(store) == 0

    @pytest.mark.asyncio
    async def test_entry_cap_evicts_oldest(self):
        store = MemoryStore(max_entries=10)
        for i in range(25):
            await store.put(f"k{i}", {"i": i}, ttl=3600)

        assert len(store) <= 10
        assert await store.get("k24") == {"i": 24}
        assert await store.get("k0") is None

    @pytest.mark.asyncio
    async def test_rewritten_key_is_kept_on_eviction(self):
        store = MemoryStore(max_entries=5)
        for i in range(5):
            await store.put(f"k{i}", {"i": i})
        await store.put("k0", {"i": 0})
        await store.put("k5", {"i": 5})

        assert await store.get("k0") == {"i": 0}
        assert await store.get("k1") is None

    @pytest.mark.asyncio
    async def test_unread_expired_entries_are_swept_on_put(self):
        clock = FakeClock()
        store = MemoryStore(clock=clock)
        for i in range(100):
            await store.put(f"usage:{i}", {"i": i}, ttl=10)

        clock.now += store.sweep_interval
        await store.put("fresh", {"ok": True}, ttl=10)

        assert len(store) == 1

    @pytest.mark.asyncio
    async def test_clear_expired(self):
        clock = FakeClock()
        store = MemoryStore(clock=clock)
        await store.put("short", {"a": 1}, ttl=5)
        await store.put("forever", {"a": 2})
        clock.now += 5
        assert await store.clear_expired() == 1
        assert await store.get("forever") == {"a": 2}

    @pytest.mark.asyncio
    async def test_usage_records_stay_bounded(self):
        store = MemoryStore(max_entries=100)
        recorder = UsageRecorder(store, enabled=True)
        for _ in range(1000):
            await recorder.record("10.0.0.1", 5, 50, "general", "template")
        assert len(store) <= 100

    def test_max_entries_from_environment(self, monkeypatch):
        monkeypatch.setenv("STORE_MAX_ENTRIES", "42")
        assert MemoryStore().max_entries == 42


class TestSQLiteStore:
    @pytest.mark.asyncio
    async def test_roundtrip_and_persistence(self, tmp_path):
        path = str(tmp_path / "data" / "store.db")
        store = SQLiteStore(path)
        await store.initialize()
        await store.put("k", {"count": 3}, ttl=60)
        await store.put("forever", {"x": "y"})
        assert await store.get("k") == {"count": 3}
        await store.close()

        reopened = SQLiteStore(path)
        assert await reopened.get("forever") == {"x": "y"}
        await reopened.delete("forever")
        assert await reopened.get("forever") is None
        await reopened.close()

    @pytest.mark.asyncio
    async def test_expired_entries_hidden_and_cleared(self, tmp_path):
        store = SQLiteStore(str(tmp_path / "store.db"))
        await store.put("gone", {"a": 1}, ttl=-1)
        assert await store.get("gone") is None
        assert await store.clear_expired() == 1
        await store.close()


def test_create_store_from_url(tmp_path):
    assert isinstance(create_store("memory://"), MemoryStore)
    sqlite_store = create_store(f"sqlite:///{tmp_path}/x.db")
    assert isinstance(sqlite_store, SQLiteStore)
    assert sqlite_store.path == f"{tmp_path}/x.db"
    with pytest.raises(ConfigurationError):
        create_store("redis://localhost")


def test_hash_client_id():
    hashed = hash_client_id("203.0.113.7")
    assert len(hashed) == 16
    assert hashed == hash_client_id("203.0.113.7")
    assert hashed != hash_client_id("203.0.113.8")


class TestRateLimiter:
    @pytest.mark.asyncio
    async def test_allows_up_to_limit_then_blocks(self):
        clock = FakeClock()
        limiter = RateLimiter(MemoryStore(), max_requests=3, window_seconds=60, enabled=True, clock=clock)

        decisions = [await limiter.check("1.2.3.4") for _ in range(3)]
        assert all(d.allowed for d in decisions)
        assert [d.remaining for d in decisions] == [2, 1, 0]

        clock.now += 15
        blocked = await limiter.check("1.2.3.4")
        assert not blocked.allowed
        assert blocked.retry_after == 45

    @pytest.mark.asyncio
    async def test_window_resets(self):
        clock = FakeClock()
        limiter = RateLimiter(MemoryStore(), max_requests=1, window_seconds=60, enabled=True, clock=clock)
        assert (await limiter.check("ip")).allowed
        assert not (await limiter.check("ip")).allowed
        clock.now += 60
        assert (await limiter.check("ip")).allowed

    @pytest.mark.asyncio
    async def test_clients_are_independent(self):
        limiter = RateLimiter(MemoryStore(), max_requests=1, window_seconds=60, enabled=True)
        assert (await limiter.check("a")).allowed
        assert (await limiter.check("b")).allowed
        assert not (await limiter.check("a")).allowed

    @pytest.mark.asyncio
    async def test_retry_after_is_at_least_one_second(self):
        clock = FakeClock()
        limiter = RateLimiter(MemoryStore(), max_requests=1, window_seconds=60, enabled=True, clock=clock)
        await limiter.check("ip")
        clock.now += 59.9
        assert (await limiter.check("ip")).retry_after == 1

    @pytest.mark.asyncio
    async def test_concurrent_requests_do_not_overshoot(self):
        limiter = RateLimiter(SlowStore(), max_requests=3, window_seconds=60, enabled=True)

        decisions = await asyncio.gather(*(limiter.check("1.2.3.4") for _ in range(10)))

        assert sum(d.allowed for d in decisions) == 3

    @pytest.mark.asyncio
    async def test_store_error_allows_request(self):
        store = Mock(spec=KeyValueStore)
        store.get = AsyncMock(side_effect=StoreError("unreachable"))
        limiter = RateLimiter(store, max_requests=1, window_seconds=60, enabled=True)
        decision = await limiter.check("ip")
        assert decision.allowed

    @pytest.mark.asyncio
    async def test_disabled(self):
        store = Mock(spec=KeyValueStore)
        limiter = RateLimiter(store, enabled=False)
        assert (await limiter.check("ip")).allowed
        store.get.assert_not_called()

    @pytest.mark.asyncio
    async def test_raw_ip_never_stored(self):
        store = MemoryStore()
        limiter = RateLimiter(store, max_requests=5, window_seconds=60, enabled=True)
        await limiter.check("198.51.100.23")
        assert await store.get(f"ratelimit:{hash_client_id('198.51.100.23')}") is not None
        assert await store.get("ratelimit:198.51.100.23") is None

    def test_settings_from_environment(self, monkeypatch):
        monkeypatch.setenv("RATE_LIMIT_MAX_REQUESTS", "7")
        monkeypatch.setenv("RATE_LIMIT_WINDOW_SECONDS", "30")
        monkeypatch.setenv("RATE_LIMIT_ENABLED", "false")
        limiter = RateLimiter(MemoryStore())
        assert limiter.max_requests == 7
        assert limiter.window_seconds == 30
        assert limiter.enabled is False


class TestUsageRecorder:
    @pytest.mark.asyncio
    async def test_record_written_with_hashed_ip(self):
        store = MemoryStore()
        recorder = UsageRecorder(store, enabled=True, retention_days=90)

        record_id = await recorder.record("10.0.0.1", 12, 900, "creative_writing", "template")

        record = await store.get(f"usage:{record_id}")
        assert record["clientIp"] == hash_client_id("10.0.0.1")
        assert record["inputLength"] == 12
        assert record["outputLength"] == 900
        assert record["requestType"] == "creative_writing"
        assert record["source"] == "template"
        assert record["expiresAt"] > record["timestamp"]

    @pytest.mark.asyncio
    async def test_disabled_returns_none(self):
        store = Mock(spec=KeyValueStore)
        recorder = UsageRecorder(store, enabled=False)
        assert await recorder.record("ip", 1, 2, "general", "template") is None
        store.put.assert_not_called()

    @pytest.mark.asyncio
    async def test_store_failure_is_swallowed(self):
        store = Mock(spec=KeyValueStore)
        store.put = AsyncMock(side_effect=StoreError("full"))
        recorder = UsageRecorder(store, enabled=True)
        assert await recorder.record("ip", 1, 2, "general", "template") is None
