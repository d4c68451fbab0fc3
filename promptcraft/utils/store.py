"""Key-value store abstraction plus the rate limiter and usage recorder built on it."""

import asyncio
import hashlib
import json
import logging
import math
import os
import time
import uuid
from abc import ABC, abstractmethod
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from pathlib import Path
from typing import Any, Callable, Dict, Optional, Tuple

import aiosqlite

from .exceptions import ConfigurationError, StoreError

logger = logging.getLogger(__name__)

Record = Dict[str, Any]


class KeyValueStore(ABC):
    """Minimal async record store: ``get(key)`` and ``put(key, record, ttl)``."""

    async def initialize(self) -> None:
        pass

    @abstractmethod
    async def get(self, key: str) -> Optional[Record]:
        """Return the record for ``key`` or None when absent or expired."""
        pass

    @abstractmethod
    async def put(self, key: str, record: Record, ttl: Optional[int] = None) -> None:
        """Store ``record`` under ``key``; ``ttl`` in seconds, None for no expiry."""
        pass

    @abstractmethod
    async def delete(self, key: str) -> None:
        pass

    async def close(self) -> None:
        pass


class MemoryStore(KeyValueStore):
    """Process-local store. Records are copied on the way in and out.

    Holds at most ``max_entries`` records. A full store first drops expired
    entries, then the least recently written ones down to 80% of the cap.
    """

    def __init__(
        self, clock: Callable[[], float] = time.time, max_entries: Optional[int] = None
    ):
        self._data: Dict[str, Tuple[str, Optional[float]]] = {}
        self._lock = asyncio.Lock()
        self._clock = clock
        self.max_entries = max_entries or int(os.getenv("STORE_MAX_ENTRIES", "10000"))
        self.sweep_interval = 60.0
        self._last_sweep = clock()

    async def get(self, key: str) -> Optional[Record]:
        async with self._lock:
            entry = self._data.get(key)
            if entry is None:
                return None
            value, expires_at = entry
            if expires_at is not None and expires_at <= self._clock():
                del self._data[key]
                return None
            return json.loads(value)

    async def put(self, key: str, record: Record, ttl: Optional[int] = None) -> None:
        now = self._clock()
        expires_at = now + ttl if ttl else None
        async with self._lock:
            if now - self._last_sweep >= self.sweep_interval:
                self._drop_expired()
                self._last_sweep = now
            # Re-inserting keeps the dict in write order for eviction.
            self._data.pop(key, None)
            if len(self._data) >= self.max_entries:
                self._enforce_limits()
            self._data[key] = (json.dumps(record, default=str), expires_at)

    async def delete(self, key: str) -> None:
        async with self._lock:
            self._data.pop(key, None)

    async def clear_expired(self) -> int:
        async with self._lock:
            return self._drop_expired()

    def _drop_expired(self) -> int:
        now = self._clock()
        expired = [
            key
            for key, (_, expires_at) in self._data.items()
            if expires_at is not None and expires_at <= now
        ]
        for key in expired:
            del self._data[key]
        return len(expired)

    def _enforce_limits(self) -> None:
        self._drop_expired()
        if len(self._data) < self.max_entries:
            return
        to_delete = len(self._data) - int(self.max_entries * 0.8)
        for key in list(self._data)[:to_delete]:
            del self._data[key]
        logger.info("Evicted %d store entries due to limit", to_delete)

    def __len__(self) -> int:
        return len(self._data)


class SQLiteStore(KeyValueStore):
    """aiosqlite-backed store for single-node deployments."""

    def __init__(self, path: str):
        self.path = path
        self._db: Optional[aiosqlite.Connection] = None

    async def initialize(self) -> None:
        if self._db is not None:
            return
        if self.path != ":memory:":
            Path(self.path).parent.mkdir(parents=True, exist_ok=True)
        try:
            self._db = await aiosqlite.connect(self.path)
            await self._db.execute(
                """
                CREATE TABLE IF NOT EXISTS kv_entries (
                    key TEXT PRIMARY KEY,
                    value TEXT NOT NULL,
                    created_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP,
                    expires_at REAL
                )
                """
            )
            await self._db.commit()
        except aiosqlite.Error as e:
            raise StoreError(f"Cannot open store at {self.path}: {e}") from e
        logger.info("SQLite store initialized at %s", self.path)

    async def _conn(self) -> aiosqlite.Connection:
        if self._db is None:
            await self.initialize()
        assert self._db is not None
        return self._db

    async def get(self, key: str) -> Optional[Record]:
        db = await self._conn()
        try:
            async with db.execute(
                "SELECT value FROM kv_entries WHERE key = ? AND (expires_at IS NULL OR expires_at > ?)",
                (key, time.time()),
            ) as cursor:
                row = await cursor.fetchone()
        except aiosqlite.Error as e:
            raise StoreError(f"Store get failed for {key}: {e}") from e
        return json.loads(row[0]) if row else None

    async def put(self, key: str, record: Record, ttl: Optional[int] = None) -> None:
        db = await self._conn()
        expires_at = time.time() + ttl if ttl else None
        try:
            await db.execute(
                "INSERT OR REPLACE INTO kv_entries (key, value, expires_at) VALUES (?, ?, ?)",
                (key, json.dumps(record, default=str), expires_at),
            )
            await db.commit()
        except aiosqlite.Error as e:
            raise StoreError(f"Store put failed for {key}: {e}") from e

    async def delete(self, key: str) -> None:
        db = await self._conn()
        try:
            await db.execute("DELETE FROM kv_entries WHERE key = ?", (key,))
            await db.commit()
        except aiosqlite.Error as e:
            raise StoreError(f"Store delete failed for {key}: {e}") from e

    async def clear_expired(self) -> int:
        db = await self._conn()
        cursor = await db.execute("DELETE FROM kv_entries WHERE expires_at <= ?", (time.time(),))
        await db.commit()
        return cursor.rowcount

    async def close(self) -> None:
        if self._db is not None:
            await self._db.close()
            self._db = None


def create_store(url: Optional[str] = None) -> KeyValueStore:
    """Build a store from ``STORE_URL`` (``memory://`` or ``sqlite:///path``)."""
    url = url or os.getenv("STORE_URL", "memory://")
    if url.startswith("memory://"):
        return MemoryStore()
    if url.startswith("sqlite:///"):
        return SQLiteStore(url[len("sqlite:///"):] or ":memory:")
    raise ConfigurationError(f"Unsupported STORE_URL: {url}")


def hash_client_id(client_ip: str) -> str:
    """Truncated SHA-256 so raw IPs never reach storage."""
    return hashlib.sha256((client_ip or "unknown").encode("utf-8")).hexdigest()[:16]


@dataclass(frozen=True)
class RateLimitDecision:
    allowed: bool
    retry_after: int = 0
    remaining: Optional[int] = None


class RateLimiter:
    """Fixed-window request counter per client.

    A store failure allows the request; availability wins over strictness.
    The read-increment-write of a counter holds one of a fixed set of locks
    chosen by client hash, so concurrent requests from one client within a
    process cannot overshoot ``max_requests``.
    """

    LOCK_STRIPES = 64

    def __init__(
        self,
        store: KeyValueStore,
        max_requests: Optional[int] = None,
        window_seconds: Optional[int] = None,
        enabled: Optional[bool] = None,
        clock: Callable[[], float] = time.time,
    ):
        self.store = store
        self.max_requests = max_requests or int(os.getenv("RATE_LIMIT_MAX_REQUESTS", "10"))
        self.window_seconds = window_seconds or int(os.getenv("RATE_LIMIT_WINDOW_SECONDS", "60"))
        if enabled is None:
            enabled = os.getenv("RATE_LIMIT_ENABLED", "true").lower() == "true"
        self.enabled = enabled
        self._clock = clock
        self._locks = [asyncio.Lock() for _ in range(self.LOCK_STRIPES)]

    async def check(self, client_ip: str) -> RateLimitDecision:
        if not self.enabled:
            return RateLimitDecision(allowed=True)

        client_hash = hash_client_id(client_ip)
        async with self._locks[int(client_hash, 16) % self.LOCK_STRIPES]:
            return await self._check(f"ratelimit:{client_hash}")

    async def _check(self, key: str) -> RateLimitDecision:
        now = self._clock()
        try:
            record = await self.store.get(key)
            if not record or record.get("windowStart", 0) <= now - self.window_seconds:
                await self.store.put(
                    key, {"windowStart": now, "count": 1}, ttl=self.window_seconds
                )
                return RateLimitDecision(allowed=True, remaining=self.max_requests - 1)

            count = int(record.get("count", 0))
            if count >= self.max_requests:
                retry_after = max(
                    1, math.ceil(record["windowStart"] + self.window_seconds - now)
                )
                logger.warning("Rate limit exceeded for client %s", key.split(":", 1)[1])
                return RateLimitDecision(allowed=False, retry_after=retry_after, remaining=0)

            remaining_window = max(1, math.ceil(record["windowStart"] + self.window_seconds - now))
            await self.store.put(
                key,
                {"windowStart": record["windowStart"], "count": count + 1},
                ttl=remaining_window,
            )
            return RateLimitDecision(allowed=True, remaining=self.max_requests - count - 1)
        except (StoreError, ValueError, TypeError, KeyError) as e:
            logger.error("Rate limit check error, allowing request: %s", e)
            return RateLimitDecision(allowed=True)


class UsageRecorder:
    """Writes one analytics record per enhancement; failures are logged and ignored."""

    def __init__(
        self,
        store: KeyValueStore,
        enabled: Optional[bool] = None,
        retention_days: Optional[int] = None,
    ):
        self.store = store
        if enabled is None:
            enabled = os.getenv("USAGE_LOGGING_ENABLED", "true").lower() == "true"
        self.enabled = enabled
        self.retention_days = retention_days or int(os.getenv("USAGE_RETENTION_DAYS", "90"))

    async def record(
        self,
        client_ip: str,
        input_length: int,
        output_length: int,
        request_type: str,
        source: str,
    ) -> Optional[str]:
        """Persist a usage record and return its id, or None when skipped or failed."""
        if not self.enabled:
            return None

        now = datetime.now(timezone.utc)
        record_id = f"{int(now.timestamp() * 1000)}-{uuid.uuid4().hex[:9]}"
        record = {
            "id": record_id,
            "timestamp": now.isoformat(),
            "clientIp": hash_client_id(client_ip),
            "inputLength": input_length,
            "outputLength": output_length,
            "requestType": request_type,
            "source": source,
            "expiresAt": (now + timedelta(days=self.retention_days)).isoformat(),
        }
        try:
            await self.store.put(
                f"usage:{record_id}", record, ttl=self.retention_days * 24 * 60 * 60
            )
        except StoreError as e:
            logger.error("Usage logging failed: %s", e)
            return None
        return record_id
