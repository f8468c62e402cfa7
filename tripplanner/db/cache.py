"""
db/cache.py
-----------
Keyed TTL cache for catalog lookups (places, transport options).

Backends (config.CACHE_BACKEND):
  "in_memory"  process-local dict; an expired entry is dropped on read
  "redis"      redis-py client, values stored as JSON with SETEX

Key schema:
  places_{destination}_{category|all}
  transport_{from}_{to}_{depart_at}
TTL: config.CACHE_TTL_SECONDS (default 300 s)
"""

from __future__ import annotations

import json
import threading
import time
from typing import Any, Callable, Optional

import redis

from tripplanner import config


class InMemoryCache:
    """Thread-safe dict cache with per-entry timestamps."""

    def __init__(
        self,
        ttl_seconds: int | None = None,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self.ttl = config.CACHE_TTL_SECONDS if ttl_seconds is None else ttl_seconds
        self._clock = clock
        self._lock = threading.Lock()
        self._entries: dict[str, tuple[Any, float]] = {}

    def get(self, key: str) -> Optional[Any]:
        with self._lock:
            entry = self._entries.get(key)
            if entry is None:
                return None
            value, stored_at = entry
            if self._clock() - stored_at < self.ttl:
                return value
            del self._entries[key]
            return None

    def set(self, key: str, value: Any) -> None:
        with self._lock:
            self._entries[key] = (value, self._clock())

    def clear(self) -> None:
        with self._lock:
            self._entries.clear()


class RedisCache:
    """JSON-valued cache on top of a shared Redis client."""

    def __init__(self, client: redis.Redis | None = None, ttl_seconds: int | None = None) -> None:
        self._client = client
        self.ttl = config.CACHE_TTL_SECONDS if ttl_seconds is None else ttl_seconds

    @property
    def client(self) -> redis.Redis:
        if self._client is None:
            self._client = get_redis()
        return self._client

    def get(self, key: str) -> Optional[Any]:
        raw = self.client.get(key)
        return json.loads(raw) if raw is not None else None

    def set(self, key: str, value: Any) -> None:
        self.client.setex(key, self.ttl, json.dumps(value, ensure_ascii=False))

    def clear(self) -> None:
        for key in self.client.scan_iter(match="places_*"):
            self.client.delete(key)
        for key in self.client.scan_iter(match="transport_*"):
            self.client.delete(key)


# Module-level singletons; initialised lazily
_client: redis.Redis | None = None
_cache: InMemoryCache | RedisCache | None = None


def get_redis() -> redis.Redis:
    """Return the singleton Redis client, creating it on first call."""
    global _client
    if _client is None:
        kwargs: dict[str, Any] = {
            "host":             config.REDIS_HOST,
            "port":             config.REDIS_PORT,
            "db":               config.REDIS_DB,
            "decode_responses": True,   # return str, not bytes
        }
        if config.REDIS_PASSWORD:
            kwargs["password"] = config.REDIS_PASSWORD
        _client = redis.Redis(**kwargs)
    return _client


def get_cache() -> InMemoryCache | RedisCache:
    """Return the process-wide cache for the configured backend."""
    global _cache
    if _cache is None:
        _cache = RedisCache() if config.CACHE_BACKEND == "redis" else InMemoryCache()
    return _cache
