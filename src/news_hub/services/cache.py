# src/news_hub/services/cache.py
"""
Result Cache
Memoizes aggregated article lists per query key.

Backends:
- InMemoryResultCache: TTL expiry + LRU eviction, process local
- RedisResultCache: TTL expiry in a shared redis, raises CacheError when
  redis is unavailable so the caller can bypass it
"""

import asyncio
import threading
import time
from abc import ABC, abstractmethod
from collections import OrderedDict
from dataclasses import dataclass
from typing import Callable, Dict, List, Optional, Sequence, Tuple

from pydantic import TypeAdapter, ValidationError
from redis import asyncio as aioredis
from redis.exceptions import RedisError

from news_hub.core.logging import LoggerMixin
from news_hub.exceptions import CacheError
from news_hub.schemas.article import Article

_ARTICLE_LIST = TypeAdapter(List[Article])

# Timeout settings
REDIS_SOCKET_TIMEOUT = 5  # seconds


class ResultCache(ABC):
    """Cache of article lists keyed by QueryKeyBuilder keys."""

    @abstractmethod
    async def get(self, key: str) -> Optional[List[Article]]:
        """Return the cached articles, or None when absent or expired."""
        pass

    @abstractmethod
    async def put(self, key: str, articles: Sequence[Article]) -> None:
        pass

    @abstractmethod
    async def invalidate(self, key: str) -> None:
        pass

    @abstractmethod
    async def clear(self) -> None:
        pass

    async def aclose(self) -> None:
        return None


@dataclass
class CacheEntry:
    """Single cache entry for a query key"""
    articles: Tuple[Article, ...]
    expires_at: float
    hits: int = 0

    def is_expired(self, now: float) -> bool:
        return now >= self.expires_at


class InMemoryResultCache(LoggerMixin, ResultCache):
    """
    In-process cache.

    Features:
    - TTL-based expiration
    - LRU eviction once max_size entries are held
    - Thread-safe single-key operations
    """

    DEFAULT_TTL_SECONDS = 300
    MAX_CACHE_SIZE = 256

    def __init__(
        self,
        ttl_seconds: float = DEFAULT_TTL_SECONDS,
        max_size: int = MAX_CACHE_SIZE,
        clock: Callable[[], float] = time.monotonic,
    ):
        """
        Args:
            ttl_seconds: Time-to-live for cache entries
            max_size: Maximum number of entries
            clock: Monotonic time source, injectable for tests
        """
        super().__init__()
        if ttl_seconds <= 0:
            raise ValueError("ttl_seconds must be positive")
        if max_size <= 0:
            raise ValueError("max_size must be positive")

        self.ttl_seconds = ttl_seconds
        self.max_size = max_size
        self._clock = clock

        # LRU cache using OrderedDict
        self._cache: "OrderedDict[str, CacheEntry]" = OrderedDict()
        self._cache_lock = threading.RLock()

        self._stats = {
            "hits": 0,
            "misses": 0,
            "expired": 0,
            "evictions": 0,
        }

    def __len__(self) -> int:
        with self._cache_lock:
            return len(self._cache)

    @property
    def stats(self) -> Dict[str, int]:
        with self._cache_lock:
            return dict(self._stats, size=len(self._cache))

    async def get(self, key: str) -> Optional[List[Article]]:
        with self._cache_lock:
            entry = self._cache.get(key)
            if entry is None:
                self._stats["misses"] += 1
                return None

            if entry.is_expired(self._clock()):
                del self._cache[key]
                self._stats["expired"] += 1
                self._stats["misses"] += 1
                return None

            self._cache.move_to_end(key)
            entry.hits += 1
            self._stats["hits"] += 1
            return list(entry.articles)

    async def put(self, key: str, articles: Sequence[Article]) -> None:
        with self._cache_lock:
            self._cache[key] = CacheEntry(
                articles=tuple(articles),
                expires_at=self._clock() + self.ttl_seconds,
            )
            self._cache.move_to_end(key)

            while len(self._cache) > self.max_size:
                evicted_key, _ = self._cache.popitem(last=False)
                self._stats["evictions"] += 1
                self.logger.debug(f"[Cache] Evicted LRU key {evicted_key!r}")

    async def invalidate(self, key: str) -> None:
        with self._cache_lock:
            self._cache.pop(key, None)

    async def clear(self) -> None:
        with self._cache_lock:
            self._cache.clear()


class RedisResultCache(LoggerMixin, ResultCache):
    """Shared cache in redis. Entries expire server side after ttl_seconds."""

    def __init__(
        self,
        client: aioredis.Redis,
        ttl_seconds: int = 300,
        key_prefix: str = "news:",
        op_timeout: float = REDIS_SOCKET_TIMEOUT,
    ):
        super().__init__()
        if ttl_seconds <= 0:
            raise ValueError("ttl_seconds must be positive")
        self._client = client
        self.ttl_seconds = int(ttl_seconds)
        self.key_prefix = key_prefix
        self.op_timeout = op_timeout

    @classmethod
    def from_url(
        cls,
        redis_url: str,
        ttl_seconds: int = 300,
        key_prefix: str = "news:",
    ) -> "RedisResultCache":
        """Build from a redis:// URL. No connection is opened until first use."""
        client = aioredis.Redis.from_url(
            redis_url,
            socket_connect_timeout=REDIS_SOCKET_TIMEOUT,
            socket_timeout=REDIS_SOCKET_TIMEOUT,
            health_check_interval=30,
        )
        return cls(client, ttl_seconds=ttl_seconds, key_prefix=key_prefix)

    def _redis_key(self, key: str) -> str:
        return f"{self.key_prefix}{key}"

    async def get(self, key: str) -> Optional[List[Article]]:
        redis_key = self._redis_key(key)
        try:
            raw = await asyncio.wait_for(self._client.get(redis_key), timeout=self.op_timeout)
        except asyncio.TimeoutError as e:
            raise CacheError(f"Redis GET timeout for key: {redis_key}") from e
        except RedisError as e:
            raise CacheError(f"Redis GET error for key {redis_key}: {e}") from e

        if raw is None:
            return None

        try:
            return _ARTICLE_LIST.validate_json(raw)
        except ValidationError as e:
            # A corrupt entry is a miss, not an outage
            self.logger.warning(f"[Cache] Dropping undecodable entry {redis_key}: {e.error_count()} errors")
            return None

    async def put(self, key: str, articles: Sequence[Article]) -> None:
        redis_key = self._redis_key(key)
        payload = _ARTICLE_LIST.dump_json(list(articles), by_alias=True)
        try:
            await asyncio.wait_for(
                self._client.set(redis_key, payload, ex=self.ttl_seconds),
                timeout=self.op_timeout,
            )
        except asyncio.TimeoutError as e:
            raise CacheError(f"Redis SET timeout for key: {redis_key}") from e
        except RedisError as e:
            raise CacheError(f"Redis SET error for key {redis_key}: {e}") from e

    async def invalidate(self, key: str) -> None:
        redis_key = self._redis_key(key)
        try:
            await asyncio.wait_for(self._client.delete(redis_key), timeout=self.op_timeout)
        except asyncio.TimeoutError as e:
            raise CacheError(f"Redis DEL timeout for key: {redis_key}") from e
        except RedisError as e:
            raise CacheError(f"Redis DEL error for key {redis_key}: {e}") from e

    async def _delete_prefixed(self) -> int:
        deleted = 0
        async for redis_key in self._client.scan_iter(match=f"{self.key_prefix}*"):
            deleted += await self._client.delete(redis_key)
        return deleted

    async def clear(self) -> None:
        """Delete every key under key_prefix, bounded by op_timeout overall."""
        try:
            deleted = await asyncio.wait_for(self._delete_prefixed(), timeout=self.op_timeout)
        except asyncio.TimeoutError as e:
            raise CacheError(f"Redis clear timeout for prefix: {self.key_prefix}") from e
        except RedisError as e:
            raise CacheError(f"Redis clear error: {e}") from e
        self.logger.info(f"[Cache] Cleared {deleted} keys under {self.key_prefix!r}")

    async def aclose(self) -> None:
        try:
            await self._client.aclose()
        except RedisError as e:
            self.logger.warning(f"Error closing Redis connection: {e}")
