# src/news_hub/services/news_service.py
"""
News Service
Entry point for the HTTP layer: key → cache → aggregate → store

Pipeline:
1. Derive the cache key from the QuerySpec
2. Return the cached list on a hit
3. On a miss, join the in-flight aggregation for the key or start one
4. Cache the merged list unless every provider failed
"""

import asyncio
import time
from typing import Dict, List, Optional

from news_hub.core.logging import LoggerMixin
from news_hub.exceptions import CacheError, ConfigurationError
from news_hub.schemas.article import Article
from news_hub.schemas.query import QuerySpec
from news_hub.services.aggregator_service import NewsAggregatorService
from news_hub.services.cache import ResultCache
from news_hub.services.filter_service import ArticleFilterService
from news_hub.services.query_key import QueryKeyBuilder
from news_hub.stores.base import PreferenceStore


class NewsService(LoggerMixin):
    """
    Cached news lookups plus the read/favorite views built on them.

    At most one aggregation runs per cache key at a time; concurrent
    callers for the same key await the same task.
    """

    def __init__(
        self,
        aggregator: NewsAggregatorService,
        cache: Optional[ResultCache] = None,
        key_builder: Optional[QueryKeyBuilder] = None,
        filter_service: Optional[ArticleFilterService] = None,
        store: Optional[PreferenceStore] = None,
    ):
        """
        Args:
            aggregator: Provider fan-out
            cache: Result cache, None to always aggregate
            key_builder: Cache key derivation
            filter_service: Read/favorite filtering
            store: Preference and article-ID source for the per-user views
        """
        super().__init__()
        self.aggregator = aggregator
        self.cache = cache
        self.key_builder = key_builder or QueryKeyBuilder()
        self.filter_service = filter_service or ArticleFilterService()
        self.store = store
        self._inflight: Dict[str, "asyncio.Task[List[Article]]"] = {}

    # ========================================
    # CORE PIPELINE
    # ========================================

    async def fetch(self, spec: QuerySpec) -> List[Article]:
        key = self.key_builder.key(spec)

        cached = await self._cache_get(key)
        if cached is not None:
            self.logger.info(f"[News] Cache HIT key={key!r} ({len(cached)} articles)")
            return cached

        task = self._inflight.get(key)
        if task is None:
            self.logger.info(f"[News] Cache MISS key={key!r}, aggregating")
            task = asyncio.ensure_future(self._load(key, spec))
            self._inflight[key] = task
            task.add_done_callback(lambda done, k=key: self._forget(k, done))
        else:
            self.logger.debug(f"[News] Joining in-flight aggregation key={key!r}")

        # shield: one cancelled caller must not cancel the shared load
        articles = await asyncio.shield(task)
        return list(articles)

    def _forget(self, key: str, task: "asyncio.Task[List[Article]]") -> None:
        if self._inflight.get(key) is task:
            del self._inflight[key]
        # Collects the error even when every awaiting caller was cancelled
        if not task.cancelled() and task.exception() is not None:
            self.logger.error(f"[News] Aggregation failed for key={key!r}: {task.exception()!r}")

    async def _load(self, key: str, spec: QuerySpec) -> List[Article]:
        start_time = time.time()
        outcomes = await self.aggregator.aggregate_outcomes(spec)
        articles = self.aggregator.merge(outcomes)

        failed = [o.provider for o in outcomes if o.failed]
        if failed:
            self.logger.warning(f"[News] Providers failed for key={key!r}: {failed}")

        if len(failed) == len(outcomes):
            # Nothing trustworthy to memoize; the next request retries upstream
            self.logger.warning(f"[News] All providers failed for key={key!r}, not caching")
        else:
            await self._cache_put(key, articles)

        self.logger.info(
            f"[News] Aggregated {len(articles)} articles for key={key!r} "
            f"in {int((time.time() - start_time) * 1000)}ms"
        )
        return articles

    async def _cache_get(self, key: str) -> Optional[List[Article]]:
        if self.cache is None:
            return None
        try:
            return await self.cache.get(key)
        except CacheError as e:
            self.logger.error(f"[News] Cache unavailable, bypassing: {e}")
            return None

    async def _cache_put(self, key: str, articles: List[Article]) -> None:
        if self.cache is None:
            return
        try:
            await self.cache.put(key, articles)
        except CacheError as e:
            self.logger.error(f"[News] Cache write failed, continuing: {e}")

    # ========================================
    # QUERY ENTRY POINTS
    # ========================================

    async def get_news(self, preferences: Optional[List[str]] = None) -> List[Article]:
        """Preference search, or top headlines when there are none."""
        return await self.fetch(QuerySpec.for_preferences(preferences))

    async def search_news(self, keyword: str) -> List[Article]:
        return await self.fetch(QuerySpec.for_keyword(keyword))

    # ========================================
    # PER-USER VIEWS
    # ========================================

    def _require_store(self) -> PreferenceStore:
        if self.store is None:
            raise ConfigurationError("NewsService has no preference store configured")
        return self.store

    async def get_news_for_user(self, user_id: str) -> List[Article]:
        store = self._require_store()
        return await self.get_news(store.get_preferences(user_id))

    async def get_read_articles(self, user_id: str) -> List[Article]:
        """
        Read articles still present in the user's current news pool.

        An article drops out once the upstream fetch for the user's
        preferences stops returning it.
        """
        store = self._require_store()
        ids = store.get_read_article_ids(user_id)
        if not ids:
            return []
        pool = await self.get_news(store.get_preferences(user_id))
        return self.filter_service.filter(pool, ids)

    async def get_favorite_articles(self, user_id: str) -> List[Article]:
        """Favorite articles still present in the user's current news pool."""
        store = self._require_store()
        ids = store.get_favorite_article_ids(user_id)
        if not ids:
            return []
        pool = await self.get_news(store.get_preferences(user_id))
        return self.filter_service.filter(pool, ids)

    async def close(self) -> None:
        """Cleanup resources"""
        await self.aggregator.close()
        if self.cache is not None:
            await self.cache.aclose()
