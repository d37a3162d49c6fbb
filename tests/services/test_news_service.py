"""
Unit tests for NewsService

Cache-through behaviour, single-flight per key, cache bypass on backend
failure and the per-user read/favorite views.
"""

import asyncio
import logging
from unittest.mock import AsyncMock, MagicMock

import pytest

from news_hub.exceptions import CacheError, ConfigurationError
from news_hub.schemas.query import QueryMode, QuerySpec
from news_hub.services.aggregator_service import NewsAggregatorService
from news_hub.services.cache import InMemoryResultCache
from news_hub.services.news_service import NewsService
from news_hub.stores.memory_store import InMemoryUserStore


@pytest.fixture
def pool(make_article):
    return [make_article(slug) for slug in ("a", "b", "c")]


@pytest.fixture
def provider(static_provider, pool):
    return static_provider("static", pool)


@pytest.fixture
def service(provider):
    return NewsService(NewsAggregatorService([provider]), cache=InMemoryResultCache())


# ============================================================================
# CACHE-THROUGH
# ============================================================================

class TestCacheThrough:

    @pytest.mark.asyncio
    async def test_second_identical_query_hits_cache(self, service, provider, pool):
        first = await service.search_news("election")
        second = await service.search_news("election")

        assert first == second == pool
        assert provider.calls == 1

    @pytest.mark.asyncio
    async def test_distinct_keys_aggregate_separately(self, service, provider):
        await service.search_news("election")
        await service.search_news("sports")
        await service.get_news(None)

        assert provider.calls == 3

    @pytest.mark.asyncio
    async def test_equivalent_specs_share_cache_entry(self, service, provider):
        await service.get_news(["tech", "science"])
        await service.search_news("tech OR science")

        assert provider.calls == 1

    @pytest.mark.asyncio
    async def test_blank_preferences_share_headlines_entry(self, service, provider):
        await service.get_news(None)
        await service.get_news([""])

        assert provider.calls == 1
        assert [q.mode for q in provider.queries] == [QueryMode.TOP_HEADLINES]

    @pytest.mark.asyncio
    async def test_without_cache_every_call_aggregates(self, provider):
        service = NewsService(NewsAggregatorService([provider]), cache=None)

        await service.search_news("x")
        await service.search_news("x")

        assert provider.calls == 2

    @pytest.mark.asyncio
    async def test_all_providers_failed_is_not_cached(self, failing_provider):
        down = failing_provider("down")
        service = NewsService(NewsAggregatorService([down]), cache=InMemoryResultCache())

        assert await service.search_news("x") == []
        assert await service.search_news("x") == []
        assert down.calls == 2

    @pytest.mark.asyncio
    async def test_partial_failure_is_cached(self, provider, failing_provider, pool):
        down = failing_provider("down")
        service = NewsService(NewsAggregatorService([provider, down]), cache=InMemoryResultCache())

        assert await service.search_news("x") == pool
        await service.search_news("x")

        assert provider.calls == 1

    @pytest.mark.asyncio
    async def test_callers_get_independent_lists(self, service):
        first = await service.search_news("x")
        first.clear()

        assert len(await service.search_news("x")) == 3


# ============================================================================
# SINGLE-FLIGHT
# ============================================================================

class TestSingleFlight:

    @pytest.mark.asyncio
    async def test_concurrent_callers_share_one_aggregation(self, static_provider, pool):
        slow = static_provider("slow", pool, delay=0.05)
        service = NewsService(NewsAggregatorService([slow]), cache=InMemoryResultCache())

        results = await asyncio.gather(*(service.search_news("election") for _ in range(10)))

        assert slow.calls == 1
        assert all(result == pool for result in results)
        assert service._inflight == {}

    @pytest.mark.asyncio
    async def test_cancelled_caller_does_not_cancel_shared_load(self, static_provider, pool):
        slow = static_provider("slow", pool, delay=0.05)
        service = NewsService(NewsAggregatorService([slow]), cache=InMemoryResultCache())

        doomed = asyncio.ensure_future(service.search_news("k"))
        survivor = asyncio.ensure_future(service.search_news("k"))
        await asyncio.sleep(0.01)
        doomed.cancel()

        assert await survivor == pool
        assert slow.calls == 1

    @pytest.mark.asyncio
    async def test_failed_load_with_no_waiters_is_logged(self, caplog):
        async def explode(spec):
            await asyncio.sleep(0.02)
            raise RuntimeError("aggregation blew up")

        aggregator = MagicMock()
        aggregator.aggregate_outcomes = explode
        service = NewsService(aggregator, cache=InMemoryResultCache())

        with caplog.at_level(logging.ERROR):
            doomed = asyncio.ensure_future(service.search_news("k"))
            await asyncio.sleep(0.005)
            doomed.cancel()
            await asyncio.sleep(0.05)

        assert doomed.cancelled()
        assert service._inflight == {}
        assert "aggregation blew up" in caplog.text


# ============================================================================
# CACHE FAILURE
# ============================================================================

class TestCacheFailure:

    @pytest.mark.asyncio
    async def test_cache_errors_degrade_to_direct_aggregation(self, provider, pool):
        broken = AsyncMock()
        broken.get = AsyncMock(side_effect=CacheError("redis down"))
        broken.put = AsyncMock(side_effect=CacheError("redis down"))
        service = NewsService(NewsAggregatorService([provider]), cache=broken)

        assert await service.search_news("x") == pool
        assert await service.search_news("x") == pool
        assert provider.calls == 2


# ============================================================================
# PER-USER VIEWS
# ============================================================================

class TestUserViews:

    @pytest.fixture
    def store(self):
        return InMemoryUserStore()

    @pytest.fixture
    def user_service(self, provider, store):
        return NewsService(
            NewsAggregatorService([provider]),
            cache=InMemoryResultCache(),
            store=store,
        )

    @pytest.mark.asyncio
    async def test_news_for_user_searches_preferences(self, user_service, provider, store):
        store.update_preferences("u1", ["tech", "science"])

        await user_service.get_news_for_user("u1")

        assert provider.queries[0].query == "tech OR science"

    @pytest.mark.asyncio
    async def test_read_articles_filtered_in_pool_order(self, user_service, store, pool):
        store.mark_article_read("u1", pool[2].id)
        store.mark_article_read("u1", pool[0].id)

        assert await user_service.get_read_articles("u1") == [pool[0], pool[2]]

    @pytest.mark.asyncio
    async def test_favorites_filtered(self, user_service, store, pool):
        store.mark_article_favorite("u1", pool[1].id)

        assert await user_service.get_favorite_articles("u1") == [pool[1]]

    @pytest.mark.asyncio
    async def test_empty_id_set_skips_aggregation(self, user_service, provider):
        assert await user_service.get_read_articles("nobody") == []
        assert await user_service.get_favorite_articles("nobody") == []
        assert provider.calls == 0

    @pytest.mark.asyncio
    async def test_articles_gone_from_pool_drop_out(self, user_service, store):
        store.mark_article_favorite("u1", "https://news.example.com/expired")

        assert await user_service.get_favorite_articles("u1") == []

    @pytest.mark.asyncio
    async def test_user_views_require_a_store(self, service):
        with pytest.raises(ConfigurationError):
            await service.get_read_articles("u1")
