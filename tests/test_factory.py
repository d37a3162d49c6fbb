"""Unit tests for create_news_service wiring and startup validation"""

import pytest

from news_hub.config import Settings
from news_hub.exceptions import ConfigurationError, NoProvidersConfiguredError
from news_hub.factory import build_cache, build_providers, create_news_service
from news_hub.providers.gnews_provider import GNewsProvider
from news_hub.providers.mock_provider import MockNewsProvider
from news_hub.providers.newsapi_provider import NewsAPIProvider
from news_hub.services.cache import InMemoryResultCache, RedisResultCache


def make_settings(**overrides) -> Settings:
    values = {
        "NEWS_PROVIDERS": "mock",
        "GNEWS_API_KEY": None,
        "NEWSAPI_API_KEY": None,
        "CACHE_BACKEND": "memory",
    }
    values.update(overrides)
    return Settings(**values)


class TestBuildProviders:

    def test_registration_order_follows_setting(self):
        settings = make_settings(
            NEWS_PROVIDERS="newsapi, gnews ,mock",
            GNEWS_API_KEY="g-key",
            NEWSAPI_API_KEY="n-key",
        )

        providers = build_providers(settings)

        assert [type(p) for p in providers] == [NewsAPIProvider, GNewsProvider, MockNewsProvider]

    def test_duplicate_names_register_once(self):
        assert len(build_providers(make_settings(NEWS_PROVIDERS="mock,mock"))) == 1

    def test_missing_api_key_is_fatal(self):
        with pytest.raises(ConfigurationError) as exc_info:
            build_providers(make_settings(NEWS_PROVIDERS="gnews"))

        assert exc_info.value.details["setting"] == "GNEWS_API_KEY"

    def test_blank_api_key_is_fatal(self):
        with pytest.raises(ConfigurationError):
            build_providers(make_settings(NEWS_PROVIDERS="newsapi", NEWSAPI_API_KEY="   "))

    def test_unknown_provider_is_fatal(self):
        with pytest.raises(ConfigurationError):
            build_providers(make_settings(NEWS_PROVIDERS="mock,bing"))

    def test_no_providers_is_fatal(self):
        with pytest.raises(NoProvidersConfiguredError):
            build_providers(make_settings(NEWS_PROVIDERS=" , "))


class TestBuildCache:

    def test_memory_backend(self):
        cache = build_cache(make_settings(CACHE_TTL_NEWS=30, CACHE_MAX_ENTRIES=5))

        assert isinstance(cache, InMemoryResultCache)
        assert cache.ttl_seconds == 30
        assert cache.max_size == 5

    def test_redis_backend(self):
        cache = build_cache(make_settings(CACHE_BACKEND="Redis", CACHE_KEY_PREFIX="n:"))

        assert isinstance(cache, RedisResultCache)
        assert cache.key_prefix == "n:"

    def test_none_backend(self):
        assert build_cache(make_settings(CACHE_BACKEND="none")) is None

    def test_unknown_backend_is_fatal(self):
        with pytest.raises(ConfigurationError):
            build_cache(make_settings(CACHE_BACKEND="memcached"))


class TestCreateNewsService:

    @pytest.mark.asyncio
    async def test_mock_service_serves_articles(self):
        service = create_news_service(make_settings())

        articles = await service.get_news()

        assert len(articles) == 3
        await service.close()

    def test_dedup_flag_enables_deduplication(self):
        service = create_news_service(make_settings(NEWS_DEDUPLICATE_URLS=True))

        assert service.aggregator.dedup_service is not None

    def test_timeout_is_passed_to_aggregator(self):
        service = create_news_service(make_settings(PROVIDER_TIMEOUT_SECONDS=2.5))

        assert service.aggregator.timeout == 2.5
