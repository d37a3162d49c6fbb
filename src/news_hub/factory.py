"""
Builds a NewsService from Settings.

Every configuration problem surfaces here, at startup, as a
ConfigurationError. Nothing in the request path validates configuration.
"""

import logging
from typing import List, Optional

from news_hub.config import SUPPORTED_CACHE_BACKENDS, SUPPORTED_PROVIDERS, Settings, get_settings
from news_hub.exceptions import ConfigurationError, NoProvidersConfiguredError
from news_hub.providers.base_provider import BaseNewsProvider
from news_hub.providers.gnews_provider import GNewsProvider
from news_hub.providers.mock_provider import MockNewsProvider
from news_hub.providers.newsapi_provider import NewsAPIProvider
from news_hub.services.aggregator_service import NewsAggregatorService
from news_hub.services.cache import InMemoryResultCache, RedisResultCache, ResultCache
from news_hub.services.deduplication import DeduplicationService
from news_hub.services.news_service import NewsService
from news_hub.stores.base import PreferenceStore

logger = logging.getLogger(__name__)


def _require(value: Optional[str], name: str, provider: str) -> str:
    if not value or not value.strip():
        raise ConfigurationError(
            f"{name} is required when the '{provider}' provider is enabled",
            {"setting": name, "provider": provider},
        )
    return value.strip()


def build_providers(settings: Settings) -> List[BaseNewsProvider]:
    """Providers in NEWS_PROVIDERS order."""
    providers: List[BaseNewsProvider] = []

    for name in settings.provider_names:
        if name == "gnews":
            providers.append(GNewsProvider(
                api_key=_require(settings.GNEWS_API_KEY, "GNEWS_API_KEY", name),
                language=settings.NEWS_LANGUAGE,
                base_url=settings.GNEWS_BASE_URL,
                timeout=settings.PROVIDER_TIMEOUT_SECONDS,
            ))
        elif name == "newsapi":
            providers.append(NewsAPIProvider(
                api_key=_require(settings.NEWSAPI_API_KEY, "NEWSAPI_API_KEY", name),
                language=settings.NEWS_LANGUAGE,
                country=settings.NEWSAPI_COUNTRY,
                base_url=settings.NEWSAPI_BASE_URL,
                timeout=settings.PROVIDER_TIMEOUT_SECONDS,
            ))
        elif name == "mock":
            providers.append(MockNewsProvider())
        else:
            raise ConfigurationError(
                f"Unknown news provider '{name}', expected one of {list(SUPPORTED_PROVIDERS)}",
                {"setting": "NEWS_PROVIDERS"},
            )

    if not providers:
        raise NoProvidersConfiguredError("NEWS_PROVIDERS does not enable any provider")
    return providers


def build_cache(settings: Settings) -> Optional[ResultCache]:
    backend = settings.CACHE_BACKEND
    if backend == "memory":
        return InMemoryResultCache(
            ttl_seconds=settings.CACHE_TTL_NEWS,
            max_size=settings.CACHE_MAX_ENTRIES,
        )
    if backend == "redis":
        return RedisResultCache.from_url(
            settings.redis_url,
            ttl_seconds=settings.CACHE_TTL_NEWS,
            key_prefix=settings.CACHE_KEY_PREFIX,
        )
    if backend == "none":
        return None
    raise ConfigurationError(
        f"Unknown cache backend '{backend}', expected one of {list(SUPPORTED_CACHE_BACKENDS)}",
        {"setting": "CACHE_BACKEND"},
    )


def create_news_service(
    settings: Optional[Settings] = None,
    store: Optional[PreferenceStore] = None,
) -> NewsService:
    """
    Wire providers, aggregator, cache and store.

    Raises:
        ConfigurationError: missing API key, unknown provider or cache backend
        NoProvidersConfiguredError: no provider enabled
    """
    settings = settings or get_settings()

    providers = build_providers(settings)
    cache = build_cache(settings)
    aggregator = NewsAggregatorService(
        providers,
        timeout=settings.PROVIDER_TIMEOUT_SECONDS,
        dedup_service=DeduplicationService() if settings.NEWS_DEDUPLICATE_URLS else None,
    )

    logger.info(
        f"NewsService ready: providers={settings.provider_names}, "
        f"cache={settings.CACHE_BACKEND}, ttl={settings.CACHE_TTL_NEWS}s"
    )
    return NewsService(aggregator, cache=cache, store=store)
