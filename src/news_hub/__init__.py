"""
Request -> QueryKeyBuilder -> ResultCache ──hit──────────────────────→ Response
                                   └─miss→ GNews   ──┐
                                           NewsAPI ──┼→ Merge → Cache → Response
                                           Mock    ──┘
"""
from news_hub.schemas.article import Article
from news_hub.schemas.outcome import ProviderOutcome
from news_hub.schemas.query import EffectiveQuery, QueryMode, QuerySpec, resolve_query

from news_hub.services.aggregator_service import NewsAggregatorService
from news_hub.services.cache import InMemoryResultCache, RedisResultCache, ResultCache
from news_hub.services.deduplication import DeduplicationService
from news_hub.services.filter_service import ArticleFilterService
from news_hub.services.news_service import NewsService
from news_hub.services.query_key import TOP_HEADLINES_KEY, QueryKeyBuilder

from news_hub.providers.base_provider import BaseNewsProvider
from news_hub.providers.gnews_provider import GNewsProvider
from news_hub.providers.mock_provider import MockNewsProvider
from news_hub.providers.newsapi_provider import NewsAPIProvider

from news_hub.stores.base import PreferenceStore
from news_hub.stores.memory_store import InMemoryUserStore

from news_hub.exceptions import (
    CacheError,
    ConfigurationError,
    NewsHubError,
    NoProvidersConfiguredError,
    ProviderError,
)
from news_hub.factory import create_news_service

__version__ = "1.0.0"
__all__ = [
    # Schemas
    "Article",
    "ProviderOutcome",
    "QuerySpec",
    "QueryMode",
    "EffectiveQuery",
    "resolve_query",
    # Services
    "NewsAggregatorService",
    "NewsService",
    "ResultCache",
    "InMemoryResultCache",
    "RedisResultCache",
    "DeduplicationService",
    "ArticleFilterService",
    "QueryKeyBuilder",
    "TOP_HEADLINES_KEY",
    # Providers
    "BaseNewsProvider",
    "GNewsProvider",
    "NewsAPIProvider",
    "MockNewsProvider",
    # Stores
    "PreferenceStore",
    "InMemoryUserStore",
    # Errors
    "NewsHubError",
    "ConfigurationError",
    "NoProvidersConfiguredError",
    "ProviderError",
    "CacheError",
    # Wiring
    "create_news_service",
]
