import time
from abc import ABC, abstractmethod
from typing import List

from news_hub.core.logging import LoggerMixin
from news_hub.schemas.article import Article
from news_hub.schemas.outcome import ProviderOutcome
from news_hub.schemas.query import EffectiveQuery, QuerySpec


class BaseNewsProvider(LoggerMixin, ABC):
    """
    Abstract base class for news providers.

    Each provider must:
    1. Fetch news from its source for an effective query
    2. Convert the response to Article objects
    3. Raise on failure; fetch() contains the error

    fetch() never raises: any exception from _fetch_articles becomes a
    failed ProviderOutcome with no articles.
    """

    @property
    @abstractmethod
    def provider_name(self) -> str:
        """Return the provider identifier"""
        pass

    @abstractmethod
    async def _fetch_articles(self, query: EffectiveQuery) -> List[Article]:
        """
        Fetch news for an already resolved query.

        Args:
            query: Mode and query string produced by QuerySpec.effective_query()

        Returns:
            Articles in upstream response order
        """
        pass

    async def fetch(self, spec: QuerySpec) -> ProviderOutcome:
        query = spec.effective_query()
        self._log_fetch_start(query)
        start_time = time.time()

        try:
            articles = await self._fetch_articles(query)
        except Exception as e:
            elapsed_ms = int((time.time() - start_time) * 1000)
            self._log_fetch_error(query, f"{type(e).__name__}: {e}")
            return ProviderOutcome.failure(self.provider_name, str(e) or type(e).__name__, elapsed_ms)

        elapsed_ms = int((time.time() - start_time) * 1000)
        self._log_fetch_complete(query, len(articles), elapsed_ms)
        return ProviderOutcome.success(self.provider_name, articles, elapsed_ms)

    async def aclose(self) -> None:
        """Release network resources. No-op for providers without any."""
        return None

    def _log_fetch_start(self, query: EffectiveQuery):
        self.logger.debug(f"[{self.provider_name}] Fetching {query.mode.value} q={query.query!r}")

    def _log_fetch_complete(self, query: EffectiveQuery, count: int, time_ms: int):
        self.logger.info(f"[{self.provider_name}] Fetched {count} {query.mode.value} articles in {time_ms}ms")

    def _log_fetch_error(self, query: EffectiveQuery, error: str):
        self.logger.error(f"[{self.provider_name}] Error fetching {query.mode.value}: {error}")
