# src/news_hub/services/aggregator_service.py
"""
News Aggregator Service
Fans a query out to every registered provider and merges the results

Request -> Provider A ──┐
           Provider B ──┼→ join (registration order) → [Dedupe] → articles
           Provider N ──┘
"""

import asyncio
import time
from typing import List, Optional, Sequence

from news_hub.core.logging import LoggerMixin
from news_hub.exceptions import NoProvidersConfiguredError
from news_hub.providers.base_provider import BaseNewsProvider
from news_hub.schemas.article import Article
from news_hub.schemas.outcome import ProviderOutcome
from news_hub.schemas.query import QuerySpec
from news_hub.services.deduplication import DeduplicationService


class NewsAggregatorService(LoggerMixin):
    """
    Concurrent fan-out/fan-in over an immutable, ordered provider tuple.

    Output order is registration order, then each provider's response
    order, whatever order the network calls complete in. A provider that
    fails or exceeds ``timeout`` contributes nothing.
    """

    def __init__(
        self,
        providers: Sequence[BaseNewsProvider],
        timeout: Optional[float] = 10.0,
        dedup_service: Optional[DeduplicationService] = None,
    ):
        """
        Args:
            providers: Providers in registration order
            timeout: Per-provider bound in seconds, None for no bound
            dedup_service: Enables URL deduplication across providers when set

        Raises:
            NoProvidersConfiguredError: providers is empty
        """
        super().__init__()
        if not providers:
            raise NoProvidersConfiguredError()
        self.providers = tuple(providers)
        self.timeout = timeout
        self.dedup_service = dedup_service

        self.logger.info(
            f"[Aggregator] Initialized with providers="
            f"{[p.provider_name for p in self.providers]}, timeout={timeout}s, "
            f"dedup={'on' if dedup_service else 'off'}"
        )

    async def _fetch_from(self, provider: BaseNewsProvider, spec: QuerySpec) -> ProviderOutcome:
        start_time = time.time()
        try:
            if self.timeout is None:
                return await provider.fetch(spec)
            return await asyncio.wait_for(provider.fetch(spec), timeout=self.timeout)
        except asyncio.TimeoutError:
            elapsed_ms = int((time.time() - start_time) * 1000)
            self.logger.warning(
                f"[Aggregator] {provider.provider_name} timed out after {self.timeout}s"
            )
            return ProviderOutcome.failure(
                provider.provider_name, f"Timed out after {self.timeout}s", elapsed_ms
            )
        except Exception as e:
            # fetch() contains its own errors; this guards third-party providers
            elapsed_ms = int((time.time() - start_time) * 1000)
            self.logger.error(f"[Aggregator] {provider.provider_name} raised: {e}", exc_info=True)
            return ProviderOutcome.failure(provider.provider_name, str(e) or type(e).__name__, elapsed_ms)

    async def aggregate_outcomes(self, spec: QuerySpec) -> List[ProviderOutcome]:
        """Per-provider outcomes, positionally aligned with self.providers."""
        return list(await asyncio.gather(*(self._fetch_from(p, spec) for p in self.providers)))

    def merge(self, outcomes: Sequence[ProviderOutcome]) -> List[Article]:
        merged: List[Article] = []
        for outcome in outcomes:
            if not outcome.failed:
                merged.extend(outcome.articles)

        if self.dedup_service is not None:
            merged = self.dedup_service.deduplicate(merged)
        return merged

    async def aggregate(self, spec: QuerySpec) -> List[Article]:
        """
        Main aggregation method.

        Returns:
            Merged articles; empty when every provider failed
        """
        total_start = time.time()
        outcomes = await self.aggregate_outcomes(spec)
        articles = self.merge(outcomes)

        failed = [o.provider for o in outcomes if o.failed]
        if failed:
            self.logger.warning(f"[Aggregator] Providers failed: {failed}")

        self.logger.info(
            f"[Aggregator] Complete: {len(articles)} articles from "
            f"{len(outcomes) - len(failed)}/{len(outcomes)} providers "
            f"in {int((time.time() - total_start) * 1000)}ms"
        )
        return articles

    async def close(self):
        """Cleanup resources"""
        for provider in self.providers:
            await provider.aclose()
