import asyncio
from typing import List, Optional, Sequence

from news_hub.providers.base_provider import BaseNewsProvider
from news_hub.schemas.article import Article
from news_hub.schemas.query import EffectiveQuery


MOCK_ARTICLES = (
    Article(
        id="https://example.com/tech-news-1",
        title="Tech News: AI Revolution",
        description="Artificial intelligence is transforming the world",
        url="https://example.com/tech-news-1",
        source="Example News",
        published_at="2024-01-01",
    ),
    Article(
        id="https://example.com/science-news-1",
        title="Science Discovery: New Planet Found",
        description="Scientists discover a new exoplanet",
        url="https://example.com/science-news-1",
        source="Example News",
        published_at="2024-01-02",
    ),
    Article(
        id="https://example.com/business-news-1",
        title="Business Update: Market Growth",
        description="Stock market shows positive growth",
        url="https://example.com/business-news-1",
        source="Example News",
        published_at="2024-01-03",
    ),
)


class MockNewsProvider(BaseNewsProvider):
    """
    Offline provider returning a fixed article set for every query.

    Used for deterministic tests and for local development without
    credentials. ``delay`` simulates upstream latency.
    """

    def __init__(
        self,
        articles: Optional[Sequence[Article]] = None,
        delay: float = 0.0,
        name: str = "mock",
    ):
        super().__init__()
        self._articles = tuple(MOCK_ARTICLES if articles is None else articles)
        self._delay = delay
        self._name = name
        self.calls = 0

    @property
    def provider_name(self) -> str:
        return self._name

    async def _fetch_articles(self, query: EffectiveQuery) -> List[Article]:
        self.calls += 1
        if self._delay:
            await asyncio.sleep(self._delay)
        return list(self._articles)
