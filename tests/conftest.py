"""
Shared fixtures for news_hub tests.

Providers here never touch the network.
"""

import asyncio
from typing import List, Optional, Sequence

import pytest

from news_hub.exceptions import ProviderError
from news_hub.providers.base_provider import BaseNewsProvider
from news_hub.schemas.article import Article
from news_hub.schemas.query import EffectiveQuery


class StaticProvider(BaseNewsProvider):
    """Returns fixed articles after an optional delay and records queries."""

    def __init__(self, name: str, articles: Sequence[Article] = (), delay: float = 0.0):
        super().__init__()
        self._name = name
        self._articles = list(articles)
        self._delay = delay
        self.queries: List[EffectiveQuery] = []

    @property
    def provider_name(self) -> str:
        return self._name

    @property
    def calls(self) -> int:
        return len(self.queries)

    async def _fetch_articles(self, query: EffectiveQuery) -> List[Article]:
        self.queries.append(query)
        if self._delay:
            await asyncio.sleep(self._delay)
        return list(self._articles)


class FailingProvider(StaticProvider):
    """Simulates an unreachable upstream."""

    async def _fetch_articles(self, query: EffectiveQuery) -> List[Article]:
        self.queries.append(query)
        raise ProviderError(self.provider_name, "upstream unavailable")


def build_article(slug: str, source: str = "Example", title: Optional[str] = None) -> Article:
    url = f"https://news.example.com/{slug}"
    return Article(
        id=url,
        title=title or f"Title {slug}",
        description=f"Description {slug}",
        url=url,
        source=source,
        published_at="2024-01-01T00:00:00Z",
    )


@pytest.fixture
def make_article():
    return build_article


@pytest.fixture
def static_provider():
    return StaticProvider


@pytest.fixture
def failing_provider():
    return FailingProvider
