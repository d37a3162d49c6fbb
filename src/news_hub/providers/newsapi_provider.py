# src/news_hub/providers/newsapi_provider.py
"""
NewsAPI Provider
Fetches news from NewsAPI.org v2

Endpoints:
- /everything     (keyword or OR-joined preferences, filtered by language)
- /top-headlines  (no query, filtered by country)
"""

from typing import Any, Dict, List, Optional, Tuple

import httpx

from news_hub.exceptions import ProviderError
from news_hub.providers.json_provider import JsonNewsProvider
from news_hub.schemas.article import Article
from news_hub.schemas.query import EffectiveQuery, QueryMode


class NewsAPIProvider(JsonNewsProvider):
    """NewsAPI.org provider implementation."""

    BASE_URL = "https://newsapi.org/v2"

    def __init__(
        self,
        api_key: str,
        language: str = "en",
        country: str = "us",
        base_url: str = BASE_URL,
        timeout: float = 10.0,
        client: Optional[httpx.AsyncClient] = None,
    ):
        super().__init__(api_key=api_key, base_url=base_url, timeout=timeout, client=client)
        self.language = language
        self.country = country

    @property
    def provider_name(self) -> str:
        return "newsapi"

    def _build_request(self, query: EffectiveQuery) -> Tuple[str, Dict[str, str]]:
        if query.mode == QueryMode.SEARCH:
            return "/everything", {
                "apiKey": self.api_key,
                "language": self.language,
                "q": query.query,
            }
        return "/top-headlines", {
            "apiKey": self.api_key,
            "country": self.country,
        }

    def _parse_articles(self, payload: Any) -> List[Article]:
        # NewsAPI reports some failures as {"status": "error", ...} bodies
        if isinstance(payload, dict) and payload.get("status") == "error":
            raise ProviderError(
                self.provider_name,
                f"{payload.get('code', 'error')}: {payload.get('message', '')}",
            )
        return super()._parse_articles(payload)
