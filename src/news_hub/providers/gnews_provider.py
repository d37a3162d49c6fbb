# src/news_hub/providers/gnews_provider.py
"""
GNews Provider
Fetches news from the GNews v4 API

Endpoints:
- /search         (keyword or OR-joined preferences)
- /top-headlines  (no query)
"""

from typing import Dict, Optional, Tuple

import httpx

from news_hub.providers.json_provider import JsonNewsProvider
from news_hub.schemas.query import EffectiveQuery, QueryMode


class GNewsProvider(JsonNewsProvider):
    """GNews provider implementation."""

    BASE_URL = "https://gnews.io/api/v4"

    ENDPOINTS = {
        QueryMode.SEARCH: "/search",
        QueryMode.TOP_HEADLINES: "/top-headlines",
    }

    def __init__(
        self,
        api_key: str,
        language: str = "en",
        base_url: str = BASE_URL,
        timeout: float = 10.0,
        client: Optional[httpx.AsyncClient] = None,
    ):
        super().__init__(api_key=api_key, base_url=base_url, timeout=timeout, client=client)
        self.language = language

    @property
    def provider_name(self) -> str:
        return "gnews"

    def _build_request(self, query: EffectiveQuery) -> Tuple[str, Dict[str, str]]:
        params = {
            "token": self.api_key,
            "lang": self.language,
        }
        if query.query:
            params["q"] = query.query
        return self.ENDPOINTS[query.mode], params
