"""
Shared plumbing for providers that answer an HTTPS GET with a JSON
document holding an ``articles`` array:

{
    "articles": [
        {
            "url": "https://...",
            "title": "...",
            "description": "...",
            "source": {"name": "..."},
            "publishedAt": "2024-01-15T10:00:00Z"
        }
    ]
}
"""

from abc import abstractmethod
from typing import Any, Dict, List, Optional, Tuple

import httpx

from news_hub.exceptions import ProviderError
from news_hub.providers.base_provider import BaseNewsProvider
from news_hub.schemas.article import Article
from news_hub.schemas.query import EffectiveQuery


class JsonNewsProvider(BaseNewsProvider):
    """Base for JSON-over-HTTPS providers using one lazily created httpx client."""

    def __init__(
        self,
        api_key: str,
        base_url: str,
        timeout: float = 10.0,
        client: Optional[httpx.AsyncClient] = None,
    ):
        """
        Args:
            api_key: Provider API key, sent as a query parameter
            base_url: API root, without trailing slash
            timeout: Request timeout in seconds
            client: Pre-built client (tests pass one wired to httpx.MockTransport)
        """
        super().__init__()
        if not api_key:
            raise ValueError(f"{self.provider_name} API key is required")
        self.api_key = api_key
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self._client = client

    @abstractmethod
    def _build_request(self, query: EffectiveQuery) -> Tuple[str, Dict[str, str]]:
        """Return (path, query params) for the effective query."""
        pass

    def _get_client(self) -> httpx.AsyncClient:
        if self._client is None or self._client.is_closed:
            self._client = httpx.AsyncClient(timeout=self.timeout)
        return self._client

    async def aclose(self) -> None:
        if self._client and not self._client.is_closed:
            await self._client.aclose()

    async def _fetch_articles(self, query: EffectiveQuery) -> List[Article]:
        path, params = self._build_request(query)
        payload = await self._get_json(path, params)
        return self._parse_articles(payload)

    async def _get_json(self, path: str, params: Dict[str, str]) -> Any:
        # Error messages name the path only; the URL carries the API key.
        client = self._get_client()
        try:
            response = await client.get(f"{self.base_url}{path}", params=params)
            response.raise_for_status()
            return response.json()
        except httpx.HTTPStatusError as e:
            raise ProviderError(
                self.provider_name,
                f"HTTP {e.response.status_code} from {path}",
            ) from e
        except httpx.RequestError as e:
            raise ProviderError(
                self.provider_name,
                f"Request error on {path}: {type(e).__name__}",
            ) from e
        except ValueError as e:
            raise ProviderError(self.provider_name, f"Invalid JSON from {path}") from e

    def _parse_articles(self, payload: Any) -> List[Article]:
        if not isinstance(payload, dict):
            raise ProviderError(self.provider_name, "Response is not a JSON object")

        items = payload.get("articles")
        if not isinstance(items, list):
            return []

        return [self._convert_article(item) for item in items if isinstance(item, dict)]

    def _convert_article(self, item: Dict[str, Any]) -> Article:
        """Convert one upstream article; missing fields map to ""."""
        source = item.get("source")
        source_name = source.get("name") if isinstance(source, dict) else None
        url = item.get("url")

        return Article(
            id=url,
            title=item.get("title"),
            description=item.get("description"),
            url=url,
            source=source_name,
            published_at=item.get("publishedAt"),
        )
