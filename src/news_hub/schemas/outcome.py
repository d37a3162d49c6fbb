# src/news_hub/schemas/outcome.py
from typing import List, Optional

from pydantic import BaseModel, Field

from news_hub.schemas.article import Article


class ProviderOutcome(BaseModel):
    """
    Result of one provider fetch.

    Either a success carrying articles (possibly none) or a contained
    failure with ``error`` set and no articles. Never raised.
    """

    provider: str = Field(..., description="Provider identifier")
    articles: List[Article] = Field(default_factory=list)
    error: Optional[str] = Field(None, description="Failure description, None on success")
    elapsed_ms: int = Field(0, ge=0)

    @property
    def failed(self) -> bool:
        return self.error is not None

    @classmethod
    def success(cls, provider: str, articles: List[Article], elapsed_ms: int = 0) -> "ProviderOutcome":
        return cls(provider=provider, articles=articles, elapsed_ms=elapsed_ms)

    @classmethod
    def failure(cls, provider: str, error: str, elapsed_ms: int = 0) -> "ProviderOutcome":
        return cls(provider=provider, error=error, elapsed_ms=elapsed_ms)
