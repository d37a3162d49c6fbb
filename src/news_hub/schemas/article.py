# src/news_hub/schemas/article.py
"""
Article Schema
Normalized format that every provider converts to
"""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator


class Article(BaseModel):
    """
    Normalized unit of news content.

    Every field is a string and defaults to "" so an Article is always fully
    populated, however sparse the upstream payload was. The upstream article
    URL doubles as ``id``. ``published_at`` keeps the provider-native
    timestamp text and serializes as ``publishedAt``.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    id: str = Field("", description="Stable identifier (the article URL)")
    title: str = Field("", description="Headline")
    description: str = Field("", description="Summary/snippet")
    url: str = Field("", description="Canonical link to the full article")
    source: str = Field("", description="Publisher name")
    published_at: str = Field("", alias="publishedAt", description="Provider-native timestamp")

    @field_validator("*", mode="before")
    @classmethod
    def _coerce_to_text(cls, value: Any) -> str:
        """None and structured values become "", other scalars their str()."""
        if value is None or isinstance(value, (dict, list, tuple, set)):
            return ""
        if isinstance(value, str):
            return value
        return str(value)
