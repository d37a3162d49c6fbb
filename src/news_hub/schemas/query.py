# src/news_hub/schemas/query.py
"""
Query Schemas
The caller's intent and the query precedence every provider and the
cache key builder share.
"""

from enum import Enum
from typing import List, NamedTuple, Optional

from pydantic import BaseModel, ConfigDict, Field

PREFERENCE_SEPARATOR = " OR "


class QueryMode(str, Enum):
    """How a provider should be queried"""
    SEARCH = "search"
    TOP_HEADLINES = "top_headlines"


class EffectiveQuery(NamedTuple):
    mode: QueryMode
    query: str


def resolve_query(
    preferences: Optional[List[str]] = None,
    keyword: Optional[str] = None,
) -> EffectiveQuery:
    """
    Apply query precedence.

    1. A non-empty keyword searches for that keyword.
    2. Otherwise non-blank preferences search for them OR-joined, in order.
    3. Otherwise top headlines with no query string.

    Blank preferences are dropped, so [""] means top headlines.
    """
    if keyword:
        return EffectiveQuery(QueryMode.SEARCH, keyword)
    terms = [p for p in preferences or () if p and p.strip()]
    if terms:
        return EffectiveQuery(QueryMode.SEARCH, PREFERENCE_SEPARATOR.join(terms))
    return EffectiveQuery(QueryMode.TOP_HEADLINES, "")


class QuerySpec(BaseModel):
    """
    Input to aggregation.

    Example:
    {
        "preferences": ["tech", "science"],
        "keyword": null
    }
    """

    model_config = ConfigDict(frozen=True)

    preferences: Optional[List[str]] = Field(
        None,
        description="Ordered preference keywords, OR-joined when searching"
    )
    keyword: Optional[str] = Field(
        None,
        description="Explicit search keyword; takes precedence over preferences"
    )

    @classmethod
    def for_keyword(cls, keyword: Optional[str]) -> "QuerySpec":
        return cls(keyword=keyword)

    @classmethod
    def for_preferences(cls, preferences: Optional[List[str]]) -> "QuerySpec":
        return cls(preferences=list(preferences) if preferences is not None else None)

    def effective_query(self) -> EffectiveQuery:
        return resolve_query(self.preferences, self.keyword)
