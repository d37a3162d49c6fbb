# src/news_hub/services/deduplication.py
"""
Deduplication Service
Removes articles whose URL was already seen earlier in the merged list
"""

import logging
from typing import Iterable, List, Set

from news_hub.schemas.article import Article

logger = logging.getLogger(__name__)


class DeduplicationService:
    """
    URL based deduplication, first occurrence wins.

    Articles without a URL are never treated as duplicates of each other.
    """

    @staticmethod
    def _url_key(article: Article) -> str:
        return (article.url or article.id).strip()

    def deduplicate(self, articles: Iterable[Article]) -> List[Article]:
        seen: Set[str] = set()
        unique: List[Article] = []
        total = 0

        for article in articles:
            total += 1
            key = self._url_key(article)
            if key:
                if key in seen:
                    continue
                seen.add(key)
            unique.append(article)

        if total != len(unique):
            logger.info(f"[Dedup] {total} -> {len(unique)} articles")
        return unique
