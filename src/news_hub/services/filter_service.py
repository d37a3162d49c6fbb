from typing import AbstractSet, Iterable, List, Optional

from news_hub.schemas.article import Article


class ArticleFilterService:
    """Materializes read/favorite lists from a fetched article pool."""

    def filter(
        self,
        articles: Iterable[Article],
        ids: Optional[Iterable[str]],
    ) -> List[Article]:
        """
        Return the articles whose id is in ``ids``, keeping their order.

        A missing or empty ID collection yields no matches.
        """
        if not ids:
            return []
        wanted: AbstractSet[str] = ids if isinstance(ids, (set, frozenset)) else set(ids)
        return [article for article in articles if article.id in wanted]
