from typing import List, Protocol, Set, runtime_checkable


@runtime_checkable
class PreferenceStore(Protocol):
    """
    Read-only view of the persistence layer used by NewsService.

    Implementations return empty collections for users without data.
    """

    def get_preferences(self, user_id: str) -> List[str]:
        ...

    def get_read_article_ids(self, user_id: str) -> Set[str]:
        ...

    def get_favorite_article_ids(self, user_id: str) -> Set[str]:
        ...
