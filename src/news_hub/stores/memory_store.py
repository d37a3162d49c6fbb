import threading
from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Set


@dataclass
class UserRecord:
    """Per-user preference list and article ID sets"""
    preferences: List[str] = field(default_factory=list)
    read_article_ids: Set[str] = field(default_factory=set)
    favorite_article_ids: Set[str] = field(default_factory=set)


class InMemoryUserStore:
    """
    Process-local PreferenceStore for local development and tests.

    Marking an article read or favorite is a set insert, so repeating it
    has no further effect.
    """

    def __init__(self):
        self._users: Dict[str, UserRecord] = {}
        self._lock = threading.Lock()

    def _record(self, user_id: str) -> UserRecord:
        record = self._users.get(user_id)
        if record is None:
            record = self._users[user_id] = UserRecord()
        return record

    def get_preferences(self, user_id: str) -> List[str]:
        with self._lock:
            record = self._users.get(user_id)
            return list(record.preferences) if record else []

    def update_preferences(self, user_id: str, preferences: Iterable[str]) -> List[str]:
        with self._lock:
            record = self._record(user_id)
            record.preferences = list(preferences)
            return list(record.preferences)

    def get_read_article_ids(self, user_id: str) -> Set[str]:
        with self._lock:
            record = self._users.get(user_id)
            return set(record.read_article_ids) if record else set()

    def get_favorite_article_ids(self, user_id: str) -> Set[str]:
        with self._lock:
            record = self._users.get(user_id)
            return set(record.favorite_article_ids) if record else set()

    def mark_article_read(self, user_id: str, article_id: str) -> bool:
        """Returns True when the ID was not already marked."""
        with self._lock:
            ids = self._record(user_id).read_article_ids
            added = article_id not in ids
            ids.add(article_id)
            return added

    def mark_article_favorite(self, user_id: str, article_id: str) -> bool:
        """Returns True when the ID was not already marked."""
        with self._lock:
            ids = self._record(user_id).favorite_article_ids
            added = article_id not in ids
            ids.add(article_id)
            return added
