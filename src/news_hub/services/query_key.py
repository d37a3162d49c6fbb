from news_hub.schemas.query import QueryMode, QuerySpec

# Sentinel for top-headlines mode. Empty keywords and blank preferences
# resolve to top headlines, so no search query can produce this key.
TOP_HEADLINES_KEY = ""


class QueryKeyBuilder:
    """
    Canonical cache key for a QuerySpec.

    Search mode keys on the effective query string: the keyword verbatim,
    or the preferences OR-joined in list order. Two specs that resolve to
    the same effective query therefore share one cache entry.
    """

    def __init__(self, top_headlines_key: str = TOP_HEADLINES_KEY):
        self.top_headlines_key = top_headlines_key

    def key(self, spec: QuerySpec) -> str:
        mode, query = spec.effective_query()
        if mode == QueryMode.TOP_HEADLINES:
            return self.top_headlines_key
        return query
