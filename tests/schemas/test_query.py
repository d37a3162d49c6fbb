"""Unit tests for query precedence"""

from news_hub.schemas.query import QueryMode, QuerySpec, resolve_query


class TestQueryPrecedence:

    def test_keyword_takes_precedence_over_preferences(self):
        spec = QuerySpec(preferences=["tech", "science"], keyword="election")

        assert spec.effective_query() == (QueryMode.SEARCH, "election")

    def test_preferences_are_or_joined_in_order(self):
        spec = QuerySpec.for_preferences(["tech", "science"])

        mode, query = spec.effective_query()
        assert mode == QueryMode.SEARCH
        assert query == "tech OR science"

    def test_preference_order_is_preserved(self):
        assert resolve_query(["science", "tech"]).query == "science OR tech"

    def test_empty_keyword_falls_back_to_preferences(self):
        spec = QuerySpec(preferences=["sports"], keyword="")

        assert spec.effective_query() == (QueryMode.SEARCH, "sports")

    def test_nothing_selects_top_headlines(self):
        assert QuerySpec().effective_query() == (QueryMode.TOP_HEADLINES, "")
        assert QuerySpec(preferences=[], keyword="").effective_query().mode == QueryMode.TOP_HEADLINES
        assert QuerySpec.for_preferences(None).effective_query().mode == QueryMode.TOP_HEADLINES

    def test_for_preferences_copies_the_list(self):
        prefs = ["tech"]
        spec = QuerySpec.for_preferences(prefs)
        prefs.append("science")

        assert spec.preferences == ["tech"]
