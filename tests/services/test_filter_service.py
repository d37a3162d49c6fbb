"""Unit tests for ArticleFilterService"""

import pytest

from news_hub.services.filter_service import ArticleFilterService


@pytest.fixture
def articles(make_article):
    return [make_article(slug) for slug in ("a", "b", "c", "d")]


class TestArticleFilterService:

    def test_empty_ids_return_nothing(self, articles):
        assert ArticleFilterService().filter(articles, set()) == []

    def test_none_ids_return_nothing(self, articles):
        assert ArticleFilterService().filter(articles, None) == []

    def test_keeps_article_order_not_id_order(self, articles):
        ids = {articles[3].id, articles[0].id, articles[2].id}

        result = ArticleFilterService().filter(articles, ids)

        assert result == [articles[0], articles[2], articles[3]]

    def test_ids_missing_from_pool_are_ignored(self, articles):
        result = ArticleFilterService().filter(articles, {articles[1].id, "https://gone.example.com"})

        assert result == [articles[1]]

    def test_accepts_any_iterable_of_ids(self, articles):
        result = ArticleFilterService().filter(articles, [articles[1].id])

        assert result == [articles[1]]
