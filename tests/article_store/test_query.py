"""Tests for history search, filter and sort."""

from __future__ import annotations

from datetime import datetime, timedelta, timezone

import pytest

from src.article_store.models import Article
from src.article_store.query import (
    ALL_TYPES,
    SortField,
    SortOrder,
    filter_articles,
    query_articles,
    sort_articles,
)
from src.article_writer.models import ArticleSettings

BASE_TIME = datetime(2025, 1, 1, tzinfo=timezone.utc)


def _article(
    title: str,
    keywords: str = "misc",
    article_type: str = "None",
    size: str = "Medium",
    days: int = 0,
    content: str = "Some body text",
    language: str = "en",
) -> Article:
    settings = ArticleSettings.model_validate({
        "title": title,
        "keywords": keywords,
        "articleType": article_type,
        "articleSize": size,
        "language": language,
    })
    created = BASE_TIME + timedelta(days=days)
    return Article(
        id=title.lower().replace(" ", "-"),
        user_id="alice",
        title=title,
        content=content,
        keywords=keywords,
        settings=settings,
        created_at=created,
        updated_at=created,
    )


@pytest.fixture
def history() -> list[Article]:
    return [
        _article("Coffee Brewing Guide", "coffee,brew", "How-to guide", "Large", days=0),
        _article("Banana Bread Recipe", "baking,banana", "Tutorial", "X-Small", days=2),
        _article("apple pie basics", "baking,apple", "None", "Medium", days=1),
    ]


class TestFilter:
    def test_search_title_case_insensitive(self, history):
        result = filter_articles(history, search_term="GUIDE")
        assert [a.title for a in result] == ["Coffee Brewing Guide"]

    def test_search_matches_keywords(self, history):
        result = filter_articles(history, search_term="baking")
        assert {a.title for a in result} == {"Banana Bread Recipe", "apple pie basics"}

    def test_empty_search_keeps_all(self, history):
        assert len(filter_articles(history)) == 3

    def test_no_matches(self, history):
        assert filter_articles(history, search_term="quantum") == []

    def test_type_filter(self, history):
        result = filter_articles(history, filter_type="Tutorial")
        assert [a.title for a in result] == ["Banana Bread Recipe"]

    def test_type_filter_unset(self, history):
        result = filter_articles(history, filter_type="None")
        assert [a.title for a in result] == ["apple pie basics"]

    def test_all_types(self, history):
        assert len(filter_articles(history, filter_type=ALL_TYPES)) == 3

    def test_search_and_type_combined(self, history):
        result = filter_articles(history, search_term="baking", filter_type="Tutorial")
        assert [a.title for a in result] == ["Banana Bread Recipe"]

    def test_input_not_mutated(self, history):
        before = list(history)
        filter_articles(history, search_term="coffee")
        sort_articles(history, SortField.TITLE, SortOrder.ASC)
        assert history == before


class TestSort:
    def test_size_ascending(self, history):
        result = sort_articles(history, SortField.ARTICLE_SIZE, SortOrder.ASC)
        assert [a.article_size for a in result] == ["X-Small", "Medium", "Large"]

    def test_size_descending(self, history):
        result = sort_articles(history, "articleSize", "desc")
        assert [a.article_size for a in result] == ["Large", "Medium", "X-Small"]

    def test_created_at_default_is_newest_first(self, history):
        result = sort_articles(history)
        assert [a.title for a in result] == [
            "Banana Bread Recipe", "apple pie basics", "Coffee Brewing Guide",
        ]

    def test_created_at_ascending(self, history):
        result = sort_articles(history, SortField.CREATED_AT, SortOrder.ASC)
        assert result[0].title == "Coffee Brewing Guide"

    def test_title_ignores_case(self, history):
        result = sort_articles(history, SortField.TITLE, SortOrder.ASC)
        assert [a.title for a in result] == [
            "apple pie basics", "Banana Bread Recipe", "Coffee Brewing Guide",
        ]

    def test_title_accents_sort_with_base_letter(self):
        articles = [_article("Zebra stripes"), _article("Éclair recipe"), _article("apple pie")]
        result = sort_articles(articles, SortField.TITLE, SortOrder.ASC)
        assert [a.title for a in result] == ["apple pie", "Éclair recipe", "Zebra stripes"]

    def test_title_accent_breaks_ties_after_base(self):
        articles = [_article("Résumé tips"), _article("Resume tips"), _article("resume tips")]
        result = sort_articles(articles, SortField.TITLE, SortOrder.ASC)
        assert [a.title for a in result][-1] == "Résumé tips"

    def test_unknown_field_rejected(self, history):
        with pytest.raises(ValueError):
            sort_articles(history, "wordCount")


class TestQuery:
    def test_filter_then_sort(self, history):
        result = query_articles(
            history, search_term="baking",
            sort_field=SortField.ARTICLE_SIZE, sort_order=SortOrder.DESC,
        )
        assert [a.title for a in result] == ["apple pie basics", "Banana Bread Recipe"]


class TestSummary:
    def test_summary_fields(self):
        article = _article(
            "Best Coffee", "coffee", "Listicle", "Small",
            content="one two  three\nfour", language="ko",
        )
        summary = article.to_summary()
        assert summary.word_count == 4
        assert summary.language_name == "Korean"
        assert summary.to_dict()["articleType"] == "Listicle"

    def test_unset_type_serialized_as_none_string(self):
        assert _article("Plain").to_summary().to_dict()["articleType"] == "None"

    def test_unknown_language_shows_code(self):
        assert _article("Plain", language="tlh").language_name == "tlh"

    def test_export_filename(self):
        assert _article("Best Coffee: 2025 Guide!").export_filename == "best_coffee__2025_guide_.txt"

    def test_keyword_list(self):
        assert _article("K", keywords="coffee, brew,,beans ").keyword_list == ["coffee", "brew", "beans"]
