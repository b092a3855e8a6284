"""Search, filter and sort over an owner's already-fetched articles.

These functions never touch the store; they work on whatever sequence
they are given and return a new list.
"""

from __future__ import annotations

import locale
import unicodedata
from enum import Enum
from typing import Iterable

from .models import Article

ALL_TYPES = "all"


class SortField(str, Enum):
    """Sortable article attributes."""
    CREATED_AT = "createdAt"
    TITLE = "title"
    ARTICLE_SIZE = "articleSize"


class SortOrder(str, Enum):
    ASC = "asc"
    DESC = "desc"


# X-Small(1) < Small(2) < Medium(3) < Large(4)
SIZE_ORDER = {
    "X-Small": 1,
    "Small": 2,
    "Medium": 3,
    "Large": 4,
}


def matches_search(article: Article, search_term: str) -> bool:
    """Case-insensitive substring match on title or keywords."""
    term = search_term.lower()
    return term in article.title.lower() or term in article.keywords.lower()


def matches_type(article: Article, filter_type: str) -> bool:
    if filter_type == ALL_TYPES:
        return True
    return (article.article_type or "None") == filter_type


def filter_articles(
    articles: Iterable[Article],
    search_term: str = "",
    filter_type: str = ALL_TYPES,
) -> list[Article]:
    """Keep articles matching both the search term and the type filter."""
    return [
        a for a in articles
        if matches_search(a, search_term) and matches_type(a, filter_type)
    ]


def _fold(text: str) -> str:
    """Strip accents and case so "Éclair" collates next to "eclair"."""
    decomposed = unicodedata.normalize("NFKD", text)
    base = "".join(ch for ch in decomposed if not unicodedata.combining(ch))
    return base.casefold()


def _title_key(article: Article):
    # Base letters first, then accents and case, then the exact text
    title = article.title
    return (
        locale.strxfrm(_fold(title)),
        locale.strxfrm(unicodedata.normalize("NFKD", title).casefold()),
        title,
    )


_SORT_KEYS = {
    SortField.CREATED_AT: lambda a: a.created_at,
    SortField.TITLE: _title_key,
    SortField.ARTICLE_SIZE: lambda a: SIZE_ORDER.get(a.article_size, 0),
}


def sort_articles(
    articles: Iterable[Article],
    sort_field: SortField | str = SortField.CREATED_AT,
    sort_order: SortOrder | str = SortOrder.DESC,
) -> list[Article]:
    """Return articles sorted by the given field and direction."""
    key = _SORT_KEYS[SortField(sort_field)]
    return sorted(articles, key=key, reverse=SortOrder(sort_order) == SortOrder.DESC)


def query_articles(
    articles: Iterable[Article],
    search_term: str = "",
    filter_type: str = ALL_TYPES,
    sort_field: SortField | str = SortField.CREATED_AT,
    sort_order: SortOrder | str = SortOrder.DESC,
) -> list[Article]:
    """Filter, then sort."""
    return sort_articles(
        filter_articles(articles, search_term, filter_type),
        sort_field,
        sort_order,
    )
