# Article Store — per-user article history
"""
Persistence and history views for generated articles:
- store: SQLite-backed create/list/get/delete scoped to the owner
- query: search, type filter and sorting over a fetched collection
"""

from .models import SETTINGS_SCHEMA_VERSION, Article, ArticleSummary
from .query import SortField, SortOrder, filter_articles, query_articles, sort_articles
from .store import ArticleStore

__all__ = [
    "Article",
    "ArticleStore",
    "ArticleSummary",
    "SETTINGS_SCHEMA_VERSION",
    "SortField",
    "SortOrder",
    "filter_articles",
    "query_articles",
    "sort_articles",
]
