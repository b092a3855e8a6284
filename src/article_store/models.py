"""Data models for the article store."""

from __future__ import annotations

import re
from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from src.article_writer.models import ArticleSettings
from src.common.languages import language_name

# Version tag written next to every settings blob
SETTINGS_SCHEMA_VERSION = 1


@dataclass
class Article:
    """A generated article owned by one user."""

    id: str
    user_id: str
    title: str
    content: str
    keywords: str
    settings: ArticleSettings
    created_at: datetime
    updated_at: datetime
    settings_version: int = SETTINGS_SCHEMA_VERSION

    @property
    def article_type(self) -> Optional[str]:
        article_type = self.settings.article_type
        return article_type.value if article_type else None

    @property
    def article_size(self) -> str:
        return self.settings.article_size.value

    @property
    def language_name(self) -> str:
        return language_name(self.settings.language, default=None)

    @property
    def word_count(self) -> int:
        return len(self.content.split())

    @property
    def keyword_list(self) -> list[str]:
        return [k.strip() for k in self.keywords.split(",") if k.strip()]

    @property
    def export_filename(self) -> str:
        """Plain-text download name derived from the title."""
        return re.sub(r"[^a-z0-9]", "_", self.title, flags=re.IGNORECASE).lower() + ".txt"

    def to_summary(self) -> ArticleSummary:
        return ArticleSummary(
            id=self.id,
            title=self.title,
            keywords=self.keywords,
            article_type=self.article_type,
            article_size=self.article_size,
            language=self.settings.language,
            language_name=self.language_name,
            word_count=self.word_count,
            created_at=self.created_at,
        )

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "userId": self.user_id,
            "title": self.title,
            "content": self.content,
            "keywords": self.keywords,
            "settings": self.settings.to_payload(),
            "createdAt": self.created_at.isoformat(),
            "updatedAt": self.updated_at.isoformat(),
        }


@dataclass
class ArticleSummary:
    """History-list view of an article."""

    id: str
    title: str
    keywords: str
    article_type: Optional[str]
    article_size: str
    language: str
    language_name: str
    word_count: int
    created_at: datetime

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "title": self.title,
            "keywords": self.keywords,
            "articleType": self.article_type or "None",
            "articleSize": self.article_size,
            "language": self.language,
            "languageName": self.language_name,
            "wordCount": self.word_count,
            "createdAt": self.created_at.isoformat(),
        }
