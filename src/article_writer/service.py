"""Article service — the request/response surface of the article engine.

Each operation takes the caller's resolved ``UserContext``. Callers that are
not authenticated are rejected before any validation, generation or
storage work happens.

Usage:
    service = ArticleService()
    user = UserContext(user_id="user-123", is_authenticated=True)
    result = service.generate(user, {"title": "...", "keywords": "...", ...})
    service.list_articles(user, search_term="coffee")
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Mapping, Optional

from pydantic import ValidationError

from src.article_store.models import Article, ArticleSummary
from src.article_store.query import ALL_TYPES, SortField, SortOrder, query_articles
from src.article_store.store import ArticleStore
from src.common.errors import PersistenceError, SettingsValidationError, UnauthorizedError

from .invoker import GenerationInvoker
from .models import ArticleSettings
from .prompts import compile_prompt

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class UserContext:
    """Authentication fact resolved for the current request."""
    user_id: Optional[str] = None
    is_authenticated: bool = False


@dataclass
class GeneratedArticle:
    """Successful generate() response."""
    article_id: str
    title: str
    content: str
    settings: ArticleSettings

    def to_dict(self) -> dict:
        return {
            "success": True,
            "articleId": self.article_id,
            "title": self.title,
            "content": self.content,
            "settings": self.settings.to_payload(),
        }


def parse_settings(payload: ArticleSettings | Mapping[str, Any]) -> ArticleSettings:
    """Validate a request payload into ArticleSettings.

    Raises:
        SettingsValidationError: With one {"field", "message"} entry per problem.
    """
    if isinstance(payload, ArticleSettings):
        return payload
    try:
        return ArticleSettings.model_validate(payload)
    except ValidationError as e:
        details = [
            {
                "field": ".".join(str(part) for part in err["loc"]),
                "message": err["msg"],
            }
            for err in e.errors()
        ]
        raise SettingsValidationError(details) from e


class ArticleService:
    """Generates, lists, fetches and deletes articles for a signed-in user."""

    def __init__(
        self,
        store: ArticleStore | None = None,
        invoker: GenerationInvoker | None = None,
    ):
        self._store = store
        self._invoker = invoker

    @property
    def store(self) -> ArticleStore:
        if self._store is None:
            self._store = ArticleStore()
        return self._store

    @property
    def invoker(self) -> GenerationInvoker:
        if self._invoker is None:
            self._invoker = GenerationInvoker()
        return self._invoker

    @staticmethod
    def _require_user(user: UserContext | None) -> str:
        if user is None or not user.is_authenticated or not user.user_id:
            raise UnauthorizedError()
        return user.user_id

    def generate(
        self,
        user: UserContext | None,
        payload: ArticleSettings | Mapping[str, Any],
    ) -> GeneratedArticle:
        """Generate an article and save it to the user's history.

        The operation only succeeds if both generation and persistence
        succeed; content generated for a failed save is discarded.

        Raises:
            UnauthorizedError, SettingsValidationError, GenerationError,
            PersistenceError
        """
        user_id = self._require_user(user)
        settings = parse_settings(payload)

        logger.info(
            "Generating article: title=%r user=%s size=%s language=%s",
            settings.title, user_id, settings.article_size.value, settings.language,
        )

        compiled = compile_prompt(settings)
        content = self.invoker.invoke(compiled.text, compiled.token_budget)

        try:
            article = self.store.create(
                owner_id=user_id,
                title=settings.title,
                content=content,
                keywords=settings.keywords,
                settings=settings,
            )
        except PersistenceError:
            logger.warning(
                "Discarding %d generated characters for user %s: save failed",
                len(content), user_id,
            )
            raise

        return GeneratedArticle(
            article_id=article.id,
            title=article.title,
            content=article.content,
            settings=article.settings,
        )

    def list_articles(
        self,
        user: UserContext | None,
        search_term: str = "",
        filter_type: str = ALL_TYPES,
        sort_field: SortField | str = SortField.CREATED_AT,
        sort_order: SortOrder | str = SortOrder.DESC,
    ) -> list[ArticleSummary]:
        """History view of the user's articles."""
        user_id = self._require_user(user)
        articles = self.store.list_by_owner(user_id)
        selected = query_articles(articles, search_term, filter_type, sort_field, sort_order)
        return [a.to_summary() for a in selected]

    def get_article(self, user: UserContext | None, article_id: str) -> Article:
        user_id = self._require_user(user)
        article = self.store.get_by_id(article_id, user_id)
        logger.info("Article %s accessed by user %s", article_id, user_id)
        return article

    def delete_article(self, user: UserContext | None, article_id: str) -> None:
        user_id = self._require_user(user)
        self.store.delete_by_id(article_id, user_id)
