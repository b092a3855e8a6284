"""SQLite-backed article store.

Every article is scoped to its owner: reads and deletes for an id that
belongs to someone else behave exactly like reads and deletes for an id
that does not exist.

Usage:
    store = ArticleStore()
    article = store.create(user_id, title, content, keywords, settings)
    store.list_by_owner(user_id)
"""

from __future__ import annotations

import json
import logging
import sqlite3
import uuid
from datetime import datetime, timezone
from typing import Callable

from pydantic import ValidationError

from src.article_writer.models import ArticleSettings
from src.common.database import get_connection, init_db
from src.common.errors import ArticleNotFoundError, PersistenceError

from .models import SETTINGS_SCHEMA_VERSION, Article

logger = logging.getLogger(__name__)

_SELECT_COLUMNS = (
    "id, user_id, title, content, keywords, settings, settings_version, "
    "created_at, updated_at"
)


def _upgrade_v0(data: dict, row: sqlite3.Row) -> dict:
    """v0 blobs held only the stylistic options; title and keywords lived in columns."""
    upgraded = dict(data)
    upgraded.setdefault("title", row["title"])
    upgraded.setdefault("keywords", row["keywords"])
    return upgraded


# version -> upgrade to version + 1
_SETTINGS_MIGRATIONS: dict[int, Callable[[dict, sqlite3.Row], dict]] = {
    0: _upgrade_v0,
}


def _now() -> datetime:
    return datetime.now(timezone.utc)


class ArticleStore:
    """Create, list, fetch and delete articles per owner."""

    def __init__(self, db_path: str | None = None):
        self.db_path = db_path
        try:
            init_db(db_path)
        except (sqlite3.Error, OSError) as e:
            logger.error("Could not initialize article database: %s", e)
            raise PersistenceError() from e

    def _connect(self) -> sqlite3.Connection:
        try:
            return get_connection(self.db_path)
        except (sqlite3.Error, OSError) as e:
            logger.error("Article database unreachable: %s", e)
            raise PersistenceError() from e

    # --- Writes ---

    def create(
        self,
        owner_id: str,
        title: str,
        content: str,
        keywords: str,
        settings: ArticleSettings,
    ) -> Article:
        """Insert a new article and return it.

        Raises:
            PersistenceError: If the owner or content is missing, or the
                database rejects the write.
        """
        if not owner_id or not owner_id.strip():
            raise PersistenceError("Invalid article owner.")
        if not content:
            raise PersistenceError("Cannot save an article without content.")

        now = _now()
        article = Article(
            id=uuid.uuid4().hex,
            user_id=owner_id,
            title=title,
            content=content,
            keywords=keywords,
            settings=settings,
            created_at=now,
            updated_at=now,
        )

        conn = self._connect()
        try:
            conn.execute(
                f"INSERT INTO articles ({_SELECT_COLUMNS}) VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?)",
                (
                    article.id,
                    article.user_id,
                    article.title,
                    article.content,
                    article.keywords,
                    json.dumps(settings.to_payload(), ensure_ascii=False),
                    SETTINGS_SCHEMA_VERSION,
                    article.created_at.isoformat(),
                    article.updated_at.isoformat(),
                ),
            )
            conn.commit()
        except sqlite3.IntegrityError as e:
            logger.error("Duplicate or invalid article row: %s", e)
            raise PersistenceError("Duplicate article detected.") from e
        except sqlite3.Error as e:
            logger.error("Failed to save article: %s", e)
            raise PersistenceError() from e
        finally:
            conn.close()

        logger.info("Article saved: %s (user %s)", article.id, owner_id)
        return article

    def delete_by_id(self, article_id: str, owner_id: str) -> None:
        """Hard-delete an article owned by owner_id.

        Raises:
            ArticleNotFoundError: If no such article belongs to owner_id.
        """
        conn = self._connect()
        try:
            cursor = conn.execute(
                "DELETE FROM articles WHERE id = ? AND user_id = ?",
                (article_id, owner_id),
            )
            deleted = cursor.rowcount
            conn.commit()
        except sqlite3.Error as e:
            logger.error("Failed to delete article %s: %s", article_id, e)
            raise PersistenceError("Failed to delete article") from e
        finally:
            conn.close()

        if deleted == 0:
            raise ArticleNotFoundError()
        logger.info("Article %s deleted by user %s", article_id, owner_id)

    # --- Reads ---

    def list_by_owner(self, owner_id: str) -> list[Article]:
        """All articles of owner_id, most recent first."""
        rows = self._fetch_all(
            f"SELECT {_SELECT_COLUMNS} FROM articles WHERE user_id = ? "
            "ORDER BY created_at DESC",
            (owner_id,),
        )
        articles = [self._row_to_article(row) for row in rows]
        logger.info("Retrieved %d articles for user %s", len(articles), owner_id)
        return articles

    def get_by_id(self, article_id: str, owner_id: str) -> Article:
        """Fetch one article owned by owner_id.

        Raises:
            ArticleNotFoundError: If missing or owned by another user.
        """
        rows = self._fetch_all(
            f"SELECT {_SELECT_COLUMNS} FROM articles WHERE id = ? AND user_id = ? LIMIT 1",
            (article_id, owner_id),
        )
        if not rows:
            raise ArticleNotFoundError()
        return self._row_to_article(rows[0])

    def count_by_owner(self, owner_id: str) -> int:
        rows = self._fetch_all(
            "SELECT COUNT(*) AS n FROM articles WHERE user_id = ?",
            (owner_id,),
        )
        return rows[0]["n"]

    def _fetch_all(self, sql: str, params: tuple) -> list[sqlite3.Row]:
        conn = self._connect()
        try:
            return conn.execute(sql, params).fetchall()
        except sqlite3.Error as e:
            logger.error("Article query failed: %s", e)
            raise PersistenceError("Failed to fetch articles") from e
        finally:
            conn.close()

    # --- Row mapping ---

    def _row_to_article(self, row: sqlite3.Row) -> Article:
        return Article(
            id=row["id"],
            user_id=row["user_id"],
            title=row["title"],
            content=row["content"],
            keywords=row["keywords"],
            settings=self._load_settings(row),
            created_at=datetime.fromisoformat(row["created_at"]),
            updated_at=datetime.fromisoformat(row["updated_at"]),
            settings_version=SETTINGS_SCHEMA_VERSION,
        )

    @staticmethod
    def _load_settings(row: sqlite3.Row) -> ArticleSettings:
        """Decode the settings blob, upgrading older schema versions."""
        version = row["settings_version"]
        if version > SETTINGS_SCHEMA_VERSION:
            logger.error("Article %s has unknown settings version %s", row["id"], version)
            raise PersistenceError("Unsupported article settings format.")

        try:
            data = json.loads(row["settings"])
            while version < SETTINGS_SCHEMA_VERSION:
                upgrade = _SETTINGS_MIGRATIONS.get(version)
                if upgrade is None:
                    raise PersistenceError("Unsupported article settings format.")
                data = upgrade(data, row)
                version += 1
            return ArticleSettings.model_validate(data)
        except (json.JSONDecodeError, ValidationError) as e:
            logger.error("Corrupt settings for article %s: %s", row["id"], e)
            raise PersistenceError("Unsupported article settings format.") from e
