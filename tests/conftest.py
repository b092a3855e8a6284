"""Shared test fixtures for the article engine."""

import sys
from pathlib import Path

import pytest

# Ensure src is importable
PROJECT_ROOT = Path(__file__).parent.parent
sys.path.insert(0, str(PROJECT_ROOT))

from src.article_store.store import ArticleStore
from src.article_writer.models import ArticleSettings
from src.common.database import get_connection


@pytest.fixture
def project_root() -> Path:
    """Return the project root directory."""
    return PROJECT_ROOT


@pytest.fixture
def temp_db(tmp_path) -> str:
    """Path to a temporary SQLite database file."""
    return str(tmp_path / "test_articles.db")


@pytest.fixture
def store(temp_db) -> ArticleStore:
    """ArticleStore backed by a fresh temporary database."""
    return ArticleStore(temp_db)


@pytest.fixture
def db_conn(store, temp_db):
    """Raw connection to the store's database."""
    conn = get_connection(temp_db)
    yield conn
    conn.close()


@pytest.fixture
def settings_payload() -> dict:
    """Wire-format settings as the generator form submits them."""
    return {
        "title": "Best Coffee",
        "keywords": "coffee,brew",
        "articleType": "Listicle",
        "articleSize": "Small",
        "tone": "Friendly",
        "pointOfView": "None",
        "readability": "None",
        "aiCleaning": "No AI Words Removal",
        "structure": {
            "conclusion": True,
            "faqSection": False,
            "tables": False,
            "h3Headings": False,
            "lists": True,
            "italics": False,
            "bold": False,
            "quotes": False,
            "keyTakeaways": False,
        },
        "language": "en",
    }


@pytest.fixture
def coffee_settings(settings_payload) -> ArticleSettings:
    return ArticleSettings.model_validate(settings_payload)


@pytest.fixture
def minimal_settings() -> ArticleSettings:
    """Settings with every optional axis unset and no structure elements."""
    return ArticleSettings(title="Plain Article", keywords="plain")
