"""Tests for ArticleService — auth gate, validation, generate/save ordering."""

from datetime import datetime, timezone
from unittest.mock import MagicMock

import pytest

from src.article_store.models import Article
from src.article_store.store import ArticleStore
from src.article_writer.invoker import GenerationInvoker
from src.article_writer.models import ArticleSettings
from src.article_writer.service import ArticleService, UserContext, parse_settings
from src.common.errors import (
    ArticleNotFoundError,
    GenerationError,
    GenerationErrorKind,
    PersistenceError,
    SettingsValidationError,
    UnauthorizedError,
)

ALICE = UserContext(user_id="alice", is_authenticated=True)


def _article(settings: ArticleSettings, content: str = "# Best Coffee\nBody") -> Article:
    now = datetime(2025, 1, 1, tzinfo=timezone.utc)
    return Article(
        id="a1",
        user_id="alice",
        title=settings.title,
        content=content,
        keywords=settings.keywords,
        settings=settings,
        created_at=now,
        updated_at=now,
    )


@pytest.fixture
def mock_store():
    return MagicMock(spec=ArticleStore)


@pytest.fixture
def mock_invoker():
    invoker = MagicMock(spec=GenerationInvoker)
    invoker.invoke.return_value = "# Best Coffee\nBody"
    return invoker


@pytest.fixture
def service(mock_store, mock_invoker):
    return ArticleService(store=mock_store, invoker=mock_invoker)


# === Test: Authentication gate ===


class TestAuthGate:
    @pytest.mark.parametrize("user", [
        None,
        UserContext(),
        UserContext(user_id="alice", is_authenticated=False),
        UserContext(user_id="", is_authenticated=True),
    ])
    def test_generate_rejected_before_any_work(self, service, mock_store, mock_invoker, user):
        with pytest.raises(UnauthorizedError):
            service.generate(user, {"title": ""})
        assert mock_invoker.invoke.call_count == 0
        assert mock_store.create.call_count == 0

    def test_list_rejected(self, service, mock_store):
        with pytest.raises(UnauthorizedError):
            service.list_articles(UserContext())
        mock_store.list_by_owner.assert_not_called()

    def test_get_rejected(self, service, mock_store):
        with pytest.raises(UnauthorizedError):
            service.get_article(None, "a1")
        mock_store.get_by_id.assert_not_called()

    def test_delete_rejected(self, service, mock_store):
        with pytest.raises(UnauthorizedError):
            service.delete_article(UserContext(), "a1")
        mock_store.delete_by_id.assert_not_called()


# === Test: Validation ===


class TestParseSettings:
    def test_passes_through_model(self, coffee_settings):
        assert parse_settings(coffee_settings) is coffee_settings

    def test_details_name_fields(self, settings_payload):
        settings_payload["title"] = ""
        settings_payload["tone"] = "Sarcastic"
        with pytest.raises(SettingsValidationError) as exc_info:
            parse_settings(settings_payload)
        fields = {d["field"] for d in exc_info.value.details}
        assert "title" in fields
        assert "tone" in fields

    def test_invalid_payload_skips_generation(self, service, mock_invoker, settings_payload):
        settings_payload["articleSize"] = "Huge"
        with pytest.raises(SettingsValidationError):
            service.generate(ALICE, settings_payload)
        mock_invoker.invoke.assert_not_called()


# === Test: Generate ===


class TestGenerate:
    def test_success(self, service, mock_store, mock_invoker, settings_payload, coffee_settings):
        mock_store.create.return_value = _article(coffee_settings)

        result = service.generate(ALICE, settings_payload)

        assert result.article_id == "a1"
        assert result.title == "Best Coffee"
        assert result.content == "# Best Coffee\nBody"
        assert result.settings == coffee_settings

        prompt, budget = mock_invoker.invoke.call_args.args
        assert "TITLE: Best Coffee" in prompt
        assert budget == 4000

        kwargs = mock_store.create.call_args.kwargs
        assert kwargs["owner_id"] == "alice"
        assert kwargs["content"] == "# Best Coffee\nBody"
        assert kwargs["keywords"] == "coffee,brew"

    def test_response_dict(self, service, mock_store, settings_payload, coffee_settings):
        mock_store.create.return_value = _article(coffee_settings)
        data = service.generate(ALICE, settings_payload).to_dict()
        assert data["success"] is True
        assert data["articleId"] == "a1"
        assert data["settings"]["tone"] == "Friendly"
        assert data["settings"]["pointOfView"] == "None"

    def test_generation_failure_saves_nothing(self, service, mock_store, mock_invoker, coffee_settings):
        mock_invoker.invoke.side_effect = GenerationError(GenerationErrorKind.QUOTA_EXCEEDED)

        with pytest.raises(GenerationError) as exc_info:
            service.generate(ALICE, coffee_settings)

        assert exc_info.value.kind == "generation-unavailable"
        mock_store.create.assert_not_called()

    def test_persistence_failure_is_reported(self, service, mock_store, mock_invoker, coffee_settings):
        mock_store.create.side_effect = PersistenceError()

        with pytest.raises(PersistenceError):
            service.generate(ALICE, coffee_settings)

        mock_invoker.invoke.assert_called_once()


# === Test: History operations ===


class TestHistory:
    def test_list_filters_and_sorts(self, service, mock_store, coffee_settings, minimal_settings):
        mock_store.list_by_owner.return_value = [
            _article(coffee_settings),
            _article(minimal_settings, content="one two three"),
        ]

        summaries = service.list_articles(ALICE, search_term="coffee")

        mock_store.list_by_owner.assert_called_once_with("alice")
        assert [s.title for s in summaries] == ["Best Coffee"]

    def test_get_scoped_to_user(self, service, mock_store, coffee_settings):
        mock_store.get_by_id.return_value = _article(coffee_settings)
        article = service.get_article(ALICE, "a1")
        mock_store.get_by_id.assert_called_once_with("a1", "alice")
        assert article.title == "Best Coffee"

    def test_get_missing_propagates(self, service, mock_store):
        mock_store.get_by_id.side_effect = ArticleNotFoundError()
        with pytest.raises(ArticleNotFoundError):
            service.get_article(ALICE, "nope")

    def test_delete(self, service, mock_store):
        service.delete_article(ALICE, "a1")
        mock_store.delete_by_id.assert_called_once_with("a1", "alice")
