"""Error taxonomy shared by the writer, the store and the service layer.

Every error carries a machine-checkable ``kind`` and a message that is
safe to show to an end user. The underlying SDK or database exception is
chained with ``raise ... from`` and only ever reaches the logs.
"""

from __future__ import annotations

from enum import Enum


class ArticleEngineError(Exception):
    """Base class for all article engine failures."""

    kind = "error"
    default_message = "Something went wrong. Please try again."

    def __init__(self, message: str | None = None) -> None:
        super().__init__(message or self.default_message)

    @property
    def message(self) -> str:
        return str(self)

    def to_dict(self) -> dict:
        return {"kind": self.kind, "error": self.message}


class SettingsValidationError(ArticleEngineError):
    """Article settings failed validation; nothing was generated."""

    kind = "validation"
    default_message = "Invalid request data"

    def __init__(self, details: list[dict] | None = None, message: str | None = None) -> None:
        super().__init__(message)
        self.details = details or []

    def to_dict(self) -> dict:
        data = super().to_dict()
        data["details"] = self.details
        return data


class UnauthorizedError(ArticleEngineError):
    """No authenticated user for the request."""

    kind = "unauthorized"
    default_message = "Unauthorized. Please sign in to manage articles."


class GenerationErrorKind(str, Enum):
    """Failure classes reported by the text generation service."""
    UNAUTHORIZED = "unauthorized"
    QUOTA_EXCEEDED = "quota_exceeded"
    INVALID_REQUEST = "invalid_request"
    EMPTY_OUTPUT = "empty_output"
    UNKNOWN = "unknown"


_GENERATION_MESSAGES = {
    GenerationErrorKind.UNAUTHORIZED: "AI service configuration error. Please contact support.",
    GenerationErrorKind.QUOTA_EXCEEDED: "AI service temporarily unavailable. Please try again later.",
    GenerationErrorKind.INVALID_REQUEST: "Invalid AI service request. Please try again.",
    GenerationErrorKind.EMPTY_OUTPUT: "Failed to generate article content. Please try again.",
    GenerationErrorKind.UNKNOWN: "Failed to generate article. Please try again.",
}

_GENERATION_PUBLIC_KINDS = {
    GenerationErrorKind.QUOTA_EXCEEDED: "generation-unavailable",
    GenerationErrorKind.INVALID_REQUEST: "generation-invalid",
}


class GenerationError(ArticleEngineError):
    """The text generation service did not produce a usable article."""

    def __init__(self, error_kind: GenerationErrorKind, message: str | None = None) -> None:
        self.error_kind = error_kind
        super().__init__(message or _GENERATION_MESSAGES[error_kind])

    @property
    def kind(self) -> str:  # type: ignore[override]
        return _GENERATION_PUBLIC_KINDS.get(self.error_kind, "generation-failed")

    @property
    def is_fatal(self) -> bool:
        """Credential problems will not go away by trying again."""
        return self.error_kind == GenerationErrorKind.UNAUTHORIZED


class PersistenceError(ArticleEngineError):
    """The article store is unreachable or rejected the write."""

    kind = "persistence-failure"
    default_message = "Failed to save article. Please try again."


class ArticleNotFoundError(ArticleEngineError):
    """Article is missing or belongs to another user."""

    kind = "not-found"
    default_message = "Article not found or you don't have permission to access it"
