# Common utilities and shared modules
"""
Shared components used by the article writer and the article store:
- Project configuration
- Database utilities
- Logging configuration
- Language table
- Error taxonomy
"""

from .config import settings, PROJECT_ROOT, DATA_DIR
from .database import get_connection, init_db
from .errors import (
    ArticleEngineError,
    ArticleNotFoundError,
    GenerationError,
    GenerationErrorKind,
    PersistenceError,
    SettingsValidationError,
    UnauthorizedError,
)
from .languages import LANGUAGE_NAMES, language_name
from .logging import setup_logging

__all__ = [
    "settings",
    "PROJECT_ROOT",
    "DATA_DIR",
    "get_connection",
    "init_db",
    "setup_logging",
    "LANGUAGE_NAMES",
    "language_name",
    "ArticleEngineError",
    "ArticleNotFoundError",
    "GenerationError",
    "GenerationErrorKind",
    "PersistenceError",
    "SettingsValidationError",
    "UnauthorizedError",
]
