"""Logging configuration for the article engine.

Modules log through ``logging.getLogger(__name__)``; all of them sit under
the ``src`` package logger, which ``setup_logging()`` gives a single
handler. Diagnostics go to stderr so CLI output on stdout stays clean.
"""

from __future__ import annotations

import logging
import sys
from typing import TextIO

from .config import settings

PACKAGE_LOGGER = "src"

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
LOG_DATEFMT = "%Y-%m-%d %H:%M:%S"


def setup_logging(
    level: int | str | None = None,
    module_name: str = PACKAGE_LOGGER,
    stream: TextIO | None = None,
) -> logging.Logger:
    """Configure and return a logger with consistent formatting.

    Args:
        level: Logging level; defaults to ``settings.log_level``.
        module_name: Logger to configure. The default covers every module
            of the engine.
        stream: Output stream (default stderr).

    Returns:
        Configured logger. Calling again for the same name returns it
        unchanged.
    """
    logger = logging.getLogger(module_name)

    if logger.handlers:
        return logger

    if level is None:
        level = settings.log_level.upper()
    logger.setLevel(level)

    handler = logging.StreamHandler(stream or sys.stderr)
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter(fmt=LOG_FORMAT, datefmt=LOG_DATEFMT))
    logger.addHandler(handler)

    return logger
