"""Logging setup for the ``lazycomic`` logger tree.

The viewer owns the terminal while it runs, so records go to a file when
one is given. Without a file only warnings and errors reach stderr, and
none while the viewer screen is up.
"""

from __future__ import annotations

import contextlib
import logging
import os
import sys
from collections.abc import Iterator
from pathlib import Path

LOGGER_NAME = "lazycomic"
LOG_LEVEL_ENV = "LAZYCOMIC_LOG_LEVEL"
LOG_FORMAT = "[%(asctime)s] %(levelname)s %(name)s: %(message)s"
LOG_DATE_FORMAT = "%H:%M:%S"

_LEVELS = {
    "debug": logging.DEBUG,
    "info": logging.INFO,
    "warning": logging.WARNING,
    "error": logging.ERROR,
    "critical": logging.CRITICAL,
}


def resolve_level(name: str | None, default: int = logging.WARNING) -> int:
    """Map a level name to a ``logging`` constant, falling back to ``default``."""
    if not name:
        return default
    return _LEVELS.get(name.strip().lower(), default)


def setup_logger(level_name: str | None = None, log_file: Path | None = None) -> logging.Logger:
    """Configure the project logger; safe to call more than once.

    ``level_name`` wins over the ``LAZYCOMIC_LOG_LEVEL`` environment variable.
    Existing handlers installed by an earlier call are replaced.
    """
    logger = logging.getLogger(LOGGER_NAME)
    level = resolve_level(level_name or os.getenv(LOG_LEVEL_ENV))

    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    handler: logging.Handler
    if log_file is not None:
        handler = logging.FileHandler(log_file, encoding="utf-8")
        handler.setLevel(level)
    else:
        handler = logging.StreamHandler(stream=sys.stderr)
        handler.setLevel(max(level, logging.WARNING))
    handler.setFormatter(logging.Formatter(fmt=LOG_FORMAT, datefmt=LOG_DATE_FORMAT))
    logger.addHandler(handler)
    logger.setLevel(level)
    logger.propagate = False
    return logger


@contextlib.contextmanager
def console_muted(name: str = LOGGER_NAME) -> Iterator[None]:
    """Silence console handlers while the viewer draws on the terminal.

    File handlers keep recording; console levels are restored on exit.
    """
    logger = logging.getLogger(name)
    muted: list[tuple[logging.Handler, int]] = []
    for handler in logger.handlers:
        if isinstance(handler, logging.StreamHandler) and not isinstance(handler, logging.FileHandler):
            muted.append((handler, handler.level))
            handler.setLevel(logging.CRITICAL + 1)
    try:
        yield
    finally:
        for handler, level in muted:
            handler.setLevel(level)
