"""Package-wide logging setup.

Every module logger lives under the ``catalog_search`` namespace and
propagates to one package logger, which owns the only stream handler.
``CATALOG_SEARCH_LOG_LEVEL`` picks the level (INFO when unset).
"""
from __future__ import annotations

import logging
import os
from functools import lru_cache
from typing import Optional, Union

PACKAGE_LOGGER = "catalog_search"
LOG_LEVEL_ENV = "CATALOG_SEARCH_LOG_LEVEL"
LOG_FORMAT = "%(asctime)s | %(levelname)s | %(name)s: %(message)s"


def configure_logging(level: Union[int, str, None] = None) -> logging.Logger:
    """Attach the shared handler once and (re)apply the package level."""
    root = logging.getLogger(PACKAGE_LOGGER)
    if not root.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        root.addHandler(handler)
    if level is None:
        level = os.environ.get(LOG_LEVEL_ENV, "").strip() or logging.INFO
    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
    # unknown names come back as "Level X"
    root.setLevel(level if isinstance(level, int) else logging.INFO)
    return root


@lru_cache(maxsize=128)
def get_logger(name: Optional[str] = None) -> logging.Logger:
    """Logger for ``catalog_search.<name>``; the package logger when ``name`` is empty."""
    root = logging.getLogger(PACKAGE_LOGGER)
    if not root.handlers:
        configure_logging()
    return logging.getLogger(f"{PACKAGE_LOGGER}.{name}") if name else root
