"""Logging setup for the memory-haiku command line and embedding apps.

Haiku and JSON go to stdout, so log records are written to a separate
stream (stderr unless told otherwise). The requested level applies to the
``memory_haiku`` loggers only; the root logger never drops below WARNING,
which keeps nltk's downloader and other libraries quiet at INFO/DEBUG.
"""

from __future__ import annotations

import logging
import os
import sys
from typing import Optional, TextIO

_DEFAULT_FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"
_LEVEL_ENV = "MEMORY_HAIKU_LOG_LEVEL"
_PACKAGE_LOGGER = "memory_haiku"
_THIRD_PARTY_FLOOR = logging.WARNING
_CONFIGURED = False


def _resolve_level(level: str | int | None) -> int:
    if level is None:
        return logging.INFO
    if isinstance(level, int):
        return level
    try:
        return int(level)
    except (TypeError, ValueError):
        normalized = str(level).strip().upper()
        return getattr(logging, normalized, logging.INFO)


def configure_logging(
    level: Optional[str | int] = None,
    *,
    stream: Optional[TextIO] = None,
    force: bool = False,
) -> int:
    """Route project logs to ``stream`` at the resolved level.

    The explicit ``level`` wins over ``MEMORY_HAIKU_LOG_LEVEL``, which wins
    over ``INFO``. A second call only adjusts the package logger level unless
    ``force`` replaces the handlers. Returns the resolved level.
    """

    global _CONFIGURED

    env_level = os.environ.get(_LEVEL_ENV)
    resolved_level = _resolve_level(level if level is not None else env_level)
    logging.getLogger(_PACKAGE_LOGGER).setLevel(resolved_level)

    if _CONFIGURED and not force:
        return resolved_level

    logging.basicConfig(
        level=max(resolved_level, _THIRD_PARTY_FLOOR),
        format=_DEFAULT_FORMAT,
        stream=stream or sys.stderr,
        force=force,
    )
    _CONFIGURED = True
    return resolved_level


__all__ = ["configure_logging"]
