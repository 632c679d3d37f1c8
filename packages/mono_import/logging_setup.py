"""Logging configuration for the ``mono_import`` package.

Entry points call ``configure_logging(...)`` once at startup; it attaches a
single ``StreamHandler`` to the package logger ``"mono_import"``. Library
modules only call ``get_logger("mono_import.<module>")`` and never attach
handlers of their own.

Messages follow a ``<stage>:<event> key=value ...`` shape so they stay easy to
grep, e.g. ``load:file_start path=mono_2024.csv``.
"""

from __future__ import annotations

import logging
import os
import sys
from typing import IO

_PKG_LOGGER_NAME = "mono_import"
_LEVEL_ENV = "MONO_IMPORT_LOG_LEVEL"
_DEFAULT_FORMAT = "%(asctime)s %(name)s %(levelname)s %(message)s"

_handler: logging.Handler | None = None


def _parse_level(level: int | str | None) -> int:
    if isinstance(level, int):
        return level
    if level is None:
        level = os.getenv(_LEVEL_ENV)
    if isinstance(level, str) and level.strip():
        name = level.strip().upper()
        if name.isdigit():
            return int(name)
        numeric = logging.getLevelName(name)
        if isinstance(numeric, int):
            return numeric
        raise ValueError(f"unknown log level: {level!r}")
    return logging.INFO


def configure_logging(
    level: int | str | None = None,
    *,
    fmt: str | None = None,
    stream: IO[str] | None = None,
) -> None:
    """Attach the package handler, or update its level when already attached.

    ``level`` may be an ``int`` or a level name; when ``None`` the
    ``MONO_IMPORT_LOG_LEVEL`` environment variable is consulted, then INFO.
    """

    global _handler
    resolved = _parse_level(level)
    logger = logging.getLogger(_PKG_LOGGER_NAME)

    if _handler is None:
        for h in list(logger.handlers):
            if isinstance(h, logging.NullHandler):
                logger.removeHandler(h)
        _handler = logging.StreamHandler(stream or sys.stderr)
        _handler.setFormatter(logging.Formatter(fmt or _DEFAULT_FORMAT))
        logger.addHandler(_handler)
        # Avoid double emission via the root logger.
        logger.propagate = False

    _handler.setLevel(resolved)
    logger.setLevel(resolved)


def get_logger(name: str) -> logging.Logger:
    """Return a logger; the package logger stays silent until configured."""

    pkg_logger = logging.getLogger(_PKG_LOGGER_NAME)
    if _handler is None and not pkg_logger.handlers:
        pkg_logger.addHandler(logging.NullHandler())
    return logging.getLogger(name)


__all__ = ["configure_logging", "get_logger"]
