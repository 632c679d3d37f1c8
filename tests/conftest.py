"""Pytest configuration for test isolation.

The importer reads its store location and log level from the environment
(``DATABASE_URL``, ``MONO_IMPORT_DB``, ``MONO_IMPORT_LOG_LEVEL``) and, through
the CLI, from a ``.env`` in the working directory. A developer's shell or
checkout must not leak into tests, so each test runs from its own temporary
directory with those variables cleared.
"""

from __future__ import annotations

import logging
from collections.abc import Iterator
from pathlib import Path

import pytest

from mono_import import logging_setup

DATA_DIR = Path(__file__).resolve().parent / "data"


@pytest.fixture(autouse=True)
def _isolate_environment(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    for name in ("DATABASE_URL", "MONO_IMPORT_DB", "MONO_IMPORT_LOG_LEVEL"):
        monkeypatch.delenv(name, raising=False)
    monkeypatch.chdir(tmp_path)


@pytest.fixture(autouse=True)
def _reset_package_logging() -> Iterator[None]:
    """Drop the handler a CLI test attached, so the next test starts unconfigured.

    The handler is bound to whatever ``sys.stderr`` was at configure time,
    which under ``CliRunner`` is a buffer that is closed after the invocation.
    """

    yield
    logger = logging.getLogger("mono_import")
    if logging_setup._handler is not None:
        logger.removeHandler(logging_setup._handler)
        logging_setup._handler = None
    logger.propagate = True


@pytest.fixture
def january_csv() -> Path:
    """Four transactions plus a one-field trailer row."""

    return DATA_DIR / "mono_2024_01.csv"


@pytest.fixture
def february_csv() -> Path:
    """Three transactions; the first repeats January's salary row."""

    return DATA_DIR / "mono_2024_02.csv"
