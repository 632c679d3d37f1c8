"""SQLAlchemy engine/session helpers for the statement store.

Usage
-----
from mono_db.client import open_engine, session_scope

with open_engine(database_url=url) as engine:
    with session_scope(engine) as s:
        s.execute(...)

The engine is an explicit value owned by the caller's ``with`` block rather
than a process-wide singleton; it is disposed on every exit path.
"""

from __future__ import annotations

import os
from collections.abc import Iterator
from contextlib import contextmanager
from os import PathLike
from pathlib import Path

from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker


def sqlite_url(db_path: str | PathLike[str]) -> str:
    """Return the SQLAlchemy URL for a SQLite file at ``db_path``."""

    return f"sqlite+pysqlite:///{Path(db_path)}"


def resolve_database_url(
    override: str | None = None,
    *,
    db_path: str | PathLike[str] | None = None,
) -> str:
    """Pick the store URL: explicit override, then ``db_path``, then ``DATABASE_URL``."""

    if override:
        return override
    if db_path is not None:
        return sqlite_url(db_path)
    url = os.getenv("DATABASE_URL")
    if not url:
        raise RuntimeError("DATABASE_URL is not set and no database path was given")
    return url


@contextmanager
def open_engine(*, database_url: str) -> Iterator[Engine]:
    """Create an engine for ``database_url`` and dispose it when the block exits."""

    engine = create_engine(database_url)
    try:
        yield engine
    finally:
        engine.dispose()


@contextmanager
def session_scope(engine: Engine) -> Iterator[Session]:
    """Provide a transactional scope around a series of operations."""

    session = sessionmaker(bind=engine, expire_on_commit=False, class_=Session)()
    try:
        yield session
        session.commit()
    except Exception:
        session.rollback()
        raise
    finally:
        session.close()


__all__ = [
    "open_engine",
    "resolve_database_url",
    "session_scope",
    "sqlite_url",
]
