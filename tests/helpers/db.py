"""DB helpers for tests: bootstrap a temporary SQLite store and read it back."""

from __future__ import annotations

from pathlib import Path
from typing import Any

from mono_db import MonoRecord
from mono_db.client import open_engine, session_scope, sqlite_url
from mono_import.persistence import ensure_schema
from sqlalchemy import func, select


def bootstrap_sqlite_db(db_file: Path) -> str:
    """Create a SQLite database file with the ``mono`` table and return its URL.

    A file-backed database lets separate engines (one per import run) see the
    same state, which in-memory SQLite does not.
    """

    db_file.parent.mkdir(parents=True, exist_ok=True)
    url = sqlite_url(db_file)
    with open_engine(database_url=url) as engine:
        ensure_schema(engine)
    return url


def fetch_rows(database_url: str) -> list[dict[str, Any]]:
    """Return every stored row as a plain dict, oldest first."""

    table = MonoRecord.__table__
    with open_engine(database_url=database_url) as engine, session_scope(engine) as session:
        result = session.execute(select(table).order_by(table.c.created_at, table.c.id))
        return [dict(row) for row in result.mappings()]


def count_rows(database_url: str) -> int:
    with open_engine(database_url=database_url) as engine, session_scope(engine) as session:
        return session.execute(select(func.count()).select_from(MonoRecord.__table__)).scalar_one()
