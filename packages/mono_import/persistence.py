# ruff: noqa: I001
"""Persistence for ``mono_import``.

Functions here write parsed transactions to the ``mono`` table owned by
``mono_db``. They rely on the SQLAlchemy model in ``mono_db.models.statement``
and on an engine/session supplied by the caller (see ``mono_db.client``).

Scope:
- Create the ``mono`` table (with its natural-key constraint) when missing.
- Insert transactions one by one with ``ON CONFLICT DO NOTHING`` so that
  re-importing overlapping statements is a no-op for rows already stored.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable
from decimal import Decimal
from typing import Any

from sqlalchemy import Table
from sqlalchemy.dialects.postgresql import insert as pg_insert
from sqlalchemy.dialects.sqlite import insert as sqlite_insert
from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from mono_db import NATURAL_KEY_COLUMNS, Base, MonoRecord
from .errors import ErrorKind, ImportIssue, MonoImportError
from .logging_setup import get_logger
from .models import CENTS_COEF, RATE_COEF, Transaction, WriteReport

_logger = get_logger("mono_import.persistence")

# Dialects with an INSERT ... ON CONFLICT DO NOTHING construct
_INSERTS: dict[str, Callable[[Table], Any]] = {
    "sqlite": sqlite_insert,
    "postgresql": pg_insert,
}


def _descale(value: int, coef: int) -> Decimal:
    return Decimal(value) / Decimal(coef)


def to_row(tx: Transaction) -> dict[str, Any]:
    """Map a transaction to ``mono`` column values (decimals, not fixed-point)."""

    return {
        "created_at": tx.created_at,
        "title": tx.title,
        "mcc": tx.mcc,
        "amount": _descale(tx.amount, CENTS_COEF),
        "amount_orig": _descale(tx.amount_orig, CENTS_COEF),
        "currency": tx.currency,
        "exchange": _descale(tx.exchange, RATE_COEF),
        "commission": _descale(tx.commission, CENTS_COEF),
        "cashback": _descale(tx.cashback, CENTS_COEF),
        "rest": _descale(tx.rest, CENTS_COEF),
    }


def _insert_for(dialect: str) -> Callable[[Table], Any]:
    insert = _INSERTS.get(dialect)
    if insert is None:
        raise MonoImportError(
            ImportIssue(
                ErrorKind.STORE_UNAVAILABLE,
                f"unsupported database dialect {dialect!r}; expected one of {sorted(_INSERTS)}",
            )
        )
    return insert


def ensure_schema(engine: Engine) -> None:
    """Create the ``mono`` table if it does not exist yet.

    Stores without an ``ON CONFLICT`` insert are rejected before any DDL runs.
    """

    _insert_for(engine.dialect.name)
    try:
        Base.metadata.create_all(bind=engine, tables=[MonoRecord.__table__])
    except SQLAlchemyError as e:
        raise MonoImportError(
            ImportIssue(
                ErrorKind.STORE_UNAVAILABLE,
                f"cannot open store {engine.url.render_as_string(hide_password=True)}: {e}",
            )
        ) from e


def insert_transactions(session: Session, transactions: Iterable[Transaction]) -> WriteReport:
    """Insert each transaction, silently skipping natural-key conflicts.

    Returns how many rows were actually inserted out of how many were tried.
    Any failure other than a key conflict raises ``MonoImportError`` with
    kind ``WRITE_FAILED``; committing or rolling back is the caller's job.
    """

    table = MonoRecord.__table__
    insert = _insert_for(session.get_bind().dialect.name)
    stmt = insert(table).on_conflict_do_nothing(
        index_elements=[table.c[name] for name in NATURAL_KEY_COLUMNS]
    )

    inserted = 0
    attempted = 0
    for tx in transactions:
        attempted += 1
        # sqlite3 raises a bare OverflowError for integers beyond 64 bits.
        try:
            result = session.execute(stmt, to_row(tx))
        except (SQLAlchemyError, OverflowError) as e:
            raise MonoImportError(
                ImportIssue(ErrorKind.WRITE_FAILED, f"error inserting record {tx!r}: {e}")
            ) from e
        inserted += result.rowcount

    _logger.info("write:done inserted=%d attempted=%d", inserted, attempted)
    return WriteReport(inserted=inserted, attempted=attempted)


__all__ = ["ensure_schema", "insert_transactions", "to_row"]
