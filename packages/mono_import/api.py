"""Public API and orchestration for the ``mono_import`` package.

:func:`import_statements` is the whole pipeline: read the given statement
files in order, parse and de-duplicate their rows, then insert everything
into the store while skipping rows whose natural key is already present.
:func:`write_transactions` is the storage half on its own.

Both raise :class:`~mono_import.errors.MonoImportError` on failure; the CLI
turns that into a diagnostic and a non-zero exit status.
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from os import PathLike

from sqlalchemy.exc import ArgumentError, NoSuchModuleError, SQLAlchemyError

from mono_db.client import open_engine, session_scope

from .duplicates import ImportContext
from .errors import ErrorKind, ImportIssue, MonoImportError
from .ingest.utils import load_statements
from .logging_setup import get_logger
from .models import ImportReport, Transaction, WriteReport
from .persistence import ensure_schema, insert_transactions

_logger = get_logger("mono_import.api")


def write_transactions(database_url: str, transactions: Sequence[Transaction]) -> WriteReport:
    """Open the store once, ensure the table exists and insert ``transactions``.

    The inserts share one transaction: a failure part-way leaves the store as
    it was before the call.
    """

    try:
        with open_engine(database_url=database_url) as engine:
            ensure_schema(engine)
            with session_scope(engine) as session:
                return insert_transactions(session, transactions)
    except (ArgumentError, NoSuchModuleError) as e:
        # Bad URL or missing driver: the engine could not be created.
        raise MonoImportError(
            ImportIssue(ErrorKind.STORE_UNAVAILABLE, f"cannot open store: {e}")
        ) from e
    except SQLAlchemyError as e:
        raise MonoImportError(
            ImportIssue(ErrorKind.WRITE_FAILED, f"commit failed: {e}")
        ) from e


def import_statements(
    paths: Iterable[str | PathLike[str]],
    *,
    database_url: str,
    context: ImportContext | None = None,
    dry_run: bool = False,
) -> ImportReport:
    """Import statement CSV files into the store at ``database_url``.

    Parameters
    ----------
    paths:
        Input files, processed in the given order.
    database_url:
        SQLAlchemy URL of the destination store (see
        :func:`mono_db.client.sqlite_url`).
    context:
        Per-run state: error policy, file encoding and duplicate guard. A fresh
        ``ImportContext()`` (stop on first error) is used when omitted.
    dry_run:
        Parse and validate only; nothing is written and ``report.write`` is
        ``None``.
    """

    ctx = context or ImportContext()
    loaded = load_statements(paths, ctx)
    _logger.info(
        "load:done files=%d records=%d short_rows=%d issues=%d",
        loaded.files_read,
        len(loaded.transactions),
        loaded.short_rows,
        len(loaded.issues),
    )
    if dry_run:
        return ImportReport(load=loaded, write=None)

    written = write_transactions(database_url, loaded.transactions)
    return ImportReport(load=loaded, write=written)


__all__ = ["import_statements", "write_transactions"]
