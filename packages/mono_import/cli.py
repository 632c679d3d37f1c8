# ruff: noqa: I001
"""CLI for the ``mono_import`` package.

Usage::

    mono-import --db mono.db mono_*.csv

The console entry point :func:`main` loads a local ``.env`` with
``python-dotenv`` (never overriding variables already set), then hands over to
the Typer app, so ``MONO_IMPORT_DB``, ``DATABASE_URL`` and
``MONO_IMPORT_LOG_LEVEL`` may come from either place. The import logic itself
lives in :mod:`mono_import.api`; :func:`cmd_import` is the plain-Python
command handler and returns a process exit code.
"""

from __future__ import annotations

import sys
from collections.abc import Sequence
from pathlib import Path
from typing import Annotated

import typer
from dotenv import load_dotenv
from sqlalchemy.engine import make_url
from sqlalchemy.exc import ArgumentError

from mono_db.client import resolve_database_url

from .api import import_statements
from .duplicates import ImportContext
from .errors import ErrorPolicy, MonoImportError
from .logging_setup import configure_logging


def cmd_import(
    files: Sequence[Path],
    *,
    db: Path,
    database_url: str | None = None,
    on_error: ErrorPolicy = ErrorPolicy.ABORT,
    encoding: str = "utf-8-sig",
    dry_run: bool = False,
) -> int:
    """Import ``files`` into the store and print counts.

    Returns ``0`` on success and ``1`` on any failure, after printing an
    ``Error: ...`` diagnostic to stderr.
    """

    url = resolve_database_url(database_url, db_path=db)
    try:
        shown = make_url(url).render_as_string(hide_password=True) if database_url else db
    except ArgumentError as e:
        print(f"Error: invalid database URL: {e}", file=sys.stderr)
        return 1
    print(f"Importing to {shown}")

    context = ImportContext(policy=on_error, encoding=encoding)
    try:
        report = import_statements(files, database_url=url, context=context, dry_run=dry_run)
    except MonoImportError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    # Details were already logged as warnings by the loader.
    if report.load.issues:
        print(f"Skipped {len(report.load.issues)} problem rows or files", file=sys.stderr)

    if report.write is None:
        print(f"Parsed {len(report.load.transactions)} records (dry run, nothing written)")
    else:
        print(f"Imported {report.write.inserted} (from {report.write.attempted}) records")
    return 0


# ---- Typer-based console interface -------------------------------------------


app = typer.Typer(
    add_completion=False,
    help="Import monobank statement CSV files into a SQL database, skipping known rows.",
)


@app.command()
def import_cmd(
    files: Annotated[
        list[Path],
        typer.Argument(
            help="Statement CSV files, imported in the given order (shell globs welcome).",
            dir_okay=False,
        ),
    ],
    db: Annotated[
        Path,
        typer.Option("--db", envvar="MONO_IMPORT_DB", help="SQLite DB name."),
    ] = Path("mono.db"),
    database_url: Annotated[
        str | None,
        typer.Option(
            "--database-url",
            envvar="DATABASE_URL",
            help="SQLAlchemy URL of the store; overrides --db.",
        ),
    ] = None,
    on_error: Annotated[
        ErrorPolicy,
        typer.Option(
            "--on-error",
            case_sensitive=False,
            help="abort: stop on the first bad row or file. skip: report it and go on.",
        ),
    ] = ErrorPolicy.ABORT,
    encoding: Annotated[
        str, typer.Option("--encoding", help="Text encoding of the CSV files.")
    ] = "utf-8-sig",
    dry_run: Annotated[
        bool, typer.Option("--dry-run", help="Parse and validate without writing.")
    ] = False,
    log_level: Annotated[
        str | None,
        typer.Option(
            "--log-level",
            envvar="MONO_IMPORT_LOG_LEVEL",
            help="Logging level (DEBUG, INFO, WARNING, ...).",
        ),
    ] = None,
) -> None:
    """Import statement CSV files into the ``mono`` table."""

    try:
        configure_logging(log_level)
    except ValueError as e:
        raise typer.BadParameter(str(e), param_hint="--log-level") from e

    code = cmd_import(
        files,
        db=db,
        database_url=database_url,
        on_error=on_error,
        encoding=encoding,
        dry_run=dry_run,
    )
    if code:
        raise typer.Exit(code)


def main() -> None:
    """Console-script entry point."""

    # Load environment from .env in CWD (override=False to keep existing env)
    load_dotenv(dotenv_path=Path.cwd() / ".env", override=False)
    app()


if __name__ == "__main__":  # pragma: no cover - exercised via the console script
    main()
