"""Read statement files into parsed, de-duplicated transactions.

Files are processed strictly in the order given. Per file:

- the whole file is read with the stdlib :mod:`csv` reader (any number of
  fields per row, RFC 4180 quoting);
- a file with only a header (or nothing at all) is skipped with a warning;
- the header row is dropped, and its width sets the minimum row width;
  shorter rows are skipped silently (exports often end with a ragged
  trailer);
- each remaining row is parsed and checked against the run's
  :class:`~mono_import.duplicates.DuplicateGuard`.

Problems are reported as :class:`~mono_import.errors.ImportIssue` values.
Under ``ErrorPolicy.ABORT`` the first one is raised as
:class:`~mono_import.errors.MonoImportError`; under ``ErrorPolicy.SKIP`` it
is collected on the :class:`~mono_import.models.LoadResult` and the offending
row (or file) is left out.
"""

from __future__ import annotations

import csv
from collections.abc import Iterable
from os import PathLike
from pathlib import Path

from ..duplicates import ImportContext
from ..errors import ErrorKind, ErrorPolicy, ImportIssue, MonoImportError, RowParseError
from ..logging_setup import get_logger
from ..models import LoadResult
from .adapters.monobank_csv import EXPECTED_COLUMNS, parse_row

_logger = get_logger("mono_import.ingest")


def read_csv_rows(
    csv_path: str | PathLike[str], *, encoding: str = "utf-8-sig"
) -> list[list[str]]:
    """Return every row of ``csv_path``, header included."""

    with Path(csv_path).open(encoding=encoding, newline="") as f:
        return list(csv.reader(f))


def _report(issue: ImportIssue, context: ImportContext, result: LoadResult) -> None:
    if context.policy != ErrorPolicy.SKIP:
        raise MonoImportError(issue)
    _logger.warning("load:issue_skipped kind=%s detail=%s", issue.kind, issue)
    result.issues.append(issue)


def load_statement_file(
    csv_path: str | PathLike[str],
    context: ImportContext,
    result: LoadResult,
) -> None:
    """Parse one file into ``result`` using the run state in ``context``."""

    name = str(csv_path)
    _logger.info("load:file_start path=%s", name)

    try:
        rows = read_csv_rows(csv_path, encoding=context.encoding)
    except (OSError, LookupError, UnicodeDecodeError, csv.Error) as e:
        _report(
            ImportIssue(ErrorKind.UNREADABLE_FILE, f"cannot read CSV: {e}", file=name),
            context,
            result,
        )
        return

    if len(rows) <= 1:
        _logger.warning("load:empty_file path=%s", name)
        result.empty_files.append(name)
        return

    header, data = rows[0], rows[1:]
    rec_len = len(header)
    if rec_len < EXPECTED_COLUMNS:
        _report(
            ImportIssue(
                ErrorKind.MALFORMED_HEADER,
                f"header has {rec_len} columns; expected {EXPECTED_COLUMNS}",
                file=name,
            ),
            context,
            result,
        )
        return

    result.files_read += 1
    parsed = 0
    for i, row in enumerate(data):
        if len(row) < rec_len:
            result.short_rows += 1
            continue

        try:
            tx = parse_row(row)
        except RowParseError as e:
            _report(ImportIssue(e.kind, str(e), file=name, row_index=i), context, result)
            continue

        if not context.guard.add(tx):
            _report(
                ImportIssue(
                    ErrorKind.DUPLICATE_RECORD,
                    f"duplicate record {tx!r}",
                    file=name,
                    row_index=i,
                ),
                context,
                result,
            )
            continue

        result.transactions.append(tx)
        parsed += 1

    _logger.info("load:file_done path=%s parsed=%d", name, parsed)


def load_statements(
    paths: Iterable[str | PathLike[str]],
    context: ImportContext | None = None,
) -> LoadResult:
    """Load every file in ``paths`` into a single :class:`LoadResult`."""

    ctx = context or ImportContext()
    result = LoadResult()
    for path in paths:
        load_statement_file(path, ctx, result)
    return result


__all__ = ["load_statement_file", "load_statements", "read_csv_rows"]
