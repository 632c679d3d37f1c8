"""Public interface for the ``mono_import`` package.

Imports monobank statement CSV exports into a SQL store, de-duplicating on
``(timestamp, description, amount)``. This module only re-exports the stable
import surface; see :mod:`mono_import.api` for the pipeline.
"""

from .api import import_statements, write_transactions
from .duplicates import DuplicateGuard, ImportContext
from .errors import ErrorKind, ErrorPolicy, ImportIssue, MonoImportError, RowParseError
from .ingest.adapters.monobank_csv import parse_row, parse_scaled, parse_timestamp
from .ingest.utils import load_statements
from .models import (
    CENTS_COEF,
    CSV_DATE_FORMAT,
    RATE_COEF,
    ImportReport,
    LoadResult,
    Transaction,
    WriteReport,
)

__all__ = [
    # API
    "import_statements",
    "load_statements",
    "write_transactions",
    "parse_row",
    "parse_scaled",
    "parse_timestamp",
    # Models / constants
    "Transaction",
    "LoadResult",
    "WriteReport",
    "ImportReport",
    "CENTS_COEF",
    "RATE_COEF",
    "CSV_DATE_FORMAT",
    # Run state and errors
    "ImportContext",
    "DuplicateGuard",
    "ErrorKind",
    "ErrorPolicy",
    "ImportIssue",
    "MonoImportError",
    "RowParseError",
]
