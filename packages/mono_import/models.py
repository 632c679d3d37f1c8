"""Data models and constants for ``mono_import``.

Monetary fields are fixed-point integers: currency amounts are scaled by
``CENTS_COEF`` (kopecks/cents) and the exchange rate by ``RATE_COEF``. This
keeps in-memory arithmetic and key comparison free of floating-point drift.
Values are divided back down to decimals only when written to the store.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Final, TypeAlias

from .errors import ImportIssue

# ---------------------------------------------------------------------------
# Fixed-point coefficients and the statement timestamp pattern
# ---------------------------------------------------------------------------

CENTS_COEF: Final[int] = 100
RATE_COEF: Final[int] = 100_000
CSV_DATE_FORMAT: Final[str] = "%d.%m.%Y %H:%M:%S"

DedupKey: TypeAlias = tuple[str, str, int]
"""Natural key: (timestamp formatted with ``CSV_DATE_FORMAT``, title, amount)."""


# ---------------------------------------------------------------------------
# Core record
# ---------------------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class Transaction:
    """A single statement row after parsing.

    Field order matches the export's column order.
    """

    created_at: datetime
    title: str
    mcc: int
    amount: int  # card currency (UAH) * 100
    amount_orig: int  # operation currency * 100
    currency: str
    exchange: int  # rate * 100_000
    commission: int  # UAH * 100
    cashback: int  # UAH * 100
    rest: int  # balance after the operation, UAH * 100

    @property
    def dedup_key(self) -> DedupKey:
        return (self.created_at.strftime(CSV_DATE_FORMAT), self.title, self.amount)


# ---------------------------------------------------------------------------
# Run reports
# ---------------------------------------------------------------------------


@dataclass(slots=True)
class LoadResult:
    """Accumulated output of reading and parsing the input files."""

    transactions: list[Transaction] = field(default_factory=list)
    issues: list[ImportIssue] = field(default_factory=list)
    empty_files: list[str] = field(default_factory=list)
    files_read: int = 0
    short_rows: int = 0


@dataclass(frozen=True, slots=True)
class WriteReport:
    """Rows actually inserted versus rows attempted."""

    inserted: int
    attempted: int

    @property
    def skipped(self) -> int:
        return self.attempted - self.inserted


@dataclass(frozen=True, slots=True)
class ImportReport:
    """Result of :func:`mono_import.api.import_statements`.

    ``write`` is ``None`` when the run was a dry run.
    """

    load: LoadResult
    write: WriteReport | None = None


__all__ = [
    "CENTS_COEF",
    "CSV_DATE_FORMAT",
    "DedupKey",
    "ImportReport",
    "LoadResult",
    "RATE_COEF",
    "Transaction",
    "WriteReport",
]
