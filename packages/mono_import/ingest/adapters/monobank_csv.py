"""Adapter for monobank statement CSV exports.

CSV header (10 columns, in this order):
"Дата i час операції", "Деталі операції", MCC, "Сума в валюті картки (UAH)",
"Сума в валюті операції", Валюта, Курс, "Сума комісій (UAH)",
"Сума кешбеку (UAH)", "Залишок після операції"

Mapping rules:
- timestamp: ``DD.MM.YYYY HH:MM:SS``; any other shape is a parse error
- title, currency: copied as-is
- numeric columns: a missing-value marker (em-dash, hyphen, empty) is 0;
  otherwise decimal text times the column coefficient, truncated toward zero
  (MCC ×1, money ×100, exchange rate ×100 000)

Columns beyond the tenth are ignored. Row-length checks against the file
header are the caller's job (see :mod:`mono_import.ingest.utils`).
"""

from __future__ import annotations

import re
from collections.abc import Sequence
from datetime import datetime
from decimal import Decimal, InvalidOperation
from typing import Final

from ...errors import ErrorKind, RowParseError
from ...models import CENTS_COEF, CSV_DATE_FORMAT, RATE_COEF, Transaction

HEADER: Final[tuple[str, ...]] = (
    "Дата i час операції",
    "Деталі операції",
    "MCC",
    "Сума в валюті картки (UAH)",
    "Сума в валюті операції",
    "Валюта",
    "Курс",
    "Сума комісій (UAH)",
    "Сума кешбеку (UAH)",
    "Залишок після операції",
)
EXPECTED_COLUMNS: Final[int] = len(HEADER)

MISSING_VALUE_MARKERS: Final[frozenset[str]] = frozenset({"—", "-", ""})

# Every field is zero-padded: DD.MM.YYYY HH:MM:SS
_TIMESTAMP_SHAPE: Final[re.Pattern[str]] = re.compile(r"\d{2}\.\d{2}\.\d{4} \d{2}:\d{2}:\d{2}")

# Scaled values are stored in signed 64-bit INTEGER columns.
_INT64_MIN: Final[int] = -(2**63)
_INT64_MAX: Final[int] = 2**63 - 1


def parse_scaled(raw: str, coef: int) -> int:
    """Parse decimal text into a fixed-point integer scaled by ``coef``."""

    s = raw.strip()
    if s in MISSING_VALUE_MARKERS:
        return 0
    try:
        d = Decimal(s)
    except InvalidOperation as exc:
        raise RowParseError(ErrorKind.MALFORMED_NUMBER, f"invalid number: {raw!r}") from exc
    if not d.is_finite():
        raise RowParseError(ErrorKind.MALFORMED_NUMBER, f"invalid number: {raw!r}")
    # int() on a Decimal truncates toward zero.
    value = int(d * coef)
    if not _INT64_MIN <= value <= _INT64_MAX:
        raise RowParseError(ErrorKind.MALFORMED_NUMBER, f"number out of range: {raw!r}")
    return value


def parse_timestamp(raw: str) -> datetime:
    # strptime alone also accepts unpadded fields and a leading space.
    if not _TIMESTAMP_SHAPE.fullmatch(raw):
        raise RowParseError(
            ErrorKind.MALFORMED_TIMESTAMP,
            f"invalid timestamp {raw!r}; expected DD.MM.YYYY HH:MM:SS",
        )
    try:
        return datetime.strptime(raw, CSV_DATE_FORMAT)
    except ValueError as exc:
        raise RowParseError(
            ErrorKind.MALFORMED_TIMESTAMP,
            f"invalid timestamp {raw!r}; expected DD.MM.YYYY HH:MM:SS",
        ) from exc


def parse_row(row: Sequence[str]) -> Transaction:
    """Convert one data row into a :class:`Transaction`.

    Raises :class:`~mono_import.errors.RowParseError` on a malformed timestamp
    or number.
    """

    if len(row) < EXPECTED_COLUMNS:
        raise ValueError(f"expected at least {EXPECTED_COLUMNS} fields, got {len(row)}")

    return Transaction(
        created_at=parse_timestamp(row[0]),
        title=row[1],
        mcc=parse_scaled(row[2], 1),
        amount=parse_scaled(row[3], CENTS_COEF),
        amount_orig=parse_scaled(row[4], CENTS_COEF),
        currency=row[5],
        exchange=parse_scaled(row[6], RATE_COEF),
        commission=parse_scaled(row[7], CENTS_COEF),
        cashback=parse_scaled(row[8], CENTS_COEF),
        rest=parse_scaled(row[9], CENTS_COEF),
    )


__all__ = [
    "EXPECTED_COLUMNS",
    "HEADER",
    "MISSING_VALUE_MARKERS",
    "parse_row",
    "parse_scaled",
    "parse_timestamp",
]
