"""Error kinds, error values and failure policy for ``mono_import``.

Every failure the importer can hit is described by an :class:`ImportIssue`
carrying an :class:`ErrorKind`. Library code raises :class:`MonoImportError`
(wrapping the issue) under the default ``ABORT`` policy; under ``SKIP`` the
loader collects input issues instead and keeps going. The caller decides
whether a batch aborts or continues.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum


class ErrorKind(StrEnum):
    UNREADABLE_FILE = "unreadable_file"
    MALFORMED_HEADER = "malformed_header"
    MALFORMED_TIMESTAMP = "malformed_timestamp"
    MALFORMED_NUMBER = "malformed_number"
    DUPLICATE_RECORD = "duplicate_record"
    STORE_UNAVAILABLE = "store_unavailable"
    WRITE_FAILED = "write_failed"


# Store-level failures abort the run regardless of the configured policy.
STORE_ERROR_KINDS: frozenset[ErrorKind] = frozenset(
    {ErrorKind.STORE_UNAVAILABLE, ErrorKind.WRITE_FAILED}
)


class ErrorPolicy(StrEnum):
    """What the loader does with an input issue."""

    ABORT = "abort"
    SKIP = "skip"


@dataclass(frozen=True, slots=True)
class ImportIssue:
    """A single failure with enough context to locate the offending input.

    ``row_index`` is the 0-based index of the data row within its file, with
    the header row excluded.
    """

    kind: ErrorKind
    message: str
    file: str | None = None
    row_index: int | None = None

    def __str__(self) -> str:
        where: list[str] = []
        if self.file is not None:
            where.append(self.file)
        if self.row_index is not None:
            where.append(f"row {self.row_index}")
        prefix = f"[{self.kind}] " + (f"{', '.join(where)}: " if where else "")
        return prefix + self.message


class RowParseError(ValueError):
    """Raised by the row parser; carries the kind but no file context."""

    def __init__(self, kind: ErrorKind, message: str) -> None:
        super().__init__(message)
        self.kind = kind


class MonoImportError(Exception):
    """Raised when an import step fails; ``issue`` describes the failure."""

    def __init__(self, issue: ImportIssue) -> None:
        super().__init__(str(issue))
        self.issue = issue

    @property
    def kind(self) -> ErrorKind:
        return self.issue.kind


__all__ = [
    "ErrorKind",
    "ErrorPolicy",
    "ImportIssue",
    "MonoImportError",
    "RowParseError",
    "STORE_ERROR_KINDS",
]
