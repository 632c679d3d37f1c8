"""In-run duplicate detection and the per-run import context.

Public surface:
- ``DuplicateGuard``: set of natural keys seen so far in one run.
- ``ImportContext``: the explicit per-run state (error policy, file encoding,
  duplicate guard) threaded through loader calls instead of module globals.

A key seen twice within one run means the input files overlap. That is a
data-integrity failure, not something the store's ON CONFLICT clause should
quietly absorb.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from .errors import ErrorPolicy
from .models import DedupKey, Transaction


class DuplicateGuard:
    def __init__(self) -> None:
        self._seen: set[DedupKey] = set()

    def add(self, tx: Transaction) -> bool:
        """Remember ``tx``'s key; return ``False`` when it was already seen."""

        key = tx.dedup_key
        if key in self._seen:
            return False
        self._seen.add(key)
        return True

    def __contains__(self, tx: object) -> bool:
        return isinstance(tx, Transaction) and tx.dedup_key in self._seen

    def __len__(self) -> int:
        return len(self._seen)


@dataclass(slots=True)
class ImportContext:
    policy: ErrorPolicy = ErrorPolicy.ABORT
    encoding: str = "utf-8-sig"
    guard: DuplicateGuard = field(default_factory=DuplicateGuard)


__all__ = ["DuplicateGuard", "ImportContext"]
