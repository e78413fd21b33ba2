"""Transaction store protocol."""

from __future__ import annotations

from datetime import datetime
from typing import Protocol

from ...models.transaction import Transaction
from .store import RecordStore


class TransactionStore(RecordStore[Transaction], Protocol):
    """Record store with an optional date-range pushdown."""

    def list_between(self, owner_id: str, start: datetime, end: datetime) -> list[Transaction]:
        """Return transactions dated within ``[start, end]``.

        May raise ``StoreError`` with ``ErrorKind.FAILED_PRECONDITION`` when the
        backend cannot serve a ranged query; callers fall back to ``list``.
        """
        ...
