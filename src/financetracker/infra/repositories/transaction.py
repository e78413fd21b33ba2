"""SQLModel implementation of the transaction store."""

from __future__ import annotations

from datetime import datetime

from sqlmodel import select

from ...errors import ErrorKind, StoreError
from ...models.transaction import Transaction
from ..database import SessionFactory
from .base import SQLModelRecordStore, translate_errors


class SQLModelTransactionStore(SQLModelRecordStore[Transaction]):
    """Transaction store with date-range pushdown.

    ``supports_range_queries=False`` makes ``list_between`` refuse with
    ``FAILED_PRECONDITION``, the same signal a backend without a date index
    gives, so callers exercise their full-fetch fallback.
    """

    def __init__(self, session_factory: SessionFactory, *, supports_range_queries: bool = True):
        super().__init__(Transaction, session_factory)
        self.supports_range_queries = supports_range_queries

    def list_between(self, owner_id: str, start: datetime, end: datetime) -> list[Transaction]:
        if not self.supports_range_queries:
            raise StoreError(
                "Range query requires an index on (owner_id, date)",
                kind=ErrorKind.FAILED_PRECONDITION,
            )
        with translate_errors("list_between", self.collection), self.session_factory() as session:
            statement = (
                select(Transaction)
                .where(Transaction.owner_id == owner_id)
                .where(Transaction.date >= start)
                .where(Transaction.date <= end)
            )
            return list(session.exec(statement).all())
