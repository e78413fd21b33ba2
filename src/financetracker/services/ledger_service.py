"""Transaction orchestration: validation, persistence, and period fetches."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Iterable, Mapping, Sequence

from ..domain.repositories import TransactionStore
from ..errors import ErrorKind, Result, StoreError, capture
from ..logging_config import get_logger
from ..models.transaction import Transaction
from .aggregation import filter_period, sort_newest_first
from .forms import TransactionForm

logger = get_logger(__name__)


@dataclass(slots=True)
class ImportSummary:
    """Outcome of a bulk import."""

    created: int = 0
    skipped: int = 0
    errors: list[dict[str, Any]] = field(default_factory=list)

    def as_dict(self) -> dict[str, Any]:
        return {"created": self.created, "skipped": self.skipped, "errors": self.errors}


class TransactionManager:
    """CRUD over the transaction store; every call is scoped to an explicit owner id."""

    def __init__(self, store: TransactionStore):
        self.store = store

    def list(self, owner_id: str) -> Result[list[Transaction]]:
        """All transactions for ``owner_id``, newest first."""
        return capture(
            "fetch",
            lambda: sort_newest_first(self.store.list(owner_id)),
            logger=logger,
        )

    def get(self, owner_id: str, transaction_id: str) -> Result[Transaction]:
        return capture("fetch", self.store.get, owner_id, transaction_id, logger=logger)

    def create(self, owner_id: str, data: Mapping[str, Any]) -> Result[str]:
        """Validate ``data`` and store it with the date pinned to noon."""

        def _create() -> str:
            form = TransactionForm.from_mapping(data)
            form.ensure_valid()
            transaction_id = self.store.create(owner_id, form.to_fields())
            logger.info(
                "Transaction created",
                extra={"owner_id": owner_id, "transaction_id": transaction_id, "kind": form.kind},
            )
            return transaction_id

        return capture("add", _create, logger=logger)

    def replace(self, owner_id: str, transaction_id: str, data: Mapping[str, Any]) -> Result[None]:
        """Overwrite every editable field of an existing transaction."""

        def _replace() -> None:
            form = TransactionForm.from_mapping(data)
            form.ensure_valid()
            self.store.update(owner_id, transaction_id, form.to_fields())

        return capture("update", _replace, logger=logger)

    def delete(self, owner_id: str, transaction_id: str) -> Result[None]:
        return capture("delete", self.store.delete, owner_id, transaction_id, logger=logger)

    def fetch_period(
        self, owner_id: str, start: datetime, end: datetime
    ) -> Result[list[Transaction]]:
        """Transactions dated within ``[start, end]``, newest first.

        Uses the store's ranged query and falls back to a full fetch with
        client-side filtering when the store reports a failed precondition.
        """

        def _fetch() -> list[Transaction]:
            try:
                records = self.store.list_between(owner_id, start, end)
            except StoreError as exc:
                if exc.kind is not ErrorKind.FAILED_PRECONDITION:
                    raise
                logger.info(
                    "Ranged query unavailable, filtering full collection",
                    extra={"owner_id": owner_id},
                )
                records = filter_period(self.store.list(owner_id), start, end)
            return sort_newest_first(records)

        return capture("fetch", _fetch, logger=logger)

    def import_records(
        self,
        owner_id: str,
        records: Iterable[Mapping[str, Any]],
        *,
        malformed: Iterable[Sequence[str]] = (),
    ) -> Result[ImportSummary]:
        """Validate and create each parsed row; invalid rows are counted, not fatal.

        ``malformed`` holds raw lines the CSV reader could not split into the
        header's columns; they are reported as skipped.
        """

        def _import() -> ImportSummary:
            summary = ImportSummary()
            for fields in malformed:
                summary.skipped += 1
                summary.errors.append(
                    {"line": ",".join(map(str, fields)), "errors": {"row": ["Unexpected number of fields."]}}
                )
            for index, record in enumerate(records, start=1):
                form = TransactionForm.from_mapping(record)
                if not form.validate():
                    summary.skipped += 1
                    summary.errors.append({"row": index, "errors": dict(form.errors)})
                    continue
                try:
                    self.store.create(owner_id, form.to_fields())
                except StoreError as exc:
                    if exc.kind is not ErrorKind.INVALID_ARGUMENT:
                        raise
                    summary.skipped += 1
                    summary.errors.append({"row": index, "errors": {"store": [exc.message]}})
                    continue
                summary.created += 1
            logger.info(
                "Transactions imported",
                extra={
                    "owner_id": owner_id,
                    "created_count": summary.created,
                    "skipped_count": summary.skipped,
                },
            )
            return summary

        return capture("add", _import, logger=logger)

