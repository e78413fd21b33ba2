"""Debt tracking: remaining balances, settlement status, and payments."""

from __future__ import annotations

from dataclasses import asdict, dataclass
from enum import Enum
from typing import Any, Iterable, Mapping

from ..constants import DebtDirection
from ..domain.repositories import RecordStore
from ..errors import Result, capture
from ..logging_config import get_logger
from ..models.debt import Debt
from .aggregation import sort_newest_first
from .forms import DebtForm, PaymentForm

logger = get_logger(__name__)


class DebtStatus(str, Enum):
    OPEN = "open"
    SETTLED = "settled"


@dataclass(slots=True)
class DebtTotals:
    """Outstanding amounts split by direction."""

    owed_to_user: float = 0.0
    user_owes: float = 0.0

    @property
    def net(self) -> float:
        return self.owed_to_user - self.user_owes

    def as_dict(self) -> dict[str, float]:
        data = asdict(self)
        data["net"] = self.net
        return data


def remaining(debt: Debt) -> float:
    return float(debt.total_amount or 0) - float(debt.paid_amount or 0)


def status(debt: Debt) -> DebtStatus:
    """Open while anything remains; over-payment also counts as settled."""

    return DebtStatus.OPEN if remaining(debt) > 0 else DebtStatus.SETTLED


def totals(debts: Iterable[Debt]) -> DebtTotals:
    result = DebtTotals()
    for debt in debts:
        if debt.direction == DebtDirection.OWED_TO_USER.value:
            result.owed_to_user += remaining(debt)
        elif debt.direction == DebtDirection.USER_OWES.value:
            result.user_owes += remaining(debt)
    return result


def describe(debt: Debt) -> dict[str, Any]:
    """Serialized debt with its derived values."""

    data = debt.model_dump(mode="json")
    data["remaining"] = remaining(debt)
    data["status"] = status(debt).value
    return data


class DebtManager:
    """Debt CRUD; ``paid_amount`` only grows through ``add_payment``."""

    def __init__(self, store: RecordStore[Debt]):
        self.store = store

    def list(self, owner_id: str) -> Result[list[Debt]]:
        return capture(
            "fetch",
            lambda: sort_newest_first(self.store.list(owner_id), attr="created_at"),
            logger=logger,
        )

    def create(self, owner_id: str, data: Mapping[str, Any]) -> Result[str]:
        def _create() -> str:
            form = DebtForm.from_mapping(data)
            form.ensure_valid()
            return self.store.create(owner_id, form.to_fields())

        return capture("add", _create, logger=logger)

    def update(self, owner_id: str, debt_id: str, data: Mapping[str, Any]) -> Result[None]:
        """Edit descriptive fields; any ``paid_amount`` in ``data`` is ignored."""

        def _update() -> None:
            form = DebtForm.from_mapping({**data, "paid_amount": 0})
            form.ensure_valid()
            self.store.update(owner_id, debt_id, form.to_fields(include_paid=False))

        return capture("update", _update, logger=logger)

    def delete(self, owner_id: str, debt_id: str) -> Result[None]:
        return capture("delete", self.store.delete, owner_id, debt_id, logger=logger)

    def add_payment(self, owner_id: str, debt_id: str, amount: Any) -> Result[float]:
        """Add a positive payment and return the new remaining balance.

        Zero, negative, or non-numeric amounts are rejected before the store
        is touched.
        """

        def _pay() -> float:
            form = PaymentForm(amount=amount)
            form.ensure_valid()
            debt = self.store.get(owner_id, debt_id)
            new_paid = float(debt.paid_amount or 0) + form.value
            self.store.update(owner_id, debt_id, {"paid_amount": new_paid})
            debt.paid_amount = new_paid
            logger.info(
                "Debt payment recorded",
                extra={"owner_id": owner_id, "debt_id": debt_id, "payment": form.value},
            )
            return remaining(debt)

        return capture("update", _pay, logger=logger)
