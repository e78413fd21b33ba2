"""Budgeting domain services."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Any, Iterable, Mapping

from ..constants import BudgetPeriod, TransactionKind
from ..domain.repositories import RecordStore, TransactionStore
from ..errors import Result, capture
from ..logging_config import get_logger
from ..models.budget import Budget
from ..periods import month_window, year_window
from .aggregation import amount_of, field_value, filter_period, kind_of, sort_newest_first
from .forms import BudgetForm

logger = get_logger(__name__)


@dataclass(slots=True)
class BudgetStatus:
    """Budget with its spend for the current window."""

    budget: Budget
    spent: float
    remaining: float
    percent_used: float
    window_start: datetime
    window_end: datetime

    @property
    def over_budget(self) -> bool:
        return self.spent > self.budget.amount

    def as_dict(self) -> dict[str, Any]:
        return {
            "budget": self.budget.model_dump(mode="json"),
            "spent": self.spent,
            "remaining": self.remaining,
            "percent_used": self.percent_used,
            "over_budget": self.over_budget,
            "window_start": self.window_start.isoformat(),
            "window_end": self.window_end.isoformat(),
        }


def budget_window(period: str, now: datetime) -> tuple[datetime, datetime]:
    """Current month for monthly budgets, current year for yearly ones."""

    if period == BudgetPeriod.YEARLY.value:
        return year_window(now.year)
    return month_window(now.year, now.month)


def category_spend(transactions: Iterable[Any], category: str) -> float:
    """Sum of expense amounts in ``category``; callers pre-filter the period."""

    return sum(
        amount_of(tx)
        for tx in transactions
        if kind_of(tx) == TransactionKind.EXPENSE.value and field_value(tx, "category") == category
    )


def remaining(budget_amount: float, spent: float) -> float:
    """Ceiling minus spend; negative when over budget."""

    return budget_amount - spent


def percent_used(budget_amount: float, spent: float) -> float:
    """Spend as a percentage of the ceiling, unbounded above 100. A zero ceiling reports 0."""

    if not budget_amount:
        return 0.0
    return spent / budget_amount * 100


def budget_status(budget: Budget, transactions: Iterable[Any], now: datetime) -> BudgetStatus:
    start, end = budget_window(budget.period, now)
    spent = category_spend(filter_period(transactions, start, end), budget.category)
    return BudgetStatus(
        budget=budget,
        spent=spent,
        remaining=remaining(budget.amount, spent),
        percent_used=percent_used(budget.amount, spent),
        window_start=start,
        window_end=end,
    )


class BudgetManager:
    """Budget CRUD plus spend tracking against the owner's transactions."""

    def __init__(self, store: RecordStore[Budget], transactions: TransactionStore):
        self.store = store
        self.transactions = transactions

    def list(self, owner_id: str) -> Result[list[Budget]]:
        return capture(
            "fetch",
            lambda: sort_newest_first(self.store.list(owner_id), attr="created_at"),
            logger=logger,
        )

    def create(self, owner_id: str, data: Mapping[str, Any]) -> Result[str]:
        def _create() -> str:
            form = BudgetForm.from_mapping(data)
            form.ensure_valid()
            return self.store.create(owner_id, form.to_fields())

        return capture("add", _create, logger=logger)

    def update(self, owner_id: str, budget_id: str, data: Mapping[str, Any]) -> Result[None]:
        def _update() -> None:
            form = BudgetForm.from_mapping(data)
            form.ensure_valid()
            self.store.update(owner_id, budget_id, form.to_fields())

        return capture("update", _update, logger=logger)

    def delete(self, owner_id: str, budget_id: str) -> Result[None]:
        return capture("delete", self.store.delete, owner_id, budget_id, logger=logger)

    def statuses(self, owner_id: str, now: datetime | None = None) -> Result[list[BudgetStatus]]:
        """Spent, remaining, and percent used for every budget in its current window."""

        reference = now or datetime.now()

        def _statuses() -> list[BudgetStatus]:
            budgets = sort_newest_first(self.store.list(owner_id), attr="created_at")
            if not budgets:
                return []
            transactions = self.transactions.list(owner_id)
            return [budget_status(budget, transactions, reference) for budget in budgets]

        return capture("fetch", _statuses, logger=logger)
