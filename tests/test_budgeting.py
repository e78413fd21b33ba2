"""Budget spend tracking tests."""

from __future__ import annotations

from datetime import date, datetime

import pytest

from financetracker.errors import ErrorKind
from financetracker.models import Budget, Transaction
from financetracker.services.budgeting import (
    BudgetManager,
    budget_status,
    budget_window,
    category_spend,
    percent_used,
    remaining,
)


def test_over_budget_scenario(tx_factory):
    budget = Budget(owner_id="owner", category="Food", amount=50000, period="monthly")
    txs = [
        tx_factory("Expense", 35000, "Food", date(2025, 1, 4)),
        tx_factory("Expense", 25000, "Food", date(2025, 1, 20)),
        tx_factory("Expense", 9000, "Transport", date(2025, 1, 20)),
        tx_factory("Income", 9000, "Other", date(2025, 1, 20)),
    ]

    status = budget_status(budget, txs, datetime(2025, 1, 25))

    assert status.spent == 60000
    assert status.percent_used == pytest.approx(120)
    assert status.remaining == -10000
    assert status.over_budget is True


def test_monthly_window_ignores_other_months(tx_factory):
    budget = Budget(owner_id="owner", category="Food", amount=1000, period="monthly")
    txs = [
        tx_factory("Expense", 400, "Food", date(2024, 12, 31)),
        tx_factory("Expense", 300, "Food", date(2025, 1, 2)),
    ]

    status = budget_status(budget, txs, datetime(2025, 1, 10))

    assert status.spent == 300
    assert status.remaining == 700
    assert status.over_budget is False


def test_yearly_window_spans_the_year():
    start, end = budget_window("yearly", datetime(2025, 6, 1))

    assert start == datetime(2025, 1, 1)
    assert end.date() == date(2025, 12, 31)


def test_percent_used_with_zero_ceiling():
    assert percent_used(0, 500) == 0.0
    assert remaining(0, 500) == -500


def test_category_spend_only_counts_expenses():
    records = [
        {"kind": "Expense", "category": "Bills", "amount": 10},
        {"kind": "Income", "category": "Bills", "amount": 99},
        {"kind": "Expense", "category": "Food", "amount": 5},
    ]

    assert category_spend(records, "Bills") == 10


@pytest.fixture
def manager(memory_store_factory):
    return BudgetManager(memory_store_factory(Budget), memory_store_factory(Transaction))


def test_manager_create_validates(manager):
    result = manager.create("owner", {"category": "Salary", "amount": "0", "period": "weekly"})

    assert result.is_kind(ErrorKind.INVALID_ARGUMENT)
    assert set(result.errors) == {"category", "amount", "period"}
    assert manager.store.calls == []


def test_manager_statuses_for_owner(manager, tx_factory):
    created = manager.create("owner", {"category": "Food", "amount": "50000"})
    manager.create("someone-else", {"category": "Food", "amount": "1"})
    for tx in [
        tx_factory("Expense", 20000, "Food", date(2025, 1, 3)),
        tx_factory("Expense", 5000, "Food", date(2025, 1, 3), owner_id="someone-else"),
    ]:
        manager.transactions.records[tx.id] = tx

    result = manager.statuses("owner", now=datetime(2025, 1, 15))

    assert created.ok
    assert result.ok
    assert len(result.value) == 1
    status = result.value[0]
    assert status.budget.id == created.value
    assert status.spent == 20000
    assert status.as_dict()["percent_used"] == pytest.approx(40)


def test_manager_allows_duplicate_categories(manager):
    manager.create("owner", {"category": "Food", "amount": "100"})
    manager.create("owner", {"category": "Food", "amount": "200"})

    assert len(manager.list("owner").value) == 2


def test_manager_update_and_delete_missing(manager):
    update = manager.update("owner", "missing", {"category": "Food", "amount": "10"})
    delete = manager.delete("owner", "missing")

    assert update.is_kind(ErrorKind.NOT_FOUND)
    assert delete.is_kind(ErrorKind.NOT_FOUND)


def test_statuses_surface_store_failures(manager):
    manager.store.failures["list"] = ErrorKind.UNAVAILABLE

    result = manager.statuses("owner")

    assert not result.ok
    assert result.kind is ErrorKind.UNAVAILABLE
