"""Debt balance, settlement, and payment tests."""

from __future__ import annotations

import pytest

from financetracker.errors import ErrorKind
from financetracker.models import Debt
from financetracker.services.debts import (
    DebtManager,
    DebtStatus,
    describe,
    remaining,
    status,
    totals,
)


@pytest.fixture
def manager(memory_store_factory):
    return DebtManager(memory_store_factory(Debt))


def _new_debt(manager, **overrides):
    data = {
        "direction": "owing",
        "counterparty_name": "Awa",
        "reason": "Rent advance",
        "total_amount": "100000",
    }
    data.update(overrides)
    result = manager.create("owner", data)
    assert result.ok, result.errors
    return result.value


def test_payments_settle_the_debt(manager):
    debt_id = _new_debt(manager)

    first = manager.add_payment("owner", debt_id, 30000)
    assert first.ok
    assert first.value == 70000
    debt = manager.store.records[debt_id]
    assert status(debt) is DebtStatus.OPEN

    second = manager.add_payment("owner", debt_id, "70000")
    assert second.value == 0
    assert status(manager.store.records[debt_id]) is DebtStatus.SETTLED


@pytest.mark.parametrize("amount", [0, -5, "", None, "abc"])
def test_non_positive_payments_never_reach_the_store(manager, amount):
    debt_id = _new_debt(manager)
    manager.store.calls.clear()

    result = manager.add_payment("owner", debt_id, amount)

    assert result.is_kind(ErrorKind.INVALID_ARGUMENT)
    assert "amount" in result.errors
    assert manager.store.calls == []
    assert manager.store.records[debt_id].paid_amount == 0


def test_overpayment_is_settled_with_negative_remaining(manager):
    debt_id = _new_debt(manager, total_amount="1000")

    result = manager.add_payment("owner", debt_id, 1500)

    assert result.value == -500
    assert status(manager.store.records[debt_id]) is DebtStatus.SETTLED


def test_payment_on_missing_debt_is_not_found(manager):
    result = manager.add_payment("owner", "nope", 100)

    assert result.is_kind(ErrorKind.NOT_FOUND)


def test_update_ignores_paid_amount(manager):
    debt_id = _new_debt(manager, paid_amount="2000")

    result = manager.update(
        "owner",
        debt_id,
        {
            "direction": "owing",
            "counterparty_name": "Awa D.",
            "total_amount": "120000",
            "paid_amount": "0",
        },
    )

    assert result.ok
    debt = manager.store.records[debt_id]
    assert debt.counterparty_name == "Awa D."
    assert debt.total_amount == 120000
    assert debt.paid_amount == 2000


def test_create_rejects_bad_direction_and_amount(manager):
    result = manager.create("owner", {"direction": "sideways", "counterparty_name": "", "total_amount": "0"})

    assert result.is_kind(ErrorKind.INVALID_ARGUMENT)
    assert set(result.errors) == {"direction", "counterparty_name", "total_amount"}


def test_totals_split_by_direction():
    debts = [
        Debt(owner_id="o", direction="owed", counterparty_name="A", total_amount=5000, paid_amount=1000),
        Debt(owner_id="o", direction="owed", counterparty_name="B", total_amount=2000, paid_amount=0),
        Debt(owner_id="o", direction="owing", counterparty_name="C", total_amount=3000, paid_amount=500),
    ]

    result = totals(debts)

    assert result.owed_to_user == 6000
    assert result.user_owes == 2500
    assert result.as_dict()["net"] == 3500


def test_describe_includes_derived_values():
    debt = Debt(owner_id="o", direction="owing", counterparty_name="A", total_amount=100, paid_amount=100)

    data = describe(debt)

    assert remaining(debt) == 0
    assert data["remaining"] == 0
    assert data["status"] == "settled"
    assert data["counterparty_name"] == "A"
