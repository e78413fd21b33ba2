"""SQLModel record store tests."""

from __future__ import annotations

from datetime import datetime

import pytest
from sqlalchemy import DateTime
from sqlalchemy.exc import IntegrityError, OperationalError

from financetracker.errors import ErrorKind, StoreError
from financetracker.infra.repositories import SQLModelTransactionStore, translate_errors
from financetracker.models import Budget, Debt, Note, Todo, Transaction, User
from financetracker.periods import end_of_month, start_of_month


def _fields(**overrides):
    data = {
        "date": datetime(2025, 1, 15, 12),
        "kind": "Expense",
        "description": "Lunch",
        "category": "Food",
        "amount": 3500.0,
        "payment_method": "Cash",
    }
    data.update(overrides)
    return data


def test_create_and_list_are_owner_scoped(transaction_store, user, other_user):
    mine = transaction_store.create(user.id, _fields())
    transaction_store.create(other_user.id, _fields(description="Theirs"))

    records = transaction_store.list(user.id)

    assert [r.id for r in records] == [mine]
    assert records[0].owner_id == user.id
    assert len(mine) == 32


def test_get_missing_or_foreign_is_not_found(transaction_store, user, other_user):
    tx_id = transaction_store.create(user.id, _fields())

    with pytest.raises(StoreError) as excinfo:
        transaction_store.get(other_user.id, tx_id)
    assert excinfo.value.kind is ErrorKind.NOT_FOUND

    with pytest.raises(StoreError):
        transaction_store.get(user.id, "does-not-exist")


def test_update_ignores_owner_and_id(transaction_store, user, other_user):
    tx_id = transaction_store.create(user.id, _fields())

    transaction_store.update(
        user.id, tx_id, {"description": "Dinner", "owner_id": other_user.id, "id": "hijack"}
    )

    record = transaction_store.get(user.id, tx_id)
    assert record.description == "Dinner"
    assert record.owner_id == user.id


def test_update_unknown_field_is_invalid(transaction_store, user):
    tx_id = transaction_store.create(user.id, _fields())

    with pytest.raises(StoreError) as excinfo:
        transaction_store.update(user.id, tx_id, {"colour": "red"})
    assert excinfo.value.kind is ErrorKind.INVALID_ARGUMENT


def test_delete_then_delete_again(transaction_store, user):
    tx_id = transaction_store.create(user.id, _fields())

    transaction_store.delete(user.id, tx_id)

    assert transaction_store.list(user.id) == []
    with pytest.raises(StoreError) as excinfo:
        transaction_store.delete(user.id, tx_id)
    assert excinfo.value.kind is ErrorKind.NOT_FOUND


def test_missing_required_column_is_invalid_argument(transaction_store, user):
    fields = _fields()
    del fields["description"]

    with pytest.raises(StoreError) as excinfo:
        transaction_store.create(user.id, fields)
    assert excinfo.value.kind is ErrorKind.INVALID_ARGUMENT


def test_list_between_filters_dates(transaction_store, user):
    transaction_store.create(user.id, _fields(date=datetime(2024, 12, 31, 12)))
    inside = transaction_store.create(user.id, _fields(date=datetime(2025, 1, 31, 12)))

    records = transaction_store.list_between(user.id, start_of_month(2025, 1), end_of_month(2025, 1))

    assert [r.id for r in records] == [inside]


def test_list_between_without_index_support(session_factory, user):
    store = SQLModelTransactionStore(session_factory, supports_range_queries=False)

    with pytest.raises(StoreError) as excinfo:
        store.list_between(user.id, start_of_month(2025, 1), end_of_month(2025, 1))
    assert excinfo.value.kind is ErrorKind.FAILED_PRECONDITION


@pytest.mark.parametrize(
    "exc, kind",
    [
        (OperationalError("SELECT 1", {}, Exception("database is locked")), ErrorKind.UNAVAILABLE),
        (IntegrityError("INSERT", {}, Exception("NOT NULL")), ErrorKind.INVALID_ARGUMENT),
    ],
)
def test_translate_errors_maps_sqlalchemy_exceptions(exc, kind):
    with pytest.raises(StoreError) as excinfo:
        with translate_errors("list", "transaction"):
            raise exc
    assert excinfo.value.kind is kind


def test_translate_errors_passes_store_errors_through():
    with pytest.raises(StoreError) as excinfo:
        with translate_errors("get", "transaction"):
            raise StoreError("gone", kind=ErrorKind.NOT_FOUND)
    assert excinfo.value.kind is ErrorKind.NOT_FOUND


@pytest.mark.parametrize("model", [User, Transaction, Budget, Debt, Note, Todo])
def test_datetime_columns_store_naive_values(model):
    columns = [c for c in model.__table__.columns if c.name in {"date", "created_at", "last_login"}]

    assert columns
    for column in columns:
        assert type(column.type) is DateTime, column.name
        assert column.type.timezone is False


def test_naive_datetimes_round_trip(transaction_store, user):
    tx_id = transaction_store.create(user.id, _fields(date=datetime(2025, 1, 15, 12)))

    stored = transaction_store.get(user.id, tx_id)

    assert stored.date == datetime(2025, 1, 15, 12)
    assert stored.date.tzinfo is None
    assert stored.created_at.tzinfo is None
