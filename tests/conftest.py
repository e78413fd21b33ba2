"""Pytest configuration and shared fixtures for FinanceTracker tests.

Provides a throwaway SQLite database per test, SQLModel stores bound to it,
an in-memory store fake with failure injection for manager tests, record
factories, and a Flask app/client configured through environment variables.
"""

from __future__ import annotations

from datetime import date, datetime
from typing import Any, Mapping

import pytest
from sqlmodel import create_engine

from financetracker import create_app
from financetracker.errors import ErrorKind, StoreError
from financetracker.infra.database import create_session_factory, init_database
from financetracker.infra.repositories import SQLModelRecordStore, SQLModelTransactionStore
from financetracker.models import Budget, Debt, Note, Todo, Transaction
from financetracker.models._ids import new_id
from financetracker.periods import at_noon
from financetracker.services.auth import sign_up

# =============================================================================
# Database Fixtures
# =============================================================================


@pytest.fixture(scope="function")
def db_engine(tmp_path):
    """Fresh SQLite file with every table created."""
    engine = create_engine(f"sqlite:///{tmp_path / 'test.db'}", echo=False)
    init_database(engine)
    yield engine
    engine.dispose()


@pytest.fixture
def session_factory(db_engine):
    return create_session_factory(db_engine)


@pytest.fixture
def user(session_factory):
    return sign_up(email="owner@example.com", password="secret123", session_factory=session_factory)


@pytest.fixture
def other_user(session_factory):
    return sign_up(email="other@example.com", password="secret123", session_factory=session_factory)


@pytest.fixture
def transaction_store(session_factory):
    return SQLModelTransactionStore(session_factory)


@pytest.fixture
def budget_store(session_factory):
    return SQLModelRecordStore(Budget, session_factory)


@pytest.fixture
def debt_store(session_factory):
    return SQLModelRecordStore(Debt, session_factory)


@pytest.fixture
def note_store(session_factory):
    return SQLModelRecordStore(Note, session_factory)


@pytest.fixture
def todo_store(session_factory):
    return SQLModelRecordStore(Todo, session_factory)


# =============================================================================
# In-memory store fake
# =============================================================================


class InMemoryStore:
    """Dict-backed record store.

    ``failures`` maps an operation name (``list``, ``get``, ``create``,
    ``update``, ``delete``, ``list_between``) to the ``ErrorKind`` it should
    raise. ``ranged_queries=False`` makes ``list_between`` behave like a
    backend without a date index.
    """

    def __init__(self, model, *, ranged_queries: bool = True):
        self.model = model
        self.records: dict[str, Any] = {}
        self.failures: dict[str, ErrorKind] = {}
        self.ranged_queries = ranged_queries
        self.calls: list[str] = []

    def _enter(self, operation: str) -> None:
        self.calls.append(operation)
        kind = self.failures.get(operation)
        if kind is not None:
            raise StoreError(f"injected {kind.value}", kind=kind)

    def _owned(self, owner_id: str, record_id: str):
        record = self.records.get(record_id)
        if record is None or record.owner_id != owner_id:
            raise StoreError("missing", kind=ErrorKind.NOT_FOUND)
        return record

    def list(self, owner_id: str):
        self._enter("list")
        return [r for r in self.records.values() if r.owner_id == owner_id]

    def list_between(self, owner_id: str, start: datetime, end: datetime):
        self._enter("list_between")
        if not self.ranged_queries:
            raise StoreError("index required", kind=ErrorKind.FAILED_PRECONDITION)
        return [
            r for r in self.records.values() if r.owner_id == owner_id and start <= r.date <= end
        ]

    def get(self, owner_id: str, record_id: str):
        self._enter("get")
        return self._owned(owner_id, record_id)

    def create(self, owner_id: str, fields: Mapping[str, Any]) -> str:
        self._enter("create")
        payload = {k: v for k, v in fields.items() if k not in {"id", "owner_id"}}
        record = self.model(id=new_id(), owner_id=owner_id, **payload)
        self.records[record.id] = record
        return record.id

    def update(self, owner_id: str, record_id: str, fields: Mapping[str, Any]) -> None:
        self._enter("update")
        record = self._owned(owner_id, record_id)
        for key, value in fields.items():
            if key not in {"id", "owner_id"}:
                setattr(record, key, value)

    def delete(self, owner_id: str, record_id: str) -> None:
        self._enter("delete")
        self._owned(owner_id, record_id)
        del self.records[record_id]


@pytest.fixture
def memory_store_factory():
    """Build ``InMemoryStore`` instances for any model."""

    def _factory(model, **kwargs):
        return InMemoryStore(model, **kwargs)

    return _factory


# =============================================================================
# Record factories
# =============================================================================


@pytest.fixture
def tx_factory():
    """Create unsaved ``Transaction`` models with sensible defaults."""

    def _factory(
        kind: str = "Expense",
        amount: float = 1000.0,
        category: str | None = None,
        day: date | datetime | None = date(2025, 1, 15),
        owner_id: str = "owner",
        **overrides: Any,
    ) -> Transaction:
        if category is None:
            category = "Salary" if kind == "Income" else "Food"
        return Transaction(
            id=new_id(),
            owner_id=owner_id,
            date=at_noon(day) if isinstance(day, date) and not isinstance(day, datetime) else day,
            kind=kind,
            description=overrides.pop("description", f"{category} entry"),
            category=category,
            amount=amount,
            payment_method=overrides.pop("payment_method", "Cash"),
            **overrides,
        )

    return _factory


@pytest.fixture
def transaction_payload():
    """Valid request/form payload for a transaction."""

    def _payload(**overrides: Any) -> dict[str, Any]:
        data = {
            "date": "2025-01-15",
            "kind": "Expense",
            "description": "Groceries",
            "category": "Food",
            "amount": "15000",
            "payment_method": "Cash",
            "notes": "",
        }
        data.update(overrides)
        return data

    return _payload


# =============================================================================
# Flask Fixtures
# =============================================================================


@pytest.fixture
def app(monkeypatch, tmp_path):
    """Flask app bound to a temp data dir and database."""

    monkeypatch.setenv("FINANCETRACKER_DATA_DIR", str(tmp_path))
    monkeypatch.setenv("FINANCETRACKER_DATABASE_URL", f"sqlite:///{tmp_path / 'app.db'}")
    monkeypatch.setenv("FINANCETRACKER_SECRET_KEY", "test-secret")
    monkeypatch.setenv("FINANCETRACKER_DEV_MODE", "true")
    flask_app = create_app("testing")
    yield flask_app
    flask_app.extensions["financetracker"].dispose()


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def auth_client(client):
    """Test client with a signed-up, signed-in user."""

    response = client.post(
        "/auth/signup", json={"email": "client@example.com", "password": "secret123"}
    )
    assert response.status_code == 201
    return client
