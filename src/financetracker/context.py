"""Application context for dependency injection."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from sqlalchemy.engine import Engine

from .config import BaseConfig
from .domain.repositories import RecordStore, TransactionStore
from .infra.database import SessionFactory, create_db_engine, create_session_factory, init_database
from .infra.repositories import SQLModelRecordStore, SQLModelTransactionStore
from .models import Budget, Debt, Note, Todo
from .services.budgeting import BudgetManager
from .services.debts import DebtManager
from .services.ledger_service import TransactionManager
from .services.notes import NoteManager, TodoManager
from .services.reports import ReportService


@dataclass
class AppContext:
    """Stores and managers shared by every request."""

    config: BaseConfig
    engine: Engine
    session_factory: SessionFactory

    # Stores
    transaction_store: TransactionStore
    budget_store: RecordStore[Budget]
    debt_store: RecordStore[Debt]
    note_store: RecordStore[Note]
    todo_store: RecordStore[Todo]

    # Managers
    transactions: TransactionManager
    budgets: BudgetManager
    debts: DebtManager
    notes: NoteManager
    todos: TodoManager
    reports: ReportService

    def dispose(self) -> None:
        self.engine.dispose()


def create_app_context(config: Optional[BaseConfig] = None) -> AppContext:
    """Create the engine, schema, stores, and managers."""

    if config is None:
        config = BaseConfig()

    engine = create_db_engine(config)
    init_database(engine)
    session_factory = create_session_factory(engine)

    transaction_store = SQLModelTransactionStore(session_factory)
    budget_store = SQLModelRecordStore(Budget, session_factory)
    debt_store = SQLModelRecordStore(Debt, session_factory)
    note_store = SQLModelRecordStore(Note, session_factory)
    todo_store = SQLModelRecordStore(Todo, session_factory)

    transactions = TransactionManager(transaction_store)
    return AppContext(
        config=config,
        engine=engine,
        session_factory=session_factory,
        transaction_store=transaction_store,
        budget_store=budget_store,
        debt_store=debt_store,
        note_store=note_store,
        todo_store=todo_store,
        transactions=transactions,
        budgets=BudgetManager(budget_store, transaction_store),
        debts=DebtManager(debt_store),
        notes=NoteManager(note_store),
        todos=TodoManager(todo_store),
        reports=ReportService(transactions, top_categories=config.TOP_CATEGORY_LIMIT),
    )
