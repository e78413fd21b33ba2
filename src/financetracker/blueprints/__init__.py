"""Blueprint exports."""

from . import auth, budgets, debts, ledger, notes, preferences, reports, todos

__all__ = [
    "auth",
    "budgets",
    "debts",
    "ledger",
    "notes",
    "preferences",
    "reports",
    "todos",
]
