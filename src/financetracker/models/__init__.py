"""SQLModel table exports."""

from .budget import Budget
from .debt import Debt
from .note import Note, Todo
from .transaction import Transaction
from .user import User

__all__ = [
    "Budget",
    "Debt",
    "Note",
    "Todo",
    "Transaction",
    "User",
]
