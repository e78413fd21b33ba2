"""
Fixed option lists used by forms, validation, and the CSV importer.
Income and expense categories are disjoint apart from the shared "Other" bucket.
"""

from __future__ import annotations

from enum import Enum


class TransactionKind(str, Enum):
    INCOME = "Income"
    EXPENSE = "Expense"


class DebtDirection(str, Enum):
    OWED_TO_USER = "owed"
    USER_OWES = "owing"


class BudgetPeriod(str, Enum):
    MONTHLY = "monthly"
    YEARLY = "yearly"


# Transaction Categories - Income
INCOME_CATEGORIES = [
    "Initial Balance",
    "Salary",
    "Freelance",
    "Investment",
    "Gift",
    "Other",
]

# Transaction Categories - Expenses
EXPENSE_CATEGORIES = [
    "Food",
    "Transport",
    "Shopping",
    "Bills",
    "Entertainment",
    "Healthcare",
    "Education",
    "Other",
]

PAYMENT_METHODS = [
    "Cash",
    "Credit Card",
    "Debit Card",
    "Bank Transfer",
    "Digital Wallet",
    "Other",
]

RECURRING_FREQUENCIES = ["daily", "weekly", "monthly", "yearly"]

MONTH_LABELS = [
    "Jan", "Feb", "Mar", "Apr", "May", "Jun",
    "Jul", "Aug", "Sep", "Oct", "Nov", "Dec",
]

DEFAULT_CATEGORY = "Other"
DEFAULT_PAYMENT_METHOD = "Cash"
UNCATEGORIZED = "Uncategorized"


def categories_for(kind: TransactionKind | str) -> list[str]:
    """Return the category list matching a transaction kind."""

    value = kind.value if isinstance(kind, TransactionKind) else str(kind)
    if value == TransactionKind.INCOME.value:
        return INCOME_CATEGORIES
    return EXPENSE_CATEGORIES
