"""Enumerations and fixed option lists."""

from .categories import (
    DEFAULT_CATEGORY,
    DEFAULT_PAYMENT_METHOD,
    EXPENSE_CATEGORIES,
    INCOME_CATEGORIES,
    MONTH_LABELS,
    PAYMENT_METHODS,
    RECURRING_FREQUENCIES,
    UNCATEGORIZED,
    BudgetPeriod,
    DebtDirection,
    TransactionKind,
    categories_for,
)

__all__ = [
    "BudgetPeriod",
    "DEFAULT_CATEGORY",
    "DEFAULT_PAYMENT_METHOD",
    "DebtDirection",
    "EXPENSE_CATEGORIES",
    "INCOME_CATEGORIES",
    "MONTH_LABELS",
    "PAYMENT_METHODS",
    "RECURRING_FREQUENCIES",
    "TransactionKind",
    "UNCATEGORIZED",
    "categories_for",
]
