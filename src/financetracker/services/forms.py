"""Input forms and validation helpers for transactions, budgets, and debts."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from decimal import Decimal, InvalidOperation
from typing import Any, Dict, Iterable, List, Mapping

from ..constants import (
    EXPENSE_CATEGORIES,
    PAYMENT_METHODS,
    RECURRING_FREQUENCIES,
    BudgetPeriod,
    DebtDirection,
    TransactionKind,
    categories_for,
)
from ..errors import ValidationError
from ..periods import at_noon, parse_calendar_date

_TRUE_VALUES = {"1", "true", "yes", "on"}


def _text(value: Any) -> str:
    return "" if value is None else str(value).strip()


def _flag(value: Any) -> bool:
    if isinstance(value, bool):
        return value
    return _text(value).lower() in _TRUE_VALUES


@dataclass(slots=True)
class _Form:
    """Shared error bookkeeping."""

    errors: Dict[str, List[str]] = field(default_factory=dict, init=False)

    def _add_error(self, name: str, message: str) -> None:
        self.errors.setdefault(name, []).append(message)

    def _parse_amount(self, name: str, value: Any, *, allow_zero: bool = False) -> float | None:
        """Parse a numeric amount, recording an error when it is missing or out of range."""

        if value is None or value == "":
            self._add_error(name, "This field is required.")
            return None
        if isinstance(value, bool):
            self._add_error(name, "Enter a valid number.")
            return None
        try:
            amount = Decimal(str(value).strip())
        except (InvalidOperation, TypeError, ValueError):
            self._add_error(name, "Enter a valid number.")
            return None
        if not amount.is_finite():
            self._add_error(name, "Enter a valid number.")
            return None
        if amount < 0 or (amount == 0 and not allow_zero):
            self._add_error(
                name,
                "Amount must be at least zero." if allow_zero else "Amount must be greater than zero.",
            )
            return None
        return float(amount)

    def ensure_valid(self) -> None:
        """Raise ``ValidationError`` unless ``validate()`` passes."""

        if not self.validate():  # type: ignore[attr-defined]
            raise ValidationError(self.errors)

    @property
    def error_messages(self) -> Iterable[str]:
        """Flattened iterable of error strings for summaries."""

        for messages in self.errors.values():
            yield from messages


@dataclass(slots=True)
class TransactionForm(_Form):
    """Transaction input prior to validation; ``to_fields`` yields store-ready values."""

    date: Any = None
    kind: str = TransactionKind.EXPENSE.value
    description: str = ""
    category: str = ""
    amount: Any = None
    payment_method: str = ""
    notes: str = ""
    is_recurring: bool = False
    recurring_frequency: str | None = None
    _day: date | None = field(default=None, init=False, repr=False)
    _amount: float | None = field(default=None, init=False, repr=False)

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> "TransactionForm":
        kind = _text(data.get("kind") or data.get("type")) or TransactionKind.EXPENSE.value
        return cls(
            date=data.get("date"),
            kind=kind,
            description=_text(data.get("description")),
            category=_text(data.get("category")),
            amount=data.get("amount"),
            payment_method=_text(data.get("payment_method") or data.get("paymentMethod")),
            notes=_text(data.get("notes")),
            is_recurring=_flag(data.get("is_recurring")),
            recurring_frequency=_text(data.get("recurring_frequency")) or None,
        )

    def validate(self) -> bool:
        self.errors.clear()

        kinds = {member.value for member in TransactionKind}
        if self.kind not in kinds:
            self._add_error("kind", "Choose Income or Expense.")

        self._day = parse_calendar_date(self.date) if self.date not in (None, "") else None
        if self._day is None:
            self._add_error("date", "Enter a valid date.")

        if not self.description:
            self._add_error("description", "Description is required.")

        if not self.category:
            self._add_error("category", "Category is required.")
        elif self.kind in kinds and self.category not in categories_for(self.kind):
            self._add_error("category", f"'{self.category}' is not a {self.kind.lower()} category.")

        self._amount = self._parse_amount("amount", self.amount)

        if not self.payment_method:
            self._add_error("payment_method", "Payment method is required.")
        elif self.payment_method not in PAYMENT_METHODS:
            self._add_error("payment_method", "Choose a known payment method.")

        if self.is_recurring:
            if self.recurring_frequency not in RECURRING_FREQUENCIES:
                self._add_error("recurring_frequency", "Choose how often this repeats.")
        return not self.errors

    def to_fields(self) -> dict[str, Any]:
        """Store payload; call only after ``validate()`` succeeded."""

        assert self._day is not None and self._amount is not None
        return {
            "date": at_noon(self._day),
            "kind": self.kind,
            "description": self.description,
            "category": self.category,
            "amount": self._amount,
            "payment_method": self.payment_method,
            "notes": self.notes,
            "is_recurring": self.is_recurring,
            "recurring_frequency": self.recurring_frequency if self.is_recurring else None,
        }


@dataclass(slots=True)
class BudgetForm(_Form):
    category: str = ""
    amount: Any = None
    period: str = BudgetPeriod.MONTHLY.value
    _amount: float | None = field(default=None, init=False, repr=False)

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> "BudgetForm":
        return cls(
            category=_text(data.get("category")),
            amount=data.get("amount"),
            period=_text(data.get("period")) or BudgetPeriod.MONTHLY.value,
        )

    def validate(self) -> bool:
        self.errors.clear()
        if self.category not in EXPENSE_CATEGORIES:
            self._add_error("category", "Choose an expense category.")
        self._amount = self._parse_amount("amount", self.amount)
        if self.period not in {member.value for member in BudgetPeriod}:
            self._add_error("period", "Period must be monthly or yearly.")
        return not self.errors

    def to_fields(self) -> dict[str, Any]:
        return {"category": self.category, "amount": self._amount, "period": self.period}


@dataclass(slots=True)
class DebtForm(_Form):
    """Debt input; ``paid_amount`` is only honoured when creating."""

    direction: str = ""
    counterparty_name: str = ""
    reason: str = ""
    total_amount: Any = None
    paid_amount: Any = 0
    due_date: Any = None
    notes: str = ""
    _total: float | None = field(default=None, init=False, repr=False)
    _paid: float | None = field(default=None, init=False, repr=False)
    _due: date | None = field(default=None, init=False, repr=False)

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> "DebtForm":
        paid = data.get("paid_amount")
        return cls(
            direction=_text(data.get("direction") or data.get("type")),
            counterparty_name=_text(data.get("counterparty_name") or data.get("person_name")),
            reason=_text(data.get("reason")),
            total_amount=data.get("total_amount"),
            paid_amount=0 if paid in (None, "") else paid,
            due_date=data.get("due_date"),
            notes=_text(data.get("notes")),
        )

    def validate(self) -> bool:
        self.errors.clear()
        if self.direction not in {member.value for member in DebtDirection}:
            self._add_error("direction", "Choose who owes whom.")
        if not self.counterparty_name:
            self._add_error("counterparty_name", "Enter the person's name.")
        self._total = self._parse_amount("total_amount", self.total_amount)
        self._paid = self._parse_amount("paid_amount", self.paid_amount, allow_zero=True)
        self._due = None
        if self.due_date not in (None, ""):
            self._due = parse_calendar_date(self.due_date)
            if self._due is None:
                self._add_error("due_date", "Enter a valid date.")
        return not self.errors

    def to_fields(self, *, include_paid: bool = True) -> dict[str, Any]:
        fields: dict[str, Any] = {
            "direction": self.direction,
            "counterparty_name": self.counterparty_name,
            "reason": self.reason,
            "total_amount": self._total,
            "due_date": self._due,
            "notes": self.notes,
        }
        if include_paid:
            fields["paid_amount"] = self._paid
        return fields


@dataclass(slots=True)
class PaymentForm(_Form):
    """A positive payment delta applied to a debt."""

    amount: Any = None
    _amount: float | None = field(default=None, init=False, repr=False)

    def validate(self) -> bool:
        self.errors.clear()
        self._amount = self._parse_amount("amount", self.amount)
        return not self.errors

    @property
    def value(self) -> float:
        assert self._amount is not None
        return self._amount

