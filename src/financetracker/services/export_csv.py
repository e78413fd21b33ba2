"""CSV and printable exports for transactions."""

from __future__ import annotations

import csv
import io
from datetime import datetime
from pathlib import Path
from typing import Any, Iterable

from ..constants import TransactionKind
from ..money import format_amount, format_signed
from .aggregation import amount_of, date_of, field_value, kind_of

EXPORT_HEADERS = [
    "Date",
    "Type",
    "Description",
    "Category",
    "Amount (FCFA)",
    "Payment Method",
    "Notes",
]
EXPORT_DATE_FORMAT = "%m/%d/%Y"


def _serialize_amount(value: float) -> str:
    if value.is_integer():
        return str(int(value))
    return repr(value)


def _serialize_date(record: Any) -> str:
    when = date_of(record)
    return when.strftime(EXPORT_DATE_FORMAT) if when is not None else ""


def _text(record: Any, name: str) -> str:
    value = field_value(record, name)
    return "" if value is None else str(value)


def export_row(record: Any) -> list[str]:
    """Column values for one transaction, in ``EXPORT_HEADERS`` order."""

    return [
        _serialize_date(record),
        kind_of(record) or "",
        _text(record, "description"),
        _text(record, "category"),
        _serialize_amount(amount_of(record)),
        _text(record, "payment_method"),
        _text(record, "notes"),
    ]


def transactions_to_csv(transactions: Iterable[Any]) -> str:
    """Render transactions as CSV text.

    The header row is bare; every value is double-quoted with embedded quotes
    doubled. Rows are joined with ``\\n`` and there is no trailing newline.
    """

    lines = [",".join(EXPORT_HEADERS)]
    lines.extend(_quoted_line(export_row(record)) for record in transactions)
    return "\n".join(lines)


def _quoted_line(values: list[str]) -> str:
    buffer = io.StringIO()
    csv.writer(buffer, quoting=csv.QUOTE_ALL, lineterminator="\n").writerow(values)
    return buffer.getvalue().removesuffix("\n")


def export_transactions_csv(*, transactions: Iterable[Any], output_path: Path) -> Path:
    """Write transactions to CSV at ``output_path`` and return the path written."""

    output_path.parent.mkdir(parents=True, exist_ok=True)
    # Use newline='' so embedded newlines survive on Windows
    with output_path.open("w", newline="", encoding="utf-8") as fh:
        fh.write(transactions_to_csv(transactions))
    return output_path


def export_filename(today: datetime | None = None) -> str:
    stamp = (today or datetime.now()).strftime("%Y-%m-%d")
    return f"transactions_{stamp}.csv"


def printable_report_context(
    transactions: Iterable[Any], *, generated_at: datetime | None = None
) -> dict[str, Any]:
    """Rows and totals for the printable transaction report template."""

    rows: list[dict[str, str]] = []
    income = 0.0
    expenses = 0.0
    for record in transactions:
        kind = kind_of(record) or ""
        amount = amount_of(record)
        is_income = kind == TransactionKind.INCOME.value
        if is_income:
            income += amount
        elif kind == TransactionKind.EXPENSE.value:
            expenses += amount
        rows.append(
            {
                "date": _serialize_date(record),
                "kind": kind,
                "description": _text(record, "description"),
                "category": _text(record, "category"),
                "amount": format_signed(amount, is_income),
                "payment_method": _text(record, "payment_method"),
                "notes": _text(record, "notes"),
            }
        )

    balance = income - expenses
    return {
        "headers": EXPORT_HEADERS,
        "rows": rows,
        "generated_at": (generated_at or datetime.now()).strftime("%m/%d/%Y %H:%M"),
        "total_income": format_amount(income),
        "total_expenses": format_amount(expenses),
        "net_balance": format_signed(abs(balance), balance >= 0),
    }
