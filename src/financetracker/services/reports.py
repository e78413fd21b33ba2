"""Dashboard and report payloads plus matplotlib chart rendering."""

from __future__ import annotations

import io
from dataclasses import asdict
from datetime import datetime
from typing import Any, Iterable, Sequence

import matplotlib

matplotlib.use("Agg")

import matplotlib.pyplot as plt  # noqa: E402
from matplotlib.figure import Figure  # noqa: E402

from ..config import CURRENCY_LABEL  # noqa: E402
from ..constants import TransactionKind  # noqa: E402
from ..errors import Result  # noqa: E402
from ..money import format_amount, group_thousands  # noqa: E402
from ..periods import month_window, year_window  # noqa: E402
from .aggregation import (  # noqa: E402
    CategoryTotal,
    MonthBucket,
    WeekBucket,
    bucket_by_category,
    bucket_by_month,
    bucket_by_week,
    compute_summary,
)
from .ledger_service import TransactionManager  # noqa: E402

RECENT_LIMIT = 5
INCOME_COLOR = "#10B981"
EXPENSE_COLOR = "#EF4444"


def _week_dict(bucket: WeekBucket) -> dict[str, Any]:
    return {
        "label": bucket.label,
        "start": bucket.start.date().isoformat(),
        "end": bucket.end.date().isoformat(),
        "income": bucket.income,
        "expense": bucket.expense,
    }


def _categories_payload(entries: Sequence[CategoryTotal]) -> list[dict[str, Any]]:
    total = sum(entry.amount for entry in entries)
    return [
        {
            "category": entry.category,
            "amount": entry.amount,
            "formatted": format_amount(entry.amount),
            "share": (entry.amount / total * 100) if total else 0.0,
        }
        for entry in entries
    ]


def _forward_failure(result: Result) -> Result:
    return Result.failure(result.kind, result.message, code=result.code, errors=result.errors)


class ReportService:
    """Builds report payloads from an owner's transactions."""

    def __init__(self, transactions: TransactionManager, *, top_categories: int = 5):
        self.transactions = transactions
        self.top_categories = top_categories

    def dashboard(self, owner_id: str, now: datetime | None = None) -> Result[dict[str, Any]]:
        """Current-month summary, weekly buckets, top expense categories, and recent entries."""

        reference = now or datetime.now()
        start, end = month_window(reference.year, reference.month)
        fetched = self.transactions.fetch_period(owner_id, start, end)
        if not fetched.ok:
            return _forward_failure(fetched)
        records = fetched.value or []
        summary = compute_summary(records, start, end, now=reference)
        weeks = bucket_by_week(records, reference.month, reference.year, now=reference)
        return Result.success(
            {
                "month": reference.month,
                "year": reference.year,
                "summary": summary.as_dict(),
                "weeks": [_week_dict(bucket) for bucket in weeks],
                "top_categories": _categories_payload(
                    bucket_by_category(records, TransactionKind.EXPENSE, self.top_categories)
                ),
                "recent": [tx.model_dump(mode="json") for tx in records[:RECENT_LIMIT]],
            }
        )

    def monthly(
        self, owner_id: str, year: int, month: int, now: datetime | None = None
    ) -> Result[dict[str, Any]]:
        reference = now or datetime.now()
        start, end = month_window(year, month)
        fetched = self.transactions.fetch_period(owner_id, start, end)
        if not fetched.ok:
            return _forward_failure(fetched)
        records = fetched.value or []
        return Result.success(
            {
                "month": month,
                "year": year,
                "summary": compute_summary(records, start, end, now=reference).as_dict(),
                "weeks": [
                    _week_dict(bucket)
                    for bucket in bucket_by_week(records, month, year, now=reference)
                ],
                "expense_categories": _categories_payload(
                    bucket_by_category(records, TransactionKind.EXPENSE)
                ),
                "income_categories": _categories_payload(
                    bucket_by_category(records, TransactionKind.INCOME)
                ),
                "transaction_count": len(records),
            }
        )

    def yearly(self, owner_id: str, year: int, now: datetime | None = None) -> Result[dict[str, Any]]:
        reference = now or datetime.now()
        start, end = year_window(year)
        fetched = self.transactions.fetch_period(owner_id, start, end)
        if not fetched.ok:
            return _forward_failure(fetched)
        records = fetched.value or []
        return Result.success(
            {
                "year": year,
                "summary": compute_summary(records, start, end, now=reference).as_dict(),
                "months": [asdict(bucket) for bucket in bucket_by_month(records, year)],
                "expense_categories": _categories_payload(
                    bucket_by_category(records, TransactionKind.EXPENSE)
                ),
            }
        )

    def weekly_chart_png(
        self, owner_id: str, year: int, month: int, now: datetime | None = None
    ) -> Result[bytes]:
        start, end = month_window(year, month)
        fetched = self.transactions.fetch_period(owner_id, start, end)
        if not fetched.ok:
            return _forward_failure(fetched)
        weeks = bucket_by_week(fetched.value or [], month, year, now=now)
        return Result.success(figure_to_png(build_weekly_chart(weeks)))

    def category_chart_png(self, owner_id: str, year: int, month: int) -> Result[bytes]:
        start, end = month_window(year, month)
        fetched = self.transactions.fetch_period(owner_id, start, end)
        if not fetched.ok:
            return _forward_failure(fetched)
        categories = bucket_by_category(fetched.value or [], TransactionKind.EXPENSE)
        return Result.success(figure_to_png(build_category_chart(categories)))


def build_weekly_chart(weeks: Iterable[WeekBucket | MonthBucket]) -> Figure:
    """Grouped income/expense bars, one pair per bucket."""

    buckets = list(weeks)
    labels = [bucket.label for bucket in buckets]
    positions = range(len(buckets))
    width = 0.38

    fig, ax = plt.subplots(figsize=(9, 4.5))
    ax.bar(
        [p - width / 2 for p in positions],
        [bucket.income for bucket in buckets],
        width,
        label="Income",
        color=INCOME_COLOR,
    )
    ax.bar(
        [p + width / 2 for p in positions],
        [bucket.expense for bucket in buckets],
        width,
        label="Expenses",
        color=EXPENSE_COLOR,
    )
    ax.set_xticks(list(positions))
    ax.set_xticklabels(labels)
    ax.yaxis.set_major_formatter(lambda value, _pos: group_thousands(int(value)))
    ax.set_ylabel(CURRENCY_LABEL)
    ax.legend(loc="upper right")
    ax.spines["top"].set_visible(False)
    ax.spines["right"].set_visible(False)
    fig.tight_layout()
    return fig


def build_category_chart(categories: Sequence[CategoryTotal]) -> Figure:
    """Expense donut with a legend of formatted amounts."""

    fig, ax = plt.subplots(figsize=(8, 6))
    sizes = [entry.amount for entry in categories if entry.amount > 0]
    if sizes:
        labels = [entry.category for entry in categories if entry.amount > 0]
        total = sum(sizes)
        cmap = plt.get_cmap("tab20c")
        colors = [cmap(i / max(len(sizes), 1)) for i in range(len(sizes))]
        wedges, _texts = ax.pie(
            sizes,
            wedgeprops=dict(width=0.45, edgecolor="white", linewidth=1.5),
            startangle=90,
            colors=colors,
        )
        ax.text(0, 0, format_amount(total), ha="center", va="center", fontsize=14, fontweight="bold")
        ax.legend(
            wedges,
            [f"{label}: {format_amount(size)}" for label, size in zip(labels, sizes)],
            title="Categories",
            loc="center left",
            bbox_to_anchor=(1.02, 0.5),
            fontsize=9,
        )
        ax.axis("equal")
        ax.set_title("Expenses by Category", fontsize=14, fontweight="bold")
    else:
        ax.text(0.5, 0.5, "No expense data", ha="center", va="center", fontsize=14, color="#666")
        ax.axis("off")
    fig.tight_layout()
    return fig


def figure_to_png(fig: Figure, *, dpi: int = 120) -> bytes:
    """Render ``fig`` to PNG bytes and release it."""

    buffer = io.BytesIO()
    try:
        fig.savefig(buffer, format="png", bbox_inches="tight", dpi=dpi)
    finally:
        plt.close(fig)
    return buffer.getvalue()
