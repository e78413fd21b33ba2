"""Transaction aggregation: summaries, week/month/category buckets, and filters.

Every function here is pure. Inputs may be ``Transaction`` models or plain
mappings (as produced by the CSV importer), and malformed records degrade
instead of raising: a record without a usable date is left out of anything
date-bounded, and a missing or invalid amount counts as zero.
"""

from __future__ import annotations

import math
from dataclasses import asdict, dataclass
from datetime import datetime, timedelta
from typing import Any, Iterable, Mapping, Optional, Sequence, TypeVar

from ..constants import MONTH_LABELS, UNCATEGORIZED, TransactionKind
from ..periods import (
    coerce_datetime,
    end_of_day,
    end_of_month,
    start_of_day,
    start_of_month,
    week_start,
)

T = TypeVar("T")

_BLANK_FILTER_VALUES = {"", "all"}


@dataclass(slots=True)
class Summary:
    """Totals for a period."""

    total_income: float
    total_expenses: float
    balance: float
    average_daily_expense: float

    def as_dict(self) -> dict[str, float]:
        return asdict(self)


@dataclass(slots=True)
class WeekBucket:
    label: str
    start: datetime
    end: datetime
    income: float = 0.0
    expense: float = 0.0


@dataclass(slots=True)
class CategoryTotal:
    category: str
    amount: float


@dataclass(slots=True)
class MonthBucket:
    label: str
    month: int
    income: float = 0.0
    expense: float = 0.0


@dataclass(slots=True)
class TransactionFilter:
    """Optional constraints combined with logical AND."""

    kind: Optional[str] = None
    category: Optional[str] = None
    start_date: Optional[datetime] = None
    end_date: Optional[datetime] = None

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> "TransactionFilter":
        """Build a filter from query-string style input; blank or ``all`` means unconstrained."""

        def text(key: str) -> Optional[str]:
            value = data.get(key)
            if value is None:
                return None
            value = str(value).strip()
            return None if value.lower() in _BLANK_FILTER_VALUES else value

        return cls(
            kind=text("kind") or text("type"),
            category=text("category"),
            start_date=coerce_datetime(text("start_date")),
            end_date=coerce_datetime(text("end_date")),
        )

    def is_empty(self) -> bool:
        return not (self.kind or self.category or self.start_date or self.end_date)


# Field access -------------------------------------------------------------


def field_value(record: Any, name: str, default: Any = None) -> Any:
    """Read ``name`` from a mapping or an object attribute."""

    if isinstance(record, Mapping):
        return record.get(name, default)
    return getattr(record, name, default)


def amount_of(record: Any) -> float:
    """Return the record amount as a float; missing, invalid, or non-finite values count as 0."""

    value = field_value(record, "amount")
    if value is None or isinstance(value, bool):
        return 0.0
    try:
        amount = float(value)
    except (TypeError, ValueError):
        return 0.0
    return amount if math.isfinite(amount) else 0.0


def date_of(record: Any) -> datetime | None:
    return coerce_datetime(field_value(record, "date"))


def kind_of(record: Any) -> str | None:
    value = field_value(record, "kind")
    if value is None:
        value = field_value(record, "type")
    if isinstance(value, TransactionKind):
        return value.value
    return value


def _matches_kind(record: Any, kind: TransactionKind | str) -> bool:
    expected = kind.value if isinstance(kind, TransactionKind) else kind
    return kind_of(record) == expected


def _within(record: Any, start: datetime, end: datetime) -> bool:
    when = date_of(record)
    return when is not None and start <= when <= end


# Core operations ----------------------------------------------------------


def filter_period(transactions: Iterable[T], start: datetime, end: datetime) -> list[T]:
    """Return records dated within ``[start, end]``, preserving input order."""

    return [tx for tx in transactions if _within(tx, start, end)]


def compute_summary(
    transactions: Iterable[Any],
    period_start: datetime,
    period_end: datetime,
    *,
    now: datetime | None = None,
) -> Summary:
    """Totals for ``[period_start, period_end]``.

    The daily average divides by the days elapsed from ``period_start``
    through today, clamped to ``period_end`` and never below one.
    """

    income = 0.0
    expenses = 0.0
    for tx in filter_period(transactions, period_start, period_end):
        if _matches_kind(tx, TransactionKind.INCOME):
            income += amount_of(tx)
        elif _matches_kind(tx, TransactionKind.EXPENSE):
            expenses += amount_of(tx)

    reference = min(now or datetime.now(), period_end)
    days_elapsed = max(1, (reference.date() - period_start.date()).days + 1)
    return Summary(
        total_income=income,
        total_expenses=expenses,
        balance=income - expenses,
        average_daily_expense=expenses / days_elapsed,
    )


def bucket_by_week(
    transactions: Iterable[Any],
    month: int,
    year: int,
    *,
    now: datetime | None = None,
) -> list[WeekBucket]:
    """Split a month into Sunday-started weeks with income/expense sums.

    Buckets cover partial weeks at both month edges, but only transactions
    dated inside the month itself are counted. A week is kept when it has
    activity or has already started, and kept weeks are numbered in order
    (a skipped week does not consume a label). The result is never empty.
    """

    reference = now or datetime.now()
    month_start = start_of_month(year, month)
    month_end = end_of_month(year, month)
    in_month = filter_period(transactions, month_start, month_end)

    buckets: list[WeekBucket] = []
    cursor = week_start(month_start)
    while cursor <= month_end:
        bucket = WeekBucket(
            label=f"Week {len(buckets) + 1}",
            start=cursor,
            end=end_of_day(cursor + timedelta(days=6)),
        )
        for tx in in_month:
            if not _within(tx, bucket.start, bucket.end):
                continue
            if _matches_kind(tx, TransactionKind.INCOME):
                bucket.income += amount_of(tx)
            elif _matches_kind(tx, TransactionKind.EXPENSE):
                bucket.expense += amount_of(tx)
        if bucket.income > 0 or bucket.expense > 0 or bucket.start <= reference:
            buckets.append(bucket)
        cursor += timedelta(days=7)

    if not buckets:
        first = week_start(month_start)
        buckets.append(
            WeekBucket(label="Week 1", start=first, end=end_of_day(first + timedelta(days=6)))
        )
    return buckets


def bucket_by_category(
    transactions: Iterable[Any],
    kind: TransactionKind | str,
    top_n: int | None = None,
) -> list[CategoryTotal]:
    """Sum amounts per category for one kind, largest first.

    Ties keep first-encountered order; ``top_n`` truncates after sorting.
    """

    totals: dict[str, float] = {}
    for tx in transactions:
        if not _matches_kind(tx, kind):
            continue
        category = field_value(tx, "category") or UNCATEGORIZED
        totals[category] = totals.get(category, 0.0) + amount_of(tx)

    ranked = sorted(
        (CategoryTotal(category=name, amount=amount) for name, amount in totals.items()),
        key=lambda entry: entry.amount,
        reverse=True,
    )
    if top_n is not None:
        ranked = ranked[: max(0, top_n)]
    return ranked


def bucket_by_month(transactions: Iterable[Any], year: int) -> list[MonthBucket]:
    """Twelve income/expense buckets for ``year``, January first."""

    records = list(transactions)
    buckets: list[MonthBucket] = []
    for month, label in enumerate(MONTH_LABELS, start=1):
        bucket = MonthBucket(label=label, month=month)
        for tx in filter_period(records, start_of_month(year, month), end_of_month(year, month)):
            if _matches_kind(tx, TransactionKind.INCOME):
                bucket.income += amount_of(tx)
            elif _matches_kind(tx, TransactionKind.EXPENSE):
                bucket.expense += amount_of(tx)
        buckets.append(bucket)
    return buckets


def apply_filters(transactions: Iterable[T], criteria: TransactionFilter | None) -> list[T]:
    """Return records matching every provided constraint, in input order.

    Date bounds are inclusive and ``end_date`` stretches to the end of its
    day. Records without a usable date fail any date constraint.
    """

    records = list(transactions)
    if criteria is None or criteria.is_empty():
        return records

    lower = start_of_day(criteria.start_date) if criteria.start_date else None
    upper = end_of_day(criteria.end_date) if criteria.end_date else None

    matched: list[T] = []
    for tx in records:
        if criteria.kind and not _matches_kind(tx, criteria.kind):
            continue
        if criteria.category and field_value(tx, "category") != criteria.category:
            continue
        if lower is not None or upper is not None:
            when = date_of(tx)
            if when is None:
                continue
            if lower is not None and when < lower:
                continue
            if upper is not None and when > upper:
                continue
        matched.append(tx)
    return matched


def sort_newest_first(records: Sequence[T], attr: str = "date") -> list[T]:
    """Sort by a datetime field descending; records missing it sink to the end."""

    def key(record: Any) -> tuple[int, datetime]:
        when = coerce_datetime(field_value(record, attr))
        return (1, when) if when is not None else (0, datetime.min)

    return sorted(records, key=key, reverse=True)
