"""Date-range helpers shared by aggregation, managers, and reports.

Lower bounds are normalized to 00:00:00.000000 and upper bounds to
23:59:59.999999 so inclusive comparisons hold regardless of the time stored
on a record.
"""

from __future__ import annotations

import calendar
from datetime import date, datetime, time, timedelta
from typing import Any

from .config import STORED_DATE_HOUR


def coerce_datetime(value: Any) -> datetime | None:
    """Return ``value`` as a naive local datetime, or ``None`` when it is unusable."""

    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, datetime):
        if value.tzinfo is not None:
            return value.astimezone().replace(tzinfo=None)
        return value
    if isinstance(value, date):
        return datetime.combine(value, time.min)
    if isinstance(value, str):
        text = value.strip()
        if not text:
            return None
        try:
            parsed = datetime.fromisoformat(text.replace("Z", "+00:00"))
        except ValueError:
            return None
        return coerce_datetime(parsed)
    return None


def parse_calendar_date(value: Any) -> date | None:
    """Parse ``MM/DD/YYYY`` or ISO input into a calendar day."""

    if isinstance(value, datetime):
        return coerce_datetime(value).date()
    if isinstance(value, date):
        return value
    if not isinstance(value, str) or not value.strip():
        return None
    text = value.strip()
    try:
        return datetime.strptime(text, "%m/%d/%Y").date()
    except ValueError:
        pass
    parsed = coerce_datetime(text)
    return parsed.date() if parsed is not None else None


def start_of_day(value: datetime | date) -> datetime:
    day = value.date() if isinstance(value, datetime) else value
    return datetime.combine(day, time.min)


def end_of_day(value: datetime | date) -> datetime:
    day = value.date() if isinstance(value, datetime) else value
    return datetime.combine(day, time.max)


def at_noon(value: datetime | date) -> datetime:
    """Pin a calendar day to the hour used for stored transaction dates."""

    day = value.date() if isinstance(value, datetime) else value
    return datetime.combine(day, time(hour=STORED_DATE_HOUR))


def start_of_month(year: int, month: int) -> datetime:
    return datetime(year, month, 1)


def end_of_month(year: int, month: int) -> datetime:
    last_day = calendar.monthrange(year, month)[1]
    return datetime.combine(date(year, month, last_day), time.max)


def start_of_year(year: int) -> datetime:
    return datetime(year, 1, 1)


def end_of_year(year: int) -> datetime:
    return datetime.combine(date(year, 12, 31), time.max)


def month_window(year: int, month: int) -> tuple[datetime, datetime]:
    return start_of_month(year, month), end_of_month(year, month)


def year_window(year: int) -> tuple[datetime, datetime]:
    return start_of_year(year), end_of_year(year)


def week_start(value: datetime | date) -> datetime:
    """Return midnight of the Sunday on or before ``value``."""

    day = value.date() if isinstance(value, datetime) else value
    # weekday(): Monday=0 .. Sunday=6
    offset = (day.weekday() + 1) % 7
    return datetime.combine(day - timedelta(days=offset), time.min)
