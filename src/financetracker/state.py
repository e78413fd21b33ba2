"""Per-session UI state shared by every page."""

from __future__ import annotations

from dataclasses import asdict, dataclass, replace
from datetime import datetime
from typing import Any, Mapping, MutableMapping

from .errors import ValidationError

SESSION_KEY = "app_state"


@dataclass(frozen=True, slots=True)
class AppState:
    """Dark-mode flag and the month/year selected for reports.

    Lives in the signed session cookie only; a fresh session starts from the
    current month.
    """

    dark_mode: bool = False
    selected_month: int = 1
    selected_year: int = 2000

    @classmethod
    def default(cls, now: datetime | None = None) -> "AppState":
        reference = now or datetime.now()
        return cls(selected_month=reference.month, selected_year=reference.year)

    @classmethod
    def from_session(cls, session: Mapping[str, Any], now: datetime | None = None) -> "AppState":
        stored = session.get(SESSION_KEY)
        base = cls.default(now)
        if not isinstance(stored, Mapping):
            return base
        try:
            return base.update(stored)
        except ValidationError:
            return base

    def to_session(self, session: MutableMapping[str, Any]) -> None:
        session[SESSION_KEY] = asdict(self)

    def update(self, changes: Mapping[str, Any]) -> "AppState":
        """Return a copy with ``changes`` applied, raising ``ValidationError`` on bad values."""

        errors: dict[str, list[str]] = {}
        values: dict[str, Any] = {}

        if "dark_mode" in changes:
            flag = changes["dark_mode"]
            if not isinstance(flag, bool):
                errors.setdefault("dark_mode", []).append("Must be true or false.")
            else:
                values["dark_mode"] = flag

        if "selected_month" in changes:
            month = _as_int(changes["selected_month"])
            if month is None or not 1 <= month <= 12:
                errors.setdefault("selected_month", []).append("Month must be between 1 and 12.")
            else:
                values["selected_month"] = month

        if "selected_year" in changes:
            year = _as_int(changes["selected_year"])
            if year is None or not 1900 <= year <= 9999:
                errors.setdefault("selected_year", []).append("Enter a valid year.")
            else:
                values["selected_year"] = year

        unknown = set(changes) - {"dark_mode", "selected_month", "selected_year"}
        for name in sorted(unknown):
            errors.setdefault(name, []).append("Unknown preference.")

        if errors:
            raise ValidationError(errors)
        return replace(self, **values)


def _as_int(value: Any) -> int | None:
    if isinstance(value, bool):
        return None
    try:
        return int(value)
    except (TypeError, ValueError):
        return None
