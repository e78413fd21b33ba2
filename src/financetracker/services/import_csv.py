"""CSV ingestion utilities."""

from __future__ import annotations

import io
from datetime import date, datetime
from pathlib import Path
from typing import Any, Mapping

import pandas as pd
from pandas.errors import EmptyDataError, ParserError

from ..constants import DEFAULT_CATEGORY, DEFAULT_PAYMENT_METHOD, TransactionKind
from ..errors import ValidationError
from ..periods import at_noon, parse_calendar_date

AMOUNT_KEYS = ("amount_(fcfa)", "amount")
PAYMENT_METHOD_KEYS = ("payment_method", "paymentmethod")
_GROUPING_SPACES = str.maketrans("", "", " \u00a0\u202f")


def normalize_header(name: str) -> str:
    """``"Amount (FCFA)"`` -> ``"amount_(fcfa)"``."""

    return "_".join(str(name).strip().lower().split())


def read_frame(text: str, *, rejected: list[list[str]] | None = None) -> pd.DataFrame:
    """Load CSV text as strings only, with normalized headers and no NA coercion.

    Lines with more fields than the header are left out and, when
    ``rejected`` is given, appended to it as their raw field lists.
    """

    def _reject(fields: list[str]) -> None:
        if rejected is not None:
            rejected.append(fields)
        return None

    try:
        frame = pd.read_csv(
            io.StringIO(text),
            dtype=str,
            keep_default_na=False,
            skipinitialspace=True,
            engine="python",
            on_bad_lines=_reject,
        )
    except EmptyDataError:
        return pd.DataFrame()
    except ParserError as exc:
        raise ValidationError({"file": [f"Could not read CSV: {exc}"]}) from exc
    frame.columns = [normalize_header(column) for column in frame.columns]
    return frame.fillna("")


def decode_csv(data: bytes, *, encoding: str = "utf-8-sig") -> str:
    try:
        return data.decode(encoding)
    except UnicodeDecodeError as exc:
        raise ValidationError({"file": ["File must be a UTF-8 encoded CSV."]}) from exc


def _first(row: Mapping[str, Any], keys: tuple[str, ...]) -> str:
    for key in keys:
        value = str(row.get(key, "") or "").strip()
        if value:
            return value
    return ""


def parse_amount(raw: str) -> float:
    """Float parse tolerant of grouping spaces; anything unparseable becomes 0."""

    try:
        return float(raw.translate(_GROUPING_SPACES))
    except (TypeError, ValueError):
        return 0.0


def row_to_transaction(row: Mapping[str, Any], *, today: date) -> dict[str, Any]:
    """Convert a normalized CSV row into a transaction-shaped dict with defaults applied."""

    day = parse_calendar_date(_first(row, ("date",))) or today
    return {
        "date": at_noon(day),
        "kind": _first(row, ("type", "kind")) or TransactionKind.EXPENSE.value,
        "description": _first(row, ("description",)),
        "category": _first(row, ("category",)) or DEFAULT_CATEGORY,
        "amount": parse_amount(_first(row, AMOUNT_KEYS)),
        "payment_method": _first(row, PAYMENT_METHOD_KEYS) or DEFAULT_PAYMENT_METHOD,
        "notes": _first(row, ("notes",)),
    }


def parse_transactions_csv(
    text: str,
    *,
    today: date | None = None,
    rejected: list[list[str]] | None = None,
) -> list[dict]:
    """Parse CSV text with a header row into plain transaction dicts.

    Returns plain dictionaries so parsing never touches the ORM. Rows whose
    cells are all blank are dropped; rows with too many fields go to
    ``rejected``.
    """

    frame = read_frame(text, rejected=rejected)
    if frame.empty:
        return []
    reference = today or datetime.now().date()
    records: list[dict] = []
    for row in frame.to_dict(orient="records"):
        if not any(str(value).strip() for value in row.values()):
            continue
        records.append(row_to_transaction(row, today=reference))
    return records


def import_csv_file(
    path: Path,
    *,
    encoding: str = "utf-8-sig",
    today: date | None = None,
    rejected: list[list[str]] | None = None,
) -> list[dict]:
    """Read and parse a CSV file from disk."""

    return parse_transactions_csv(
        decode_csv(Path(path).read_bytes(), encoding=encoding), today=today, rejected=rejected
    )
