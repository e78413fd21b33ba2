"""FCFA amount formatting.

The franc CFA has no minor unit, so amounts are rounded half-up to whole
francs and grouped by thousands with a narrow no-break space, the way
French-locale number formatting renders them.
"""

from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal, InvalidOperation
from numbers import Real
from typing import Any

from .config import CURRENCY_LABEL

GROUP_SEPARATOR = "\u202f"


def _to_decimal(value: Any) -> Decimal | None:
    if isinstance(value, bool) or not isinstance(value, (Real, Decimal)):
        return None
    try:
        amount = Decimal(str(value))
    except InvalidOperation:
        return None
    if not amount.is_finite():
        return None
    return amount


def group_thousands(whole: int) -> str:
    digits = f"{abs(whole):,}".replace(",", GROUP_SEPARATOR)
    return f"-{digits}" if whole < 0 else digits


def format_amount(value: Any) -> Any:
    """Render ``value`` as ``"1 500 000 FCFA"``; non-numeric input is returned unchanged."""

    amount = _to_decimal(value)
    if amount is None:
        return value
    whole = int(amount.quantize(Decimal("1"), rounding=ROUND_HALF_UP))
    return f"{group_thousands(whole)} {CURRENCY_LABEL}"


def format_signed(value: Any, is_positive: bool) -> Any:
    """Prefix the formatted magnitude with ``+`` or ``-`` chosen by the caller."""

    amount = _to_decimal(value)
    if amount is None:
        return value
    sign = "+" if is_positive else "-"
    return f"{sign}{format_amount(abs(amount))}"
