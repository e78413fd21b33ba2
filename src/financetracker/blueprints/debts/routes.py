"""Debt endpoints."""

from __future__ import annotations

from ...extensions import get_context
from ...services.debts import describe, totals
from ..common import list_response, login_required, mutation_response, payload
from . import bp


@bp.get("/")
@login_required
def list_debts(owner_id: str):
    result = get_context().debts.list(owner_id)
    summary = totals(result.value or []).as_dict()
    return list_response(result, "debts", transform=describe, totals=summary)


@bp.post("/")
@login_required
def create_debt(owner_id: str):
    result = get_context().debts.create(owner_id, payload())
    return mutation_response(result, "add", status=201, id=result.value)


@bp.put("/<debt_id>")
@login_required
def update_debt(owner_id: str, debt_id: str):
    return mutation_response(get_context().debts.update(owner_id, debt_id, payload()), "update")


@bp.post("/<debt_id>/payments")
@login_required
def add_payment(owner_id: str, debt_id: str):
    result = get_context().debts.add_payment(owner_id, debt_id, payload().get("amount"))
    return mutation_response(result, "update", remaining=result.value)


@bp.delete("/<debt_id>")
@login_required
def delete_debt(owner_id: str, debt_id: str):
    return mutation_response(get_context().debts.delete(owner_id, debt_id), "delete")
