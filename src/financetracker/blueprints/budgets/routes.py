"""Budget endpoints."""

from __future__ import annotations

from ...extensions import get_context
from ..common import list_response, login_required, mutation_response, payload
from . import bp


@bp.get("/")
@login_required
def list_budgets(owner_id: str):
    """Budgets with spend for their current month or year."""
    return list_response(get_context().budgets.statuses(owner_id), "budgets")


@bp.post("/")
@login_required
def create_budget(owner_id: str):
    result = get_context().budgets.create(owner_id, payload())
    return mutation_response(result, "add", status=201, id=result.value)


@bp.put("/<budget_id>")
@login_required
def update_budget(owner_id: str, budget_id: str):
    return mutation_response(get_context().budgets.update(owner_id, budget_id, payload()), "update")


@bp.delete("/<budget_id>")
@login_required
def delete_budget(owner_id: str, budget_id: str):
    return mutation_response(get_context().budgets.delete(owner_id, budget_id), "delete")
