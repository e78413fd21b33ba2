"""Todo endpoints."""

from __future__ import annotations

from ...extensions import get_context
from ..common import list_response, login_required, mutation_response, payload
from . import bp


@bp.get("/")
@login_required
def list_todos(owner_id: str):
    return list_response(get_context().todos.list(owner_id), "todos")


@bp.post("/")
@login_required
def add_todo(owner_id: str):
    result = get_context().todos.add(owner_id, payload().get("text"))
    return mutation_response(result, "add", status=201, id=result.value)


@bp.patch("/<todo_id>/toggle")
@login_required
def toggle_todo(owner_id: str, todo_id: str):
    result = get_context().todos.toggle(owner_id, todo_id)
    return mutation_response(result, "update", completed=result.value)


@bp.delete("/<todo_id>")
@login_required
def delete_todo(owner_id: str, todo_id: str):
    return mutation_response(get_context().todos.delete(owner_id, todo_id), "delete")
