"""Note endpoints."""

from __future__ import annotations

from ...extensions import get_context
from ..common import list_response, login_required, mutation_response, payload
from . import bp


@bp.get("/")
@login_required
def list_notes(owner_id: str):
    return list_response(get_context().notes.list(owner_id), "notes")


@bp.post("/")
@login_required
def add_note(owner_id: str):
    result = get_context().notes.add(owner_id, payload().get("content"))
    return mutation_response(result, "add", status=201, id=result.value)


@bp.delete("/<note_id>")
@login_required
def delete_note(owner_id: str, note_id: str):
    return mutation_response(get_context().notes.delete(owner_id, note_id), "delete")
