"""Helpers shared by the JSON blueprints: auth guard, serialization, error policy."""

from __future__ import annotations

from functools import wraps
from typing import Any, Callable, Iterable

from flask import jsonify, request, session
from sqlmodel import SQLModel

from ..errors import (
    AuthError,
    ErrorKind,
    Result,
    http_status,
    requires_reauthentication,
    user_message,
)
from ..services.auth import require_owner

OWNER_SESSION_KEY = "owner_id"
_SUPPRESS_NOT_FOUND = {"update", "delete"}


def login_required(view: Callable[..., Any]) -> Callable[..., Any]:
    """Inject ``owner_id`` from the session, answering 401 when nobody is signed in."""

    @wraps(view)
    def wrapped(*args: Any, **kwargs: Any):
        try:
            owner_id = require_owner(session.get(OWNER_SESSION_KEY))
        except AuthError as exc:
            return failure_response(Result.from_error(exc), "fetch")
        return view(*args, owner_id=owner_id, **kwargs)

    return wrapped


def serialize(record: Any) -> Any:
    if isinstance(record, SQLModel):
        return record.model_dump(mode="json")
    if hasattr(record, "as_dict"):
        return record.as_dict()
    return record


def payload() -> dict[str, Any]:
    """Request body as a dict, accepting JSON or form posts."""

    data = request.get_json(silent=True)
    if isinstance(data, dict):
        return data
    return request.form.to_dict()


def failure_response(result: Result, operation: str):
    kind = result.kind or ErrorKind.UNKNOWN
    error: dict[str, Any] = {
        "kind": kind.value,
        "code": result.code or kind.value,
        "message": user_message(kind, operation, result.code),
    }
    if result.errors:
        error["errors"] = result.errors
    if requires_reauthentication(kind):
        error["reauthenticate"] = True
    return jsonify({"ok": False, "error": error}), http_status(kind)


def list_response(
    result: Result,
    key: str,
    *,
    transform: Callable[[Any], Any] = serialize,
    **extra: Any,
):
    """Serialize a fetch result; a missing collection reads as empty."""

    if result.ok:
        items: Iterable[Any] = result.value or []
        return jsonify({key: [transform(item) for item in items], **extra})
    if result.is_kind(ErrorKind.NOT_FOUND):
        return jsonify({key: [], **extra})
    return failure_response(result, "fetch")


def item_response(result: Result, key: str):
    if result.ok:
        return jsonify({key: serialize(result.value)})
    return failure_response(result, "fetch")


def mutation_response(result: Result, operation: str, *, status: int = 200, **extra: Any):
    """Answer a write; NotFound on update/delete means the record is already gone."""

    if result.ok:
        return jsonify({"ok": True, **extra}), status
    if operation in _SUPPRESS_NOT_FOUND and result.is_kind(ErrorKind.NOT_FOUND):
        return jsonify({"ok": True, "missing": True}), 200
    return failure_response(result, operation)
