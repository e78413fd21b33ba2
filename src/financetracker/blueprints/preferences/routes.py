"""Shared UI state: dark mode and the selected report period."""

from __future__ import annotations

from dataclasses import asdict

from flask import jsonify, session

from ...errors import Result, ValidationError
from ...state import AppState
from ..common import failure_response, payload
from . import bp


@bp.get("/")
def read_preferences():
    return jsonify(asdict(AppState.from_session(session)))


@bp.patch("/")
def update_preferences():
    current = AppState.from_session(session)
    try:
        updated = current.update(payload())
    except ValidationError as exc:
        return failure_response(Result.from_error(exc), "update")
    updated.to_session(session)
    return jsonify(asdict(updated))
