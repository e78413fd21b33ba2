"""Sign-up, sign-in, and sign-out endpoints."""

from __future__ import annotations

from flask import jsonify, session

from ...errors import AuthError, Result, ValidationError
from ...extensions import get_context
from ...logging_config import get_logger
from ...services.auth import sign_in, sign_up
from ...state import AppState
from ..common import OWNER_SESSION_KEY, failure_response, login_required, payload
from . import bp

logger = get_logger(__name__)


def _start_session(user) -> None:
    session.clear()
    session[OWNER_SESSION_KEY] = user.id
    session["email"] = user.email
    AppState.default().to_session(session)


@bp.post("/signup")
def signup():
    data = payload()
    try:
        user = sign_up(
            email=str(data.get("email", "")),
            password=str(data.get("password", "")),
            session_factory=get_context().session_factory,
        )
    except ValidationError as exc:
        return failure_response(Result.from_error(exc), "add")
    _start_session(user)
    return jsonify({"user": {"id": user.id, "email": user.email}}), 201


@bp.post("/login")
def login():
    data = payload()
    try:
        user = sign_in(
            email=str(data.get("email", "")),
            password=str(data.get("password", "")),
            session_factory=get_context().session_factory,
        )
    except AuthError as exc:
        logger.info("Sign-in rejected")
        return failure_response(Result.from_error(exc), "fetch")
    _start_session(user)
    return jsonify({"user": {"id": user.id, "email": user.email}})


@bp.post("/logout")
def logout():
    session.clear()
    return jsonify({"ok": True})


@bp.get("/me")
@login_required
def me(owner_id: str):
    return jsonify({"user": {"id": owner_id, "email": session.get("email")}})
