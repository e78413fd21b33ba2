"""Dashboard, monthly and yearly reports, and chart images."""

from __future__ import annotations

from flask import Response, jsonify, request, session

from ...errors import Result, ValidationError
from ...extensions import get_context
from ...state import AppState
from ..common import failure_response, login_required
from . import bp


def _selected_period() -> tuple[int, int]:
    """Month/year from the query string, falling back to the session selection."""

    state = AppState.from_session(session)
    changes = {}
    if "month" in request.args:
        changes["selected_month"] = request.args["month"]
    if "year" in request.args:
        changes["selected_year"] = request.args["year"]
    state = state.update(changes)
    return state.selected_year, state.selected_month


def _respond(result: Result):
    if not result.ok:
        return failure_response(result, "fetch")
    return jsonify(result.value)


def _png(result: Result):
    if not result.ok:
        return failure_response(result, "fetch")
    return Response(result.value, mimetype="image/png")


@bp.get("/dashboard")
@login_required
def dashboard(owner_id: str):
    return _respond(get_context().reports.dashboard(owner_id))


@bp.get("/monthly")
@login_required
def monthly(owner_id: str):
    try:
        year, month = _selected_period()
    except ValidationError as exc:
        return failure_response(Result.from_error(exc), "fetch")
    return _respond(get_context().reports.monthly(owner_id, year, month))


@bp.get("/yearly")
@login_required
def yearly(owner_id: str):
    try:
        year, _month = _selected_period()
    except ValidationError as exc:
        return failure_response(Result.from_error(exc), "fetch")
    return _respond(get_context().reports.yearly(owner_id, year))


@bp.get("/charts/weekly.png")
@login_required
def weekly_chart(owner_id: str):
    try:
        year, month = _selected_period()
    except ValidationError as exc:
        return failure_response(Result.from_error(exc), "fetch")
    return _png(get_context().reports.weekly_chart_png(owner_id, year, month))


@bp.get("/charts/categories.png")
@login_required
def category_chart(owner_id: str):
    try:
        year, month = _selected_period()
    except ValidationError as exc:
        return failure_response(Result.from_error(exc), "fetch")
    return _png(get_context().reports.category_chart_png(owner_id, year, month))
