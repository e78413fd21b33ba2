"""Todos blueprint package."""

from __future__ import annotations

from flask import Blueprint

bp = Blueprint("todos", __name__, url_prefix="/todos")

from . import routes  # noqa: E402,F401 - ensure routes get registered

__all__ = ["bp"]
