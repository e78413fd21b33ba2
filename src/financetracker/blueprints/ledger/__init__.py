"""Transactions blueprint package."""

from __future__ import annotations

from flask import Blueprint

bp = Blueprint("ledger", __name__, url_prefix="/transactions")

from . import routes  # noqa: E402,F401 - ensure routes get registered

__all__ = ["bp"]
