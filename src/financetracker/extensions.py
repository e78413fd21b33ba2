"""Service container wiring for the Flask app."""

from __future__ import annotations

from flask import Flask, current_app

from .config import BaseConfig
from .context import AppContext, create_app_context

EXTENSION_KEY = "financetracker"


def init_app(app: Flask, config: BaseConfig) -> AppContext:
    """Build the ``AppContext`` and attach it to ``app.extensions``."""

    context = create_app_context(config)
    app.extensions[EXTENSION_KEY] = context
    return context


def get_context() -> AppContext:
    """Return the ``AppContext`` of the active Flask app."""

    context = current_app.extensions.get(EXTENSION_KEY)
    if context is None:  # pragma: no cover - only when init_app was skipped
        raise RuntimeError("FinanceTracker context not initialized")
    return context
