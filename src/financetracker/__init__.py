"""FinanceTracker application factory."""

from __future__ import annotations

from importlib import import_module
from typing import Iterable

from flask import Flask, jsonify
from werkzeug.exceptions import HTTPException

from . import cli as _cli
from .config import BaseConfig, DevConfig, TestConfig

_CONFIG_MAP = {
    "development": DevConfig,
    "testing": TestConfig,
    "default": BaseConfig,
}


def _resolve_config(name: str | None) -> type[BaseConfig]:
    """Return the config class for the provided environment name."""

    if not name:
        return BaseConfig
    return _CONFIG_MAP.get(name.lower(), BaseConfig)


def _blueprint_paths() -> Iterable[str]:
    """Yield blueprint import paths in registration order."""

    yield "financetracker.blueprints.auth"
    yield "financetracker.blueprints.ledger"
    yield "financetracker.blueprints.reports"
    yield "financetracker.blueprints.budgets"
    yield "financetracker.blueprints.debts"
    yield "financetracker.blueprints.notes"
    yield "financetracker.blueprints.todos"
    yield "financetracker.blueprints.preferences"


def create_app(config_name: str | None = None) -> Flask:
    """Create and configure the Flask application instance."""

    app = Flask(__name__, instance_relative_config=True)
    config_cls = _resolve_config(config_name)
    config_obj = config_cls()
    app.config.from_object(config_obj)
    app.config["FINANCETRACKER_CONFIG"] = config_obj

    from .logging_config import setup_logging

    setup_logging(config_obj)

    # Imported lazily so model modules register with SQLModel metadata only
    # when an app is actually built.
    from .extensions import init_app as init_extensions

    init_extensions(app, config_obj)
    _register_blueprints(app)
    _register_error_handlers(app)
    _cli.init_app(app)
    return app


def _register_blueprints(app: Flask) -> None:
    """Import and register all blueprints declared in `_blueprint_paths`."""

    for dotted_path in _blueprint_paths():
        module = import_module(dotted_path)
        blueprint = getattr(module, "bp")
        app.register_blueprint(blueprint)


def _register_error_handlers(app: Flask) -> None:
    """Answer framework-level errors with the same JSON envelope as the blueprints."""

    @app.errorhandler(HTTPException)
    def _http_error(exc: HTTPException):
        body = {
            "ok": False,
            "error": {"kind": exc.name.lower().replace(" ", "-"), "message": exc.description},
        }
        return jsonify(body), exc.code or 500

    @app.errorhandler(Exception)
    def _unexpected_error(exc: Exception):
        if isinstance(exc, HTTPException):
            return _http_error(exc)
        app.logger.exception("Unhandled error")
        body = {
            "ok": False,
            "error": {"kind": "unknown", "message": "An error occurred. Please try again."},
        }
        return jsonify(body), 500


__all__ = ["create_app"]
