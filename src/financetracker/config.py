"""Application configuration objects and helpers."""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any

from dotenv import load_dotenv

load_dotenv()

CURRENCY_LABEL = "FCFA"
# Stored transaction dates are pinned to this hour so local/UTC shifts never change the day.
STORED_DATE_HOUR = 12


def _env_bool(name: str, default: bool = False) -> bool:
    """Interpret environment variable values as booleans."""

    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in {"1", "true", "yes", "on"}


def _env_int(name: str, default: int) -> int:
    """Interpret environment variable values as integers, falling back on bad input."""

    value = os.getenv(name)
    if value is None or not value.strip():
        return default
    try:
        return int(value)
    except ValueError:
        return default


class BaseConfig:
    """Base configuration shared across environments."""

    APP_NAME = "FinanceTracker"
    DB_FILENAME = "financetracker.db"
    TESTING = False
    JSON_SORT_KEYS = False

    def __init__(self) -> None:
        self.SECRET_KEY = os.getenv("FINANCETRACKER_SECRET_KEY", "replace-me")
        self.DATA_DIR = self._resolve_data_dir()
        self.DEV_MODE = _env_bool("FINANCETRACKER_DEV_MODE", default=True)
        self.DATABASE_URL = os.getenv("FINANCETRACKER_DATABASE_URL", self._build_sqlite_url())
        self.TOP_CATEGORY_LIMIT = max(1, _env_int("FINANCETRACKER_TOP_CATEGORIES", 5))
        if not self.DEV_MODE and self.SECRET_KEY == "replace-me":
            raise ValueError("FINANCETRACKER_SECRET_KEY must be set in non-dev mode.")

    def _resolve_data_dir(self) -> Path:
        """Return the directory where the SQLite file and logs live."""

        data_root = os.getenv("FINANCETRACKER_DATA_DIR", "instance")
        path = Path(data_root).expanduser().resolve()
        path.mkdir(parents=True, exist_ok=True)
        return path

    def _build_sqlite_url(self) -> str:
        return f"sqlite:///{self.DATA_DIR / self.DB_FILENAME}"

    def sqlalchemy_engine_options(self) -> dict[str, Any]:
        """Expose engine kwargs for SQLModel to consume."""

        if self.DATABASE_URL.startswith("sqlite"):
            return {"connect_args": {"check_same_thread": False}}
        return {"pool_pre_ping": True}


class DevConfig(BaseConfig):
    """Development configuration using local SQLite."""

    DEBUG = True


class TestConfig(BaseConfig):
    """Configuration used by the test-suite; callers point DATA_DIR at a temp folder."""

    TESTING = True
