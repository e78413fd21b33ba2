"""SQLModel store implementations."""

from .base import SQLModelRecordStore, translate_errors
from .transaction import SQLModelTransactionStore

__all__ = ["SQLModelRecordStore", "SQLModelTransactionStore", "translate_errors"]
