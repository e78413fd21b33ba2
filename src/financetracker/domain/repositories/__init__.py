"""Repository protocols."""

from .store import RecordStore
from .transaction import TransactionStore

__all__ = ["RecordStore", "TransactionStore"]
