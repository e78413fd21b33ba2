"""Record store protocol shared by every owned collection."""

from __future__ import annotations

from typing import Any, Mapping, Protocol, TypeVar

T = TypeVar("T")


class RecordStore(Protocol[T]):
    """Per-collection store scoped by owner id.

    Implementations raise ``StoreError`` with ``ErrorKind.NOT_FOUND`` when an
    id is missing or belongs to another owner.
    """

    def list(self, owner_id: str) -> list[T]:
        """Return every record owned by ``owner_id`` in no particular order."""
        ...

    def get(self, owner_id: str, record_id: str) -> T:
        """Return one record."""
        ...

    def create(self, owner_id: str, fields: Mapping[str, Any]) -> str:
        """Insert a record stamped with ``owner_id`` and return its new id."""
        ...

    def update(self, owner_id: str, record_id: str, fields: Mapping[str, Any]) -> None:
        """Overwrite the given fields; ``id`` and ``owner_id`` are never changed."""
        ...

    def delete(self, owner_id: str, record_id: str) -> None:
        """Remove a record."""
        ...
