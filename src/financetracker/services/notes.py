"""Notes and todo lists."""

from __future__ import annotations

from typing import Any

from ..domain.repositories import RecordStore
from ..errors import Result, ValidationError, capture
from ..logging_config import get_logger
from ..models.note import Note, Todo
from .aggregation import sort_newest_first

logger = get_logger(__name__)


def _required_text(value: Any, name: str) -> str:
    text = "" if value is None else str(value).strip()
    if not text:
        raise ValidationError({name: ["This field is required."]})
    return text


class NoteManager:
    def __init__(self, store: RecordStore[Note]):
        self.store = store

    def list(self, owner_id: str) -> Result[list[Note]]:
        return capture(
            "fetch",
            lambda: sort_newest_first(self.store.list(owner_id), attr="created_at"),
            logger=logger,
        )

    def add(self, owner_id: str, content: Any) -> Result[str]:
        return capture(
            "add",
            lambda: self.store.create(owner_id, {"content": _required_text(content, "content")}),
            logger=logger,
        )

    def delete(self, owner_id: str, note_id: str) -> Result[None]:
        return capture("delete", self.store.delete, owner_id, note_id, logger=logger)


class TodoManager:
    def __init__(self, store: RecordStore[Todo]):
        self.store = store

    def list(self, owner_id: str) -> Result[list[Todo]]:
        return capture(
            "fetch",
            lambda: sort_newest_first(self.store.list(owner_id), attr="created_at"),
            logger=logger,
        )

    def add(self, owner_id: str, text: Any) -> Result[str]:
        return capture(
            "add",
            lambda: self.store.create(
                owner_id, {"text": _required_text(text, "text"), "completed": False}
            ),
            logger=logger,
        )

    def toggle(self, owner_id: str, todo_id: str) -> Result[bool]:
        """Flip ``completed`` and return the new value."""

        def _toggle() -> bool:
            todo = self.store.get(owner_id, todo_id)
            completed = not todo.completed
            self.store.update(owner_id, todo_id, {"completed": completed})
            return completed

        return capture("update", _toggle, logger=logger)

    def delete(self, owner_id: str, todo_id: str) -> Result[None]:
        return capture("delete", self.store.delete, owner_id, todo_id, logger=logger)
