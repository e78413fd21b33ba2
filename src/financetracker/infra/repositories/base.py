"""Generic SQLModel record store scoped by owner id."""

from __future__ import annotations

from contextlib import contextmanager
from typing import Any, Generic, Iterator, Mapping, TypeVar

from sqlalchemy.exc import (
    DataError,
    DisconnectionError,
    IntegrityError,
    OperationalError,
    SQLAlchemyError,
)
from sqlmodel import SQLModel, select

from ...errors import ErrorKind, StoreError
from ...logging_config import get_logger
from ..database import SessionFactory

T = TypeVar("T", bound=SQLModel)

logger = get_logger(__name__)

_PROTECTED_FIELDS = frozenset({"id", "owner_id"})


@contextmanager
def translate_errors(operation: str, collection: str) -> Iterator[None]:
    """Re-raise SQLAlchemy failures as ``StoreError`` with a matching kind."""

    try:
        yield
    except (OperationalError, DisconnectionError) as exc:
        kind = ErrorKind.UNAVAILABLE
        error = exc
    except (IntegrityError, DataError) as exc:
        kind = ErrorKind.INVALID_ARGUMENT
        error = exc
    except SQLAlchemyError as exc:
        kind = ErrorKind.UNKNOWN
        error = exc
    else:
        return
    logger.warning(
        "Store %s on %s failed",
        operation,
        collection,
        extra={"operation": operation, "collection": collection, "error_kind": kind.value},
    )
    raise StoreError(str(error.__class__.__name__), kind=kind) from error


class SQLModelRecordStore(Generic[T]):
    """SQLModel-backed ``RecordStore`` for any table with ``id`` and ``owner_id`` columns."""

    def __init__(self, model: type[T], session_factory: SessionFactory):
        self.model = model
        self.session_factory = session_factory

    @property
    def collection(self) -> str:
        return getattr(self.model, "__tablename__", self.model.__name__.lower())

    def _payload(self, fields: Mapping[str, Any]) -> dict[str, Any]:
        known = self.model.model_fields
        payload: dict[str, Any] = {}
        for key, value in fields.items():
            if key in _PROTECTED_FIELDS:
                continue
            if key not in known:
                raise StoreError(
                    f"Unknown field '{key}' for {self.collection}",
                    kind=ErrorKind.INVALID_ARGUMENT,
                )
            payload[key] = value
        return payload

    def _owned(self, session, owner_id: str, record_id: str) -> T:
        statement = select(self.model).where(
            self.model.id == record_id, self.model.owner_id == owner_id  # type: ignore[attr-defined]
        )
        record = session.exec(statement).first()
        if record is None:
            raise StoreError(
                f"{self.collection} {record_id} not found", kind=ErrorKind.NOT_FOUND
            )
        return record

    def list(self, owner_id: str) -> list[T]:
        """Return all records owned by ``owner_id``."""
        with translate_errors("list", self.collection), self.session_factory() as session:
            statement = select(self.model).where(self.model.owner_id == owner_id)  # type: ignore[attr-defined]
            return list(session.exec(statement).all())

    def get(self, owner_id: str, record_id: str) -> T:
        with translate_errors("get", self.collection), self.session_factory() as session:
            return self._owned(session, owner_id, record_id)

    def create(self, owner_id: str, fields: Mapping[str, Any]) -> str:
        """Insert a new record and return its generated id."""
        payload = self._payload(fields)
        with translate_errors("create", self.collection), self.session_factory() as session:
            record = self.model(**payload)
            record.owner_id = owner_id  # type: ignore[attr-defined]
            session.add(record)
            session.flush()
            record_id = record.id  # type: ignore[attr-defined]
        return record_id

    def update(self, owner_id: str, record_id: str, fields: Mapping[str, Any]) -> None:
        payload = self._payload(fields)
        with translate_errors("update", self.collection), self.session_factory() as session:
            record = self._owned(session, owner_id, record_id)
            for key, value in payload.items():
                setattr(record, key, value)
            session.add(record)

    def delete(self, owner_id: str, record_id: str) -> None:
        with translate_errors("delete", self.collection), self.session_factory() as session:
            session.delete(self._owned(session, owner_id, record_id))
