"""Error taxonomy, typed results, and user-facing messages."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Callable, Generic, Mapping, Optional, TypeVar

T = TypeVar("T")


class ErrorKind(str, Enum):
    """Failure categories shared by the store adapter, managers, and routes."""

    PERMISSION_DENIED = "permission-denied"
    UNAUTHENTICATED = "unauthenticated"
    NOT_FOUND = "not-found"
    UNAVAILABLE = "unavailable"
    INVALID_ARGUMENT = "invalid-argument"
    FAILED_PRECONDITION = "failed-precondition"
    UNKNOWN = "unknown"


class FinanceTrackerError(Exception):
    """Base class for expected application failures."""

    default_kind = ErrorKind.UNKNOWN

    def __init__(
        self,
        message: str = "",
        *,
        kind: ErrorKind | None = None,
        code: str | None = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.kind = kind or self.default_kind
        self.code = code or self.kind.value


class StoreError(FinanceTrackerError):
    """Raised by record stores when the backend rejects or cannot serve a call."""


class ValidationError(FinanceTrackerError):
    """Input rejected before reaching the store."""

    default_kind = ErrorKind.INVALID_ARGUMENT

    def __init__(self, errors: Mapping[str, list[str]], message: str = "Invalid input") -> None:
        super().__init__(message)
        self.errors = {key: list(values) for key, values in errors.items()}


class AuthError(FinanceTrackerError):
    """Credential or session failure."""

    default_kind = ErrorKind.UNAUTHENTICATED


@dataclass(frozen=True, slots=True)
class Result(Generic[T]):
    """Outcome of a manager operation: a value, or a failure kind for the caller to judge."""

    ok: bool
    value: Optional[T] = None
    kind: Optional[ErrorKind] = None
    message: str = ""
    code: Optional[str] = None
    errors: dict[str, list[str]] = field(default_factory=dict)

    @classmethod
    def success(cls, value: T | None = None) -> "Result[T]":
        return cls(ok=True, value=value)

    @classmethod
    def failure(
        cls,
        kind: ErrorKind,
        message: str = "",
        *,
        code: str | None = None,
        errors: Mapping[str, list[str]] | None = None,
    ) -> "Result[T]":
        return cls(
            ok=False,
            kind=kind,
            message=message,
            code=code or kind.value,
            errors=dict(errors or {}),
        )

    @classmethod
    def from_error(cls, exc: FinanceTrackerError) -> "Result[T]":
        return cls.failure(
            exc.kind,
            exc.message,
            code=exc.code,
            errors=getattr(exc, "errors", None),
        )

    def is_kind(self, kind: ErrorKind) -> bool:
        return not self.ok and self.kind is kind

    def unwrap_or(self, default: T) -> T:
        """Return the value on success, ``default`` otherwise."""

        if self.ok and self.value is not None:
            return self.value
        return default


def capture(
    operation: str,
    func: Callable[..., T],
    *args: Any,
    logger: logging.Logger | None = None,
    **kwargs: Any,
) -> Result[T]:
    """Run ``func`` and fold expected application errors into a ``Result``."""

    try:
        return Result.success(func(*args, **kwargs))
    except FinanceTrackerError as exc:
        if logger is not None:
            level = logging.INFO if exc.kind is ErrorKind.NOT_FOUND else logging.WARNING
            logger.log(
                level,
                "%s failed: %s",
                operation,
                exc.message or exc.kind.value,
                extra={"operation": operation, "error_kind": exc.kind.value},
            )
        return Result.from_error(exc)


_OPERATION_LABELS = {
    "add": "add this item",
    "update": "update this item",
    "delete": "delete this item",
    "fetch": "load your data",
}

_HTTP_STATUS = {
    ErrorKind.PERMISSION_DENIED: 403,
    ErrorKind.UNAUTHENTICATED: 401,
    ErrorKind.NOT_FOUND: 404,
    ErrorKind.UNAVAILABLE: 503,
    ErrorKind.INVALID_ARGUMENT: 400,
    ErrorKind.FAILED_PRECONDITION: 409,
    ErrorKind.UNKNOWN: 500,
}


def user_message(kind: ErrorKind, operation: str = "fetch", code: str | None = None) -> str:
    """Render the message shown to the user for a failed operation."""

    action = _OPERATION_LABELS.get(operation, operation)
    if kind is ErrorKind.PERMISSION_DENIED:
        return f"You do not have permission to {action}. Please sign in again."
    if kind is ErrorKind.UNAUTHENTICATED:
        return f"You must be signed in to {action}. Please sign in and try again."
    if kind is ErrorKind.NOT_FOUND:
        return "The requested item was not found."
    if kind is ErrorKind.UNAVAILABLE:
        return (
            f"Unable to {action} due to network issues. "
            "Please check your connection and try again."
        )
    if kind is ErrorKind.INVALID_ARGUMENT:
        return "Invalid input provided. Please check your data and try again."
    return f"An error occurred: {code or kind.value}. Please try again."


def http_status(kind: ErrorKind | None) -> int:
    if kind is None:
        return 500
    return _HTTP_STATUS.get(kind, 500)


def requires_reauthentication(kind: ErrorKind | None) -> bool:
    return kind in (ErrorKind.PERMISSION_DENIED, ErrorKind.UNAUTHENTICATED)
