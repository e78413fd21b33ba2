"""Identifier helpers shared by the table models."""

from __future__ import annotations

from uuid import uuid4


def new_id() -> str:
    """Opaque record id: 32 lowercase hex characters."""

    return uuid4().hex
