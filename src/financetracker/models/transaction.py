"""SQLModel definitions for income and expense transactions."""

from __future__ import annotations

from datetime import datetime
from typing import ClassVar, Optional

from sqlalchemy import DateTime
from sqlmodel import Field, SQLModel

from ._ids import new_id


class Transaction(SQLModel, table=True):
    """A single income or expense entry; ``amount`` is always a positive magnitude."""

    __tablename__: ClassVar[str] = "transaction"

    id: str = Field(default_factory=new_id, primary_key=True, max_length=32)
    owner_id: str = Field(foreign_key="user.id", nullable=False, index=True, max_length=32)
    # Naive local time, normalised to noon.
    date: datetime = Field(nullable=False, index=True, sa_type=DateTime)
    kind: str = Field(nullable=False, max_length=16, description="Income | Expense")
    description: str = Field(nullable=False, max_length=255)
    category: str = Field(nullable=False, max_length=64, index=True)
    amount: float = Field(nullable=False)
    payment_method: str = Field(default="Cash", max_length=32)
    notes: str = Field(default="")
    # Display-only; nothing schedules repeats.
    is_recurring: bool = Field(default=False, nullable=False)
    recurring_frequency: Optional[str] = Field(default=None, max_length=16)
    created_at: datetime = Field(default_factory=datetime.now, nullable=False, sa_type=DateTime)
