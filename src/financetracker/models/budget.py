"""Budgeting tables."""

from __future__ import annotations

from datetime import datetime
from typing import ClassVar

from sqlalchemy import DateTime
from sqlmodel import Field, SQLModel

from ._ids import new_id


class Budget(SQLModel, table=True):
    """Spending ceiling for one expense category over a month or a year."""

    __tablename__: ClassVar[str] = "budget"

    id: str = Field(default_factory=new_id, primary_key=True, max_length=32)
    owner_id: str = Field(foreign_key="user.id", nullable=False, index=True, max_length=32)
    category: str = Field(nullable=False, max_length=64)
    amount: float = Field(nullable=False)
    period: str = Field(default="monthly", max_length=16)
    created_at: datetime = Field(default_factory=datetime.now, nullable=False, sa_type=DateTime)

    # TODO(@budgeting): decide whether (owner_id, category) should become a unique constraint.
