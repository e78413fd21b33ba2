"""Receivable and payable records."""

from __future__ import annotations

from datetime import date, datetime
from typing import ClassVar, Optional

from sqlalchemy import DateTime
from sqlmodel import Field, SQLModel

from ._ids import new_id


class Debt(SQLModel, table=True):
    """Money owed to the user (``owed``) or by the user (``owing``)."""

    __tablename__: ClassVar[str] = "debt"

    id: str = Field(default_factory=new_id, primary_key=True, max_length=32)
    owner_id: str = Field(foreign_key="user.id", nullable=False, index=True, max_length=32)
    direction: str = Field(nullable=False, max_length=8)
    counterparty_name: str = Field(nullable=False, max_length=120)
    reason: str = Field(default="", max_length=255)
    total_amount: float = Field(nullable=False)
    paid_amount: float = Field(default=0.0, nullable=False)
    due_date: Optional[date] = Field(default=None)
    notes: str = Field(default="")
    created_at: datetime = Field(default_factory=datetime.now, nullable=False, sa_type=DateTime)
