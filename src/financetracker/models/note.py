"""Free-form notes and todo items."""

from __future__ import annotations

from datetime import datetime
from typing import ClassVar

from sqlalchemy import DateTime
from sqlmodel import Field, SQLModel

from ._ids import new_id


class Note(SQLModel, table=True):
    __tablename__: ClassVar[str] = "note"

    id: str = Field(default_factory=new_id, primary_key=True, max_length=32)
    owner_id: str = Field(foreign_key="user.id", nullable=False, index=True, max_length=32)
    content: str = Field(nullable=False)
    created_at: datetime = Field(default_factory=datetime.now, nullable=False, sa_type=DateTime)


class Todo(SQLModel, table=True):
    __tablename__: ClassVar[str] = "todo"

    id: str = Field(default_factory=new_id, primary_key=True, max_length=32)
    owner_id: str = Field(foreign_key="user.id", nullable=False, index=True, max_length=32)
    text: str = Field(nullable=False, max_length=500)
    completed: bool = Field(default=False, nullable=False)
    created_at: datetime = Field(default_factory=datetime.now, nullable=False, sa_type=DateTime)
