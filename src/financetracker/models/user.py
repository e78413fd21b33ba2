"""User model supporting authentication."""

from __future__ import annotations

from datetime import datetime
from typing import ClassVar, Optional

from sqlalchemy import DateTime
from sqlmodel import Field, SQLModel

from ._ids import new_id


class User(SQLModel, table=True):
    """Application user; ``id`` is the owner id stamped on every record."""

    __tablename__: ClassVar[str] = "user"

    id: str = Field(default_factory=new_id, primary_key=True, max_length=32)
    email: str = Field(nullable=False, unique=True, index=True, max_length=255)
    password_hash: str = Field(nullable=False, max_length=255)
    created_at: datetime = Field(default_factory=datetime.now, nullable=False, sa_type=DateTime)
    last_login: Optional[datetime] = Field(default=None, sa_type=DateTime)
