"""Database model for leaderboard users."""

from __future__ import annotations

from datetime import datetime
from typing import Optional

from sqlalchemy import DateTime
from sqlmodel import Field as ORMField, SQLModel

from ..core.time import utcnow


class User(SQLModel, table=True):
    """Participant with an accumulated point total."""

    __tablename__ = "users"

    id: Optional[int] = ORMField(default=None, primary_key=True)
    name: str
    avatar: Optional[str] = None
    points: int = ORMField(default=0, index=True)
    created_at: datetime = ORMField(
        default_factory=utcnow, sa_type=DateTime(timezone=True)
    )


__all__ = ["User"]
