"""Database model for the append-only claim history."""

from __future__ import annotations

from datetime import datetime
from typing import NamedTuple, Optional

from sqlalchemy import DateTime
from sqlmodel import Field as ORMField, SQLModel

from ..core.time import utcnow
from .user import User


class ClaimHistory(SQLModel, table=True):
    """One successful claim: who received how many points and when."""

    __tablename__ = "claimHistory"

    id: Optional[int] = ORMField(default=None, primary_key=True)
    user_id: int = ORMField(foreign_key="users.id", index=True)
    points_awarded: int
    claimed_at: datetime = ORMField(
        default_factory=utcnow, sa_type=DateTime(timezone=True), index=True
    )


class ClaimWithUser(NamedTuple):
    """A history record joined with the user it belongs to."""

    claim: ClaimHistory
    user: User


__all__ = ["ClaimHistory", "ClaimWithUser"]
