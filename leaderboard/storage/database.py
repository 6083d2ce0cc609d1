"""Persistent storage backend on an async SQLAlchemy engine."""

from __future__ import annotations

import asyncio
from typing import Any, Dict, List, Optional

import structlog
from sqlalchemy import insert, text, update
from sqlalchemy.engine import make_url
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.sql.elements import TextClause
from sqlmodel import SQLModel, func, select

from ..core.config import DEFAULT_HISTORY_LIMIT
from ..core.errors import BackendUnavailable
from ..core.time import utcnow
from ..models import ClaimHistory, ClaimWithUser, User
from .base import (
    SEED_USERS,
    check_limit,
    check_points_delta,
    normalize_avatar,
    normalize_user_name,
)

logger = structlog.get_logger(__name__)


def _next_id(model: Any) -> Any:
    """Scalar subquery yielding max(id) + 1 for the model's table."""

    return select(func.coalesce(func.max(model.id), 0) + 1).scalar_subquery()


def id_allocation_lock(dialect_name: str, table: Any) -> Optional[TextClause]:
    """Lock serialising max(id) allocation for the table, if the engine needs one.

    SQLite already holds a database-wide write lock during the INSERT. Under
    PostgreSQL READ COMMITTED two transactions can read the same max(id).
    """

    if dialect_name != "postgresql":
        return None
    return text(f'LOCK TABLE "{table.name}" IN SHARE ROW EXCLUSIVE MODE')


class DatabaseStorage:
    """Stores users and claim history in the ``users`` and ``claimHistory`` tables.

    Ids come from the current maximum in each table rather than an in-process
    counter, so several processes can share one database. Point updates are a
    single ``UPDATE ... SET points = points + :delta`` statement.
    """

    name = "database"

    def __init__(self, url: str, **engine_kwargs: Any) -> None:
        self.url = url
        self._engine_kwargs = engine_kwargs
        self._engine: Optional[AsyncEngine] = None
        self._session_factory: Optional[async_sessionmaker[AsyncSession]] = None

    @property
    def safe_url(self) -> str:
        try:
            return make_url(self.url).render_as_string(hide_password=True)
        except SQLAlchemyError:
            return "<invalid url>"

    async def connect(self) -> None:
        """Create the engine and tables, seeding users when the table is empty.

        Raises ``BackendUnavailable`` if the database cannot be reached.
        """

        try:
            self._engine = create_async_engine(self.url, pool_pre_ping=True, **self._engine_kwargs)
            self._session_factory = async_sessionmaker(self._engine, expire_on_commit=False)
            async with self._engine.begin() as conn:
                await conn.run_sync(SQLModel.metadata.create_all)
            await self._seed_if_empty()
        # asyncio.TimeoutError is not an OSError before Python 3.11.
        except (SQLAlchemyError, OSError, ImportError, asyncio.TimeoutError) as exc:
            await self.close()
            raise BackendUnavailable(f"Could not connect to {self.safe_url}: {exc}") from exc

    def _session(self) -> AsyncSession:
        if self._session_factory is None:
            raise RuntimeError("Database not initialized. Call connect() first.")
        return self._session_factory()

    async def _seed_if_empty(self) -> None:
        async with self._session() as session:
            count = (await session.execute(select(func.count()).select_from(User))).scalar_one()
            if count:
                return
            now = utcnow()
            session.add_all(
                User(id=index, name=name, avatar=avatar, points=points, created_at=now)
                for index, (name, points, avatar) in enumerate(SEED_USERS, start=1)
            )
            await session.commit()
        logger.info("storage_seeded", users=len(SEED_USERS))

    async def _insert_with_next_id(self, model: Any, values: Dict[str, Any]) -> int:
        """Insert a row whose id is max(id) + 1 and return that id."""

        table = model.__table__
        async with self._session() as session:
            lock = id_allocation_lock(session.bind.dialect.name, table)
            if lock is not None:
                await session.execute(lock)
            result = await session.execute(
                insert(table).values(id=_next_id(model), **values).returning(table.c.id)
            )
            new_id = result.scalar_one()
            await session.commit()
        return new_id

    async def get_user(self, user_id: int) -> Optional[User]:
        async with self._session() as session:
            return await session.get(User, user_id)

    async def get_all_users(self) -> List[User]:
        async with self._session() as session:
            result = await session.execute(
                select(User).order_by(User.points.desc(), User.id.asc())
            )
            return list(result.scalars().all())

    async def create_user(self, name: str, avatar: Optional[str] = None) -> User:
        normalized = normalize_user_name(name)
        avatar_url = normalize_avatar(avatar)
        created_at = utcnow()

        user_id = await self._insert_with_next_id(
            User,
            {
                "name": normalized,
                "avatar": avatar_url,
                "points": 0,
                "created_at": created_at,
            },
        )

        return User(id=user_id, name=normalized, avatar=avatar_url, points=0, created_at=created_at)

    async def update_user_points(self, user_id: int, delta: int) -> Optional[User]:
        check_points_delta(delta)
        async with self._session() as session:
            result = await session.execute(
                update(User)
                .where(User.id == user_id)
                .values(points=User.points + delta)
                .execution_options(synchronize_session=False)
            )
            if result.rowcount == 0:
                await session.rollback()
                return None
            # Read inside the same transaction so the row reflects this increment.
            user = (
                await session.execute(select(User).where(User.id == user_id))
            ).scalar_one()
            await session.commit()
            return user

    async def create_claim_history(self, user_id: int, points_awarded: int) -> ClaimHistory:
        check_points_delta(points_awarded)
        claimed_at = utcnow()

        claim_id = await self._insert_with_next_id(
            ClaimHistory,
            {
                "user_id": user_id,
                "points_awarded": points_awarded,
                "claimed_at": claimed_at,
            },
        )

        return ClaimHistory(
            id=claim_id,
            user_id=user_id,
            points_awarded=points_awarded,
            claimed_at=claimed_at,
        )

    async def get_claim_history(self, limit: int = DEFAULT_HISTORY_LIMIT) -> List[ClaimWithUser]:
        check_limit(limit)
        # Inner join: claims whose user no longer exists are dropped.
        statement = (
            select(ClaimHistory, User)
            .join(User, User.id == ClaimHistory.user_id)
            .order_by(ClaimHistory.claimed_at.desc(), ClaimHistory.id.desc())
            .limit(limit)
        )
        async with self._session() as session:
            result = await session.execute(statement)
            return [ClaimWithUser(claim=claim, user=user) for claim, user in result.all()]

    async def close(self) -> None:
        if self._engine is not None:
            await self._engine.dispose()
            self._engine = None
            self._session_factory = None


__all__ = ["DatabaseStorage"]
