"""In-memory storage backend used when no database is configured."""

from __future__ import annotations

from typing import Dict, List, Optional

from ..core.config import DEFAULT_HISTORY_LIMIT
from ..core.time import utcnow
from ..models import ClaimHistory, ClaimWithUser, User
from ..services.ranking import rank_users
from .base import (
    SEED_USERS,
    check_limit,
    check_points_delta,
    normalize_avatar,
    normalize_user_name,
)


class MemoryStorage:
    """Dict-backed store with per-collection id counters.

    None of the methods await, so each mutation completes without
    interleaving with other requests on the event loop.
    """

    name = "memory"

    def __init__(self, seed: bool = True) -> None:
        self._users: Dict[int, User] = {}
        self._claims: Dict[int, ClaimHistory] = {}
        self._next_user_id = 1
        self._next_claim_id = 1
        if seed:
            self._seed()

    def _seed(self) -> None:
        for name, points, avatar in SEED_USERS:
            user = User(
                id=self._next_user_id,
                name=name,
                avatar=avatar,
                points=points,
                created_at=utcnow(),
            )
            self._next_user_id += 1
            self._users[user.id] = user

    async def get_user(self, user_id: int) -> Optional[User]:
        return self._users.get(user_id)

    async def get_all_users(self) -> List[User]:
        return rank_users(self._users.values())

    async def create_user(self, name: str, avatar: Optional[str] = None) -> User:
        normalized = normalize_user_name(name)
        avatar_url = normalize_avatar(avatar)

        user = User(
            id=self._next_user_id,
            name=normalized,
            avatar=avatar_url,
            points=0,
            created_at=utcnow(),
        )
        self._next_user_id += 1
        self._users[user.id] = user
        return user

    async def update_user_points(self, user_id: int, delta: int) -> Optional[User]:
        check_points_delta(delta)
        current = self._users.get(user_id)
        if current is None:
            return None

        updated = User(
            id=current.id,
            name=current.name,
            avatar=current.avatar,
            points=current.points + delta,
            created_at=current.created_at,
        )
        self._users[user_id] = updated
        return updated

    async def create_claim_history(self, user_id: int, points_awarded: int) -> ClaimHistory:
        check_points_delta(points_awarded)
        claim = ClaimHistory(
            id=self._next_claim_id,
            user_id=user_id,
            points_awarded=points_awarded,
            claimed_at=utcnow(),
        )
        self._next_claim_id += 1
        self._claims[claim.id] = claim
        return claim

    async def get_claim_history(self, limit: int = DEFAULT_HISTORY_LIMIT) -> List[ClaimWithUser]:
        check_limit(limit)
        newest_first = sorted(
            self._claims.values(),
            key=lambda claim: (claim.claimed_at, claim.id),
            reverse=True,
        )

        rows: List[ClaimWithUser] = []
        for claim in newest_first:
            if len(rows) >= limit:
                break
            user = self._users.get(claim.user_id)
            # Claims whose user is gone are dropped, same as the SQL inner join.
            if user is None:
                continue
            rows.append(ClaimWithUser(claim=claim, user=user))
        return rows

    async def close(self) -> None:
        return None


__all__ = ["MemoryStorage"]
