"""Storage contract shared by the in-memory and database backends."""

from __future__ import annotations

from typing import List, Optional, Protocol, Tuple

from ..core.config import DEFAULT_HISTORY_LIMIT
from ..core.errors import ValidationError
from ..models import ClaimHistory, ClaimWithUser, User


class Storage(Protocol):
    """Entity store for users and their claim history."""

    name: str

    async def get_user(self, user_id: int) -> Optional[User]: ...

    async def get_all_users(self) -> List[User]: ...

    async def create_user(self, name: str, avatar: Optional[str] = None) -> User: ...

    async def update_user_points(self, user_id: int, delta: int) -> Optional[User]: ...

    async def create_claim_history(self, user_id: int, points_awarded: int) -> ClaimHistory: ...

    async def get_claim_history(self, limit: int = DEFAULT_HISTORY_LIMIT) -> List[ClaimWithUser]: ...

    async def close(self) -> None: ...


def normalize_user_name(name: object) -> str:
    """Trim a display name and reject blanks."""

    if not isinstance(name, str):
        raise ValidationError("User name is required")
    normalized = name.strip()
    if not normalized:
        raise ValidationError("User name is required")
    return normalized


def normalize_avatar(avatar: object) -> Optional[str]:
    if avatar is None:
        return None
    if not isinstance(avatar, str):
        raise ValidationError("Avatar must be a URL string")
    return avatar.strip() or None


def check_points_delta(delta: object) -> int:
    if isinstance(delta, bool) or not isinstance(delta, int) or delta < 1:
        raise ValidationError("Points must be a positive integer")
    return delta


def check_limit(limit: object) -> int:
    if isinstance(limit, bool) or not isinstance(limit, int) or limit < 0:
        raise ValidationError("History limit must be a non-negative integer")
    return limit


_AVATAR_URL = "https://images.unsplash.com/photo-{}?ixlib=rb-4.0.3&auto=format&fit=crop&w=150&h=150"

# (name, points, avatar) for the starter users, assigned ids 1..10 in order.
SEED_USERS: Tuple[Tuple[str, int, str], ...] = (
    ("Rahul", 2156, _AVATAR_URL.format("1507003211169-0a1dd7228f2d")),
    ("Kamal", 1814, _AVATAR_URL.format("1494790108755-2616b612b77c")),
    ("Sanak", 1642, _AVATAR_URL.format("1472099645785-5658abf4ff4e")),
    ("Priya", 1285, _AVATAR_URL.format("1438761681033-6461ffad8d80")),
    ("Amit", 1156, _AVATAR_URL.format("1500648767791-00dcc994a43e")),
    ("Neha", 1024, _AVATAR_URL.format("1489424731084-a5d8b219a5bb")),
    ("Rajesh", 892, _AVATAR_URL.format("1560250097-0b93528c311a")),
    ("Sunita", 756, _AVATAR_URL.format("1544005313-94ddf0286df2")),
    ("Vikram", 634, _AVATAR_URL.format("1519345182560-3f2917c472ef")),
    ("Meera", 428, _AVATAR_URL.format("1517841905240-472988babdf9")),
)


__all__ = [
    "SEED_USERS",
    "Storage",
    "check_limit",
    "check_points_delta",
    "normalize_avatar",
    "normalize_user_name",
]
