"""Claim orchestration: award random points and record the event."""

from __future__ import annotations

import random
from typing import TYPE_CHECKING, NamedTuple, Optional, Union

import structlog

from ..core.config import CLAIM_MAX_POINTS, CLAIM_MIN_POINTS
from ..core.errors import InvalidRequest, NotFound
from ..models import User

if TYPE_CHECKING:
    from ..storage.base import Storage

logger = structlog.get_logger(__name__)


class ClaimResult(NamedTuple):
    user: User
    points_awarded: int


def parse_user_id(raw: Union[int, str]) -> int:
    """Parse a positive integer user id from a path segment or int."""

    if isinstance(raw, bool):
        raise InvalidRequest("Invalid user ID")
    if isinstance(raw, int):
        value = raw
    elif isinstance(raw, str) and raw.strip().isdigit() and raw.strip().isascii():
        value = int(raw.strip())
    else:
        raise InvalidRequest("Invalid user ID")
    if value < 1:
        raise InvalidRequest("Invalid user ID")
    return value


class ClaimService:
    """Runs the claim sequence against a storage backend.

    The points update and the history insert are two separate store calls.
    If the insert fails the points stay credited without a history record.
    """

    def __init__(self, storage: "Storage", rng: Optional[random.Random] = None) -> None:
        self.storage = storage
        self.rng = rng or random.Random()

    def draw_points(self) -> int:
        return self.rng.randint(CLAIM_MIN_POINTS, CLAIM_MAX_POINTS)

    async def claim_points(self, user_id: Union[int, str]) -> ClaimResult:
        target_id = parse_user_id(user_id)
        points_awarded = self.draw_points()

        user = await self.storage.update_user_points(target_id, points_awarded)
        if user is None:
            raise NotFound("User not found")

        await self.storage.create_claim_history(target_id, points_awarded)

        logger.info(
            "points_claimed",
            user_id=target_id,
            points_awarded=points_awarded,
            total_points=user.points,
        )
        return ClaimResult(user=user, points_awarded=points_awarded)


__all__ = ["ClaimResult", "ClaimService", "parse_user_id"]
