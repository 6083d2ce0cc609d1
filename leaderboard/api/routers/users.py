"""User listing, creation and claim endpoints."""

from __future__ import annotations

from typing import Any, Dict, List

import structlog
from fastapi import APIRouter, Depends

from ...core import NotFound, ValidationError
from ...services.claims import ClaimService, parse_user_id
from ...services.serializers import user_to_dict
from ...storage import Storage
from ..dependencies import get_claim_service, get_storage

router = APIRouter(tags=["users"])

logger = structlog.get_logger(__name__)


@router.get("/api/users")
async def list_users(storage: Storage = Depends(get_storage)) -> List[Dict[str, Any]]:
    """Get all users ranked by points, highest first."""

    users = await storage.get_all_users()
    return [user_to_dict(user) for user in users]


@router.post("/api/users", status_code=201)
async def create_user(body: Dict[str, Any], storage: Storage = Depends(get_storage)):
    """Create a new user with zero points."""

    if "name" not in body:
        raise ValidationError("User name is required")

    user = await storage.create_user(body["name"], body.get("avatar"))
    logger.info("user_created", user_id=user.id, name=user.name)
    return user_to_dict(user)


@router.get("/api/users/{user_id}")
async def get_user(user_id: str, storage: Storage = Depends(get_storage)):
    """Get a single user by id."""

    user = await storage.get_user(parse_user_id(user_id))
    if user is None:
        raise NotFound("User not found")
    return user_to_dict(user)


@router.post("/api/users/{user_id}/claim")
async def claim_points(user_id: str, service: ClaimService = Depends(get_claim_service)):
    """Award a random number of points to a user and record the claim."""

    result = await service.claim_points(user_id)
    return {
        "user": user_to_dict(result.user),
        "pointsAwarded": result.points_awarded,
    }


__all__ = ["router"]
