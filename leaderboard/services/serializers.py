"""Serialise users and claim rows to API-friendly dicts."""

from __future__ import annotations

from datetime import datetime
from typing import Any, Dict, Optional

from ..core.time import as_utc
from ..models import ClaimHistory, ClaimWithUser, User


def _isoformat(value: Optional[datetime]) -> Optional[str]:
    if value is None:
        return None
    return as_utc(value).isoformat().replace("+00:00", "Z")


def user_to_dict(user: User) -> Dict[str, Any]:
    return {
        "id": user.id,
        "name": user.name,
        "avatar": user.avatar,
        "points": user.points,
        "createdAt": _isoformat(user.created_at),
    }


def claim_to_dict(claim: ClaimHistory) -> Dict[str, Any]:
    return {
        "id": claim.id,
        "userId": claim.user_id,
        "pointsAwarded": claim.points_awarded,
        "claimedAt": _isoformat(claim.claimed_at),
    }


def claim_with_user_to_dict(row: ClaimWithUser) -> Dict[str, Any]:
    """History entry with the owning user embedded under ``user``."""

    payload = claim_to_dict(row.claim)
    payload["user"] = user_to_dict(row.user)
    return payload


__all__ = ["claim_to_dict", "claim_with_user_to_dict", "user_to_dict"]
