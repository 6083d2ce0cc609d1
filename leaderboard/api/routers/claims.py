"""Claim history endpoints."""

from __future__ import annotations

from fastapi import APIRouter, Depends, Query

from ...core import DEFAULT_HISTORY_LIMIT, MAX_HISTORY_LIMIT
from ...services.serializers import claim_with_user_to_dict
from ...storage import Storage
from ..dependencies import get_storage

router = APIRouter(tags=["claims"])


@router.get("/api/claim-history")
async def get_claim_history(
    limit: int = Query(DEFAULT_HISTORY_LIMIT, ge=1, le=MAX_HISTORY_LIMIT),
    storage: Storage = Depends(get_storage),
):
    """Most recent claims, newest first, each with its user embedded."""

    rows = await storage.get_claim_history(limit)
    return [claim_with_user_to_dict(row) for row in rows]


__all__ = ["router"]
