"""System-level API endpoints."""

from __future__ import annotations

from typing import Any, Dict

from fastapi import APIRouter, Depends

from ...storage import Storage
from ..dependencies import get_storage

router = APIRouter(tags=["system"])


@router.get("/health")
def health(storage: Storage = Depends(get_storage)) -> Dict[str, Any]:
    """Readiness probe reporting which storage backend is active."""

    return {"ok": True, "storage": storage.name}


__all__ = ["router"]
