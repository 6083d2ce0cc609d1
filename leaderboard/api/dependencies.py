"""FastAPI dependencies resolving the process-wide storage."""

from __future__ import annotations

from fastapi import Depends, Request

from ..services.claims import ClaimService
from ..storage import Storage


def get_storage(request: Request) -> Storage:
    """Return the storage backend chosen at startup."""

    storage = getattr(request.app.state, "storage", None)
    if storage is None:
        raise RuntimeError("Storage not initialized")
    return storage


def get_claim_service(
    request: Request, storage: Storage = Depends(get_storage)
) -> ClaimService:
    return ClaimService(storage, rng=request.app.state.claim_rng)


__all__ = ["get_claim_service", "get_storage"]
