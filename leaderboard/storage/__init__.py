"""Storage backends and the startup-time backend selector."""

from __future__ import annotations

from typing import Optional

import structlog

from ..core.errors import BackendUnavailable
from .base import SEED_USERS, Storage
from .database import DatabaseStorage
from .memory import MemoryStorage

logger = structlog.get_logger(__name__)


async def select_storage(database_url: Optional[str]) -> Storage:
    """Pick the process-wide storage backend.

    Without a database URL the seeded in-memory store is used. With one, the
    database backend is connected and seeded if empty; if it cannot be
    reached the process falls back to memory for its whole lifetime.
    """

    if not database_url:
        logger.info("storage_selected", backend=MemoryStorage.name)
        return MemoryStorage()

    storage = DatabaseStorage(database_url)
    try:
        await storage.connect()
    except BackendUnavailable as exc:
        logger.warning(
            "storage_backend_unavailable",
            url=storage.safe_url,
            error=exc.message,
            fallback=MemoryStorage.name,
        )
        return MemoryStorage()

    logger.info("storage_selected", backend=storage.name, url=storage.safe_url)
    return storage


__all__ = [
    "DatabaseStorage",
    "MemoryStorage",
    "SEED_USERS",
    "Storage",
    "select_storage",
]
