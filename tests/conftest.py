"""Shared test fixtures."""

from __future__ import annotations

import random
from collections.abc import AsyncGenerator
from pathlib import Path

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from leaderboard.app import create_app
from leaderboard.storage import DatabaseStorage, MemoryStorage


@pytest.fixture
def database_url(tmp_path: Path) -> str:
    """Async SQLite URL for a fresh file in the test's temp directory."""
    return f"sqlite+aiosqlite:///{tmp_path / 'leaderboard.db'}"


@pytest.fixture
def memory_storage() -> MemoryStorage:
    """Seeded in-memory store, isolated per test."""
    return MemoryStorage()


@pytest_asyncio.fixture
async def database_storage(database_url: str) -> AsyncGenerator[DatabaseStorage, None]:
    """Seeded database store on a temporary SQLite file."""
    storage = DatabaseStorage(database_url)
    await storage.connect()
    yield storage
    await storage.close()


@pytest_asyncio.fixture(params=["memory", "database"])
async def storage(request: pytest.FixtureRequest, database_url: str) -> AsyncGenerator[object, None]:
    """Each storage backend in turn, seeded."""
    if request.param == "memory":
        yield MemoryStorage()
        return

    backend = DatabaseStorage(database_url)
    await backend.connect()
    yield backend
    await backend.close()


@pytest_asyncio.fixture
async def client(memory_storage: MemoryStorage) -> AsyncGenerator[AsyncClient, None]:
    """HTTP client against an app wired to an isolated in-memory store."""
    app = create_app(storage=memory_storage, rng=random.Random(1234))
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac
