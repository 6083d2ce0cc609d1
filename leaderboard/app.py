"""FastAPI application factory and configuration."""

from __future__ import annotations

import random
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from .api import setup_api
from .core import (
    ALLOWED_CORS_ORIGINS,
    DATABASE_URL,
    HOST,
    LOG_FORMAT,
    LOG_LEVEL,
    PORT,
    setup_logging,
)
from .storage import Storage, select_storage


@asynccontextmanager
async def lifespan(app: FastAPI):
    # An injected storage (tests) skips backend selection.
    owns_storage = getattr(app.state, "storage", None) is None
    if owns_storage:
        app.state.storage = await select_storage(DATABASE_URL)
    yield
    if owns_storage:
        await app.state.storage.close()
        app.state.storage = None


def create_app(
    storage: Optional[Storage] = None,
    rng: Optional[random.Random] = None,
) -> FastAPI:
    setup_logging(LOG_LEVEL, LOG_FORMAT)

    app = FastAPI(title="Points Leaderboard API", version="1.0.0", lifespan=lifespan)
    app.state.storage = storage
    app.state.claim_rng = rng or random.Random()

    app.add_middleware(
        CORSMiddleware,
        allow_origins=ALLOWED_CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["GET", "POST", "OPTIONS"],
        allow_headers=["*"],
    )

    setup_api(app)
    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("leaderboard.app:app", host=HOST, port=PORT)
