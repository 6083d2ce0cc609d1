"""API assembly helpers."""

from __future__ import annotations

from fastapi import FastAPI

from .errors import setup_error_handlers
from .middleware import RequestLogMiddleware
from .routers import ALL_ROUTERS


def setup_api(app: FastAPI) -> None:
    """Attach error handlers, request logging and all routers to the app."""

    setup_error_handlers(app)
    app.add_middleware(RequestLogMiddleware)
    for router in ALL_ROUTERS:
        app.include_router(router)


__all__ = ["setup_api"]
