"""Application settings and environment helpers."""

from __future__ import annotations

import os
from typing import Iterable, List, Optional

from dotenv import load_dotenv

load_dotenv(override=False)


def _optional_env(name: str) -> Optional[str]:
    """Return an environment variable, treating blank values as unset."""

    value = os.getenv(name)
    if value is None or not value.strip():
        return None
    return value.strip()


def _env_int(name: str, default: int) -> int:
    raw = _optional_env(name)
    if raw is None:
        return default
    try:
        return int(raw)
    except ValueError as exc:
        raise RuntimeError(f"{name} must be an integer") from exc


def _split_csv(raw: str | None) -> List[str]:
    if not raw:
        return []
    return [item.strip() for item in raw.split(",") if item.strip()]


def _unique(values: Iterable[str]) -> List[str]:
    seen = set()
    ordered: List[str] = []
    for value in values:
        if value not in seen:
            seen.add(value)
            ordered.append(value)
    return ordered


# Storage ---------------------------------------------------------------------
# Unset selects the in-memory backend.
DATABASE_URL = _optional_env("DATABASE_URL")


# CORS ------------------------------------------------------------------------
# FRONTEND_ORIGIN can contain a comma-separated list for multi-domain deploys.
_frontend_origins = _split_csv(os.getenv("FRONTEND_ORIGIN"))
_additional_origins = _split_csv(os.getenv("ADDITIONAL_ALLOWED_ORIGINS"))

_local_dev_origins = [
    "http://localhost:5173",
    "http://127.0.0.1:5173",
    "http://localhost:5000",
    "http://127.0.0.1:5000",
]

ALLOWED_CORS_ORIGINS = _unique(
    [
        *_frontend_origins,
        *_additional_origins,
        *_local_dev_origins,
    ]
)


# Logging ---------------------------------------------------------------------
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
LOG_FORMAT = os.getenv("LOG_FORMAT", "console")


# Server ----------------------------------------------------------------------
HOST = os.getenv("HOST", "0.0.0.0")
PORT = _env_int("PORT", 5000)


# Claims and history ----------------------------------------------------------
CLAIM_MIN_POINTS = 1
CLAIM_MAX_POINTS = 10

DEFAULT_HISTORY_LIMIT = 10
MAX_HISTORY_LIMIT = 100


__all__ = [
    "ALLOWED_CORS_ORIGINS",
    "CLAIM_MAX_POINTS",
    "CLAIM_MIN_POINTS",
    "DATABASE_URL",
    "DEFAULT_HISTORY_LIMIT",
    "HOST",
    "LOG_FORMAT",
    "LOG_LEVEL",
    "MAX_HISTORY_LIMIT",
    "PORT",
]
