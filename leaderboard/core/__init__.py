"""Core configuration and infrastructure helpers."""

from .config import (
    ALLOWED_CORS_ORIGINS,
    CLAIM_MAX_POINTS,
    CLAIM_MIN_POINTS,
    DATABASE_URL,
    DEFAULT_HISTORY_LIMIT,
    HOST,
    LOG_FORMAT,
    LOG_LEVEL,
    MAX_HISTORY_LIMIT,
    PORT,
)
from .errors import (
    BackendUnavailable,
    InvalidRequest,
    LeaderboardError,
    NotFound,
    ValidationError,
)
from .logging import setup_logging
from .time import as_utc, utcnow

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
    "BackendUnavailable",
    "InvalidRequest",
    "LeaderboardError",
    "NotFound",
    "ValidationError",
    "as_utc",
    "setup_logging",
    "utcnow",
]
