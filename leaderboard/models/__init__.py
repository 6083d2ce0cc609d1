"""Database model exports."""

from .claim import ClaimHistory, ClaimWithUser
from .user import User

__all__ = [
    "ClaimHistory",
    "ClaimWithUser",
    "User",
]
