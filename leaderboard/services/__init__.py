"""Service layer helpers."""

from .claims import ClaimResult, ClaimService, parse_user_id
from .ranking import rank_users
from .serializers import claim_to_dict, claim_with_user_to_dict, user_to_dict

__all__ = [
    "ClaimResult",
    "ClaimService",
    "claim_to_dict",
    "claim_with_user_to_dict",
    "parse_user_id",
    "rank_users",
    "user_to_dict",
]
