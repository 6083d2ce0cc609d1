"""Ranking projection over the current set of users."""

from __future__ import annotations

from typing import Iterable, List

from ..models import User


def ranking_key(user: User) -> tuple[int, int]:
    """Sort key: most points first, lower id first among equals."""

    return (-user.points, user.id or 0)


def rank_users(users: Iterable[User]) -> List[User]:
    """Return users ordered by descending points.

    Ties keep ascending id order, matching ``ORDER BY points DESC, id ASC``
    in the database backend.
    """

    return sorted(users, key=ranking_key)


__all__ = ["rank_users", "ranking_key"]
