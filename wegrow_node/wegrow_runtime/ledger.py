"""
wegrow_node/wegrow_runtime/ledger.py
------------------------------------

Points and badges on a single user record.

These helpers mutate the user dict they are given and never touch the store;
callers run them on the working copy inside ``AtomicDocumentStore.transact``
so the balance check and the debit see the same state.

Invariants:

- ``user["points"]`` is a non-negative int after every call.
- A quest id appears in ``user["badges"]`` at most once.
"""

from __future__ import annotations

from typing import Any, Dict, List

from ..errors import InsufficientBalance

User = Dict[str, Any]


def points_of(user: User) -> int:
    return int(user.get("points") or 0)


def badges_of(user: User) -> List[str]:
    badges = user.get("badges")
    if not isinstance(badges, list):
        badges = []
        user["badges"] = badges
    return badges


def award_points(user: User, amount: int) -> int:
    """Credit ``amount`` points and return the new balance."""
    if amount < 0:
        raise ValueError(f"award amount must be non-negative, got {amount}")
    user["points"] = points_of(user) + int(amount)
    return user["points"]


def award_badge(user: User, quest_id: str) -> bool:
    """Add the quest badge; False when the user already holds it."""
    badges = badges_of(user)
    if quest_id in badges:
        return False
    badges.append(quest_id)
    return True


def debit_points(user: User, amount: int) -> int:
    """
    Take ``amount`` points off the balance and return what is left.

    Raises InsufficientBalance, leaving the user untouched, when the balance
    does not cover the amount.
    """
    if amount < 0:
        raise ValueError(f"debit amount must be non-negative, got {amount}")
    current = points_of(user)
    if current < amount:
        raise InsufficientBalance()
    user["points"] = current - int(amount)
    return user["points"]
