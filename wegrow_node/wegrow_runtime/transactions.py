"""
wegrow_node/wegrow_runtime/transactions.py
------------------------------------------

Append-only log of reward redemptions, stored in ``doc["transactions"]``.

Layout of one record:

    {
        "id": str,
        "userId": str,
        "itemId": str,        # reward id
        "pointsSpent": int,
        "cashAmount": 0,
        "date": int,          # epoch milliseconds
    }

Records are never updated or removed once appended.
"""

from __future__ import annotations

import secrets
import time
from typing import Any, Dict, List, Optional

Transaction = Dict[str, Any]


def _now_ms() -> int:
    return int(time.time() * 1000)


def new_transaction(user_id: str, item_id: str, points_spent: int, *, date: Optional[int] = None) -> Transaction:
    return {
        "id": secrets.token_urlsafe(12),
        "userId": user_id,
        "itemId": item_id,
        "pointsSpent": int(points_spent),
        "cashAmount": 0,
        "date": _now_ms() if date is None else int(date),
    }


def append(doc: Dict[str, Any], transaction: Transaction) -> Transaction:
    doc["transactions"].append(transaction)
    return transaction


def list_for_user(doc: Dict[str, Any], user_id: str) -> List[Transaction]:
    # sorted() is stable, so same-millisecond records keep append order.
    mine = [t for t in doc.get("transactions") or [] if t.get("userId") == user_id]
    return sorted(mine, key=lambda t: int(t.get("date") or 0))
