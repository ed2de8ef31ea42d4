"""
Read-only lookups over the seeded catalog collections.
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional

CATALOG_COLLECTIONS = ("guides", "quests", "rewards", "sellers")


def _find(items: List[Dict[str, Any]], item_id: str) -> Optional[Dict[str, Any]]:
    for item in items:
        if item.get("id") == item_id:
            return item
    return None


def get_quest(doc: Dict[str, Any], quest_id: str) -> Optional[Dict[str, Any]]:
    return _find(doc.get("quests") or [], quest_id)


def get_reward(doc: Dict[str, Any], reward_id: str) -> Optional[Dict[str, Any]]:
    return _find(doc.get("rewards") or [], reward_id)


def list_collection(doc: Dict[str, Any], name: str) -> List[Dict[str, Any]]:
    if name not in CATALOG_COLLECTIONS:
        raise KeyError(f"not a catalog collection: {name!r}")
    return list(doc.get(name) or [])
