"""
Default document for a fresh node.

Guides, quests, rewards and sellers are read-only catalog data; the other
collections start empty and are filled through the API.
"""

from __future__ import annotations

from typing import Any, Dict, List, Tuple

COLLECTIONS: Tuple[str, ...] = (
    "users",
    "listings",
    "messages",
    "guides",
    "quests",
    "rewards",
    "transactions",
    "sellers",
)


def _guides() -> List[Dict[str, Any]]:
    return [
        {
            "id": "g1",
            "title": "Propagating pothos from cuttings",
            "body": "Cut below a node, root in water for two weeks, then pot up.",
            "tags": ["propagation", "houseplants"],
        },
        {
            "id": "g2",
            "title": "Saving tomato seeds",
            "body": "Ferment the pulp for three days, rinse, and dry on paper.",
            "tags": ["seeds", "vegetables"],
        },
    ]


def _quests() -> List[Dict[str, Any]]:
    return [
        {"id": "q1", "title": "First swap", "description": "Complete your first plant swap.", "points": 50},
        {"id": "q2", "title": "Green thumb", "description": "Share a care guide with a neighbour.", "points": 20},
        {"id": "q3", "title": "Seed saver", "description": "Offer seeds from your own harvest.", "points": 30},
    ]


def _rewards() -> List[Dict[str, Any]]:
    return [
        {"id": "r1", "title": "Seed packet", "description": "A packet of heirloom seeds.", "pointsCost": 30},
        {"id": "r2", "title": "Terracotta pot", "description": "A 12cm terracotta pot.", "pointsCost": 80},
        {"id": "r3", "title": "Nursery voucher", "description": "Voucher for a partner nursery.", "pointsCost": 200},
    ]


def _sellers() -> List[Dict[str, Any]]:
    return [
        {"id": "s1", "name": "Leaf & Root Nursery", "location": "Downtown", "categories": ["houseplants"]},
        {"id": "s2", "name": "Community Seed Library", "location": "Eastside", "categories": ["seeds"]},
    ]


def default_document() -> Dict[str, Any]:
    doc: Dict[str, Any] = {name: [] for name in COLLECTIONS}
    doc["guides"] = _guides()
    doc["quests"] = _quests()
    doc["rewards"] = _rewards()
    doc["sellers"] = _sellers()
    return doc
