"""
wegrow_node/api/quests.py
-------------------------

    GET  /api/quests
    POST /api/quests/complete/{quest_id}  -> {"ok", "points", "badges"}
"""

from __future__ import annotations

from typing import Any, Dict, List

from fastapi import APIRouter, Depends
from pydantic import BaseModel

from ..security.current_user import require_current_user
from ..wegrow_runtime.economy import Economy
from ..wegrow_runtime.marketplace import Marketplace
from .deps import get_economy, get_marketplace

router = APIRouter(prefix="/api/quests", tags=["quests"])


class QuestCompletionResponse(BaseModel):
    ok: bool = True
    points: int
    badges: List[str]


@router.get("")
def list_quests(market: Marketplace = Depends(get_marketplace)) -> List[Dict[str, Any]]:
    return market.catalog("quests")


@router.post("/complete/{quest_id}", response_model=QuestCompletionResponse)
def complete_quest(
    quest_id: str,
    user: Dict[str, Any] = Depends(require_current_user),
    economy: Economy = Depends(get_economy),
) -> QuestCompletionResponse:
    result = economy.complete_quest(user["id"], quest_id)
    return QuestCompletionResponse(points=result["points"], badges=result["badges"])
