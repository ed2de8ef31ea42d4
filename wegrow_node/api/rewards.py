"""
wegrow_node/api/rewards.py
---------------------------------
Rewards store and redemption.

Endpoints:

    GET  /api/rewards
        -> reward catalog

    POST /api/rewards/redeem/{reward_id}
        -> debit the reward cost from the caller and record a transaction

Redemption is all-or-nothing: either the balance is debited and exactly one
transaction is appended, or (insufficient points, unknown reward, storage
failure) neither happens.
"""

from __future__ import annotations

from typing import Any, Dict, List

from fastapi import APIRouter, Depends
from pydantic import BaseModel, ConfigDict, Field

from ..security.current_user import require_current_user
from ..wegrow_runtime.economy import Economy
from ..wegrow_runtime.marketplace import Marketplace
from .deps import get_economy, get_marketplace

router = APIRouter(prefix="/api/rewards", tags=["rewards"])


# ---------------------------------------------------------------------------
# Models
# ---------------------------------------------------------------------------


class RedeemResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    ok: bool = True
    remaining_points: int = Field(
        ...,
        alias="remainingPoints",
        description="Caller balance after the debit.",
    )


# ---------------------------------------------------------------------------
# Routes
# ---------------------------------------------------------------------------


@router.get("")
def list_rewards(market: Marketplace = Depends(get_marketplace)) -> List[Dict[str, Any]]:
    return market.catalog("rewards")


@router.post("/redeem/{reward_id}", response_model=RedeemResponse, response_model_by_alias=True)
def redeem_reward(
    reward_id: str,
    user: Dict[str, Any] = Depends(require_current_user),
    economy: Economy = Depends(get_economy),
) -> RedeemResponse:
    result = economy.redeem_reward(user["id"], reward_id)
    return RedeemResponse(remaining_points=result["remainingPoints"])
