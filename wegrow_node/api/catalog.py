"""
Read-only catalog endpoints: guides and sellers. Quests and rewards have
their own routers because they also carry the economy actions.
"""

from __future__ import annotations

from typing import Any, Dict, List

from fastapi import APIRouter, Depends

from ..wegrow_runtime.marketplace import Marketplace
from .deps import get_marketplace

router = APIRouter(prefix="/api", tags=["catalog"])


@router.get("/guides")
def list_guides(market: Marketplace = Depends(get_marketplace)) -> List[Dict[str, Any]]:
    return market.catalog("guides")


@router.get("/sellers")
def list_sellers(market: Marketplace = Depends(get_marketplace)) -> List[Dict[str, Any]]:
    return market.catalog("sellers")
