"""
wegrow_node/api/listings.py
---------------------------

Endpoints:

    GET  /api/listings?type=Have|Want&q=text
        -> listings, newest first

    POST /api/listings
        -> create a listing; the owner earns listing points in the same
           store transaction
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional, Union

from fastapi import APIRouter, Body, Depends, Query
from pydantic import BaseModel, ConfigDict, Field

from ..security.current_user import require_current_user
from ..wegrow_runtime.marketplace import Marketplace
from .deps import get_marketplace

router = APIRouter(prefix="/api/listings", tags=["listings"])


class ListingCreate(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    plant_name: Optional[str] = Field(None, alias="plantName", max_length=200)
    type: Optional[str] = Field(None, description="Have | Want")
    description: Optional[str] = Field(None, max_length=4000)
    location: Optional[str] = Field(None, max_length=200)
    radius_km: Optional[Union[int, float]] = Field(None, alias="radiusKm")
    photo_url: Optional[str] = Field(None, alias="photoUrl", max_length=2000)


@router.get("")
def list_listings(
    type: Optional[str] = Query(default=None, description="Exact listing type filter."),
    q: Optional[str] = Query(default=None, description="Case-insensitive text search."),
    market: Marketplace = Depends(get_marketplace),
) -> List[Dict[str, Any]]:
    return market.search_listings(type_=type, q=q)


@router.post("")
def create_listing(
    req: ListingCreate = Body(...),
    user: Dict[str, Any] = Depends(require_current_user),
    market: Marketplace = Depends(get_marketplace),
) -> Dict[str, Any]:
    return market.create_listing(user, req.model_dump(by_alias=True))
