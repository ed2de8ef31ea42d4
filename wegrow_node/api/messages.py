from __future__ import annotations

from typing import Any, Dict, List, Optional

from fastapi import APIRouter, Body, Depends
from pydantic import BaseModel, Field

from ..security.current_user import require_current_user
from ..wegrow_runtime.marketplace import Marketplace
from .deps import get_marketplace

router = APIRouter(prefix="/api/messages", tags=["messages"])


class MessageCreate(BaseModel):
    text: Optional[str] = Field(None, max_length=4000)


@router.get("/{peer_id}")
def get_thread(
    peer_id: str,
    user: Dict[str, Any] = Depends(require_current_user),
    market: Marketplace = Depends(get_marketplace),
) -> List[Dict[str, Any]]:
    """Both directions of the conversation with ``peer_id``, oldest first."""
    return market.thread(user["id"], peer_id)


@router.post("/{peer_id}")
def send_message(
    peer_id: str,
    req: MessageCreate = Body(...),
    user: Dict[str, Any] = Depends(require_current_user),
    market: Marketplace = Depends(get_marketplace),
) -> Dict[str, Any]:
    return market.send_message(user["id"], peer_id, req.text)
