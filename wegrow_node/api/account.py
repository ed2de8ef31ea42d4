from __future__ import annotations

from typing import Any, Dict, List

from fastapi import APIRouter, Depends

from ..security.current_user import require_current_user
from ..wegrow_runtime.economy import Economy
from .deps import get_economy

router = APIRouter(prefix="/api", tags=["account"])


@router.get("/me")
def me(user: Dict[str, Any] = Depends(require_current_user)) -> Dict[str, Any]:
    return user


@router.get("/transactions")
def my_transactions(
    user: Dict[str, Any] = Depends(require_current_user),
    economy: Economy = Depends(get_economy),
) -> List[Dict[str, Any]]:
    """Caller's reward redemptions, oldest first."""
    return economy.transactions_for(user["id"])
