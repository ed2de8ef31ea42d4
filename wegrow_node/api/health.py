from __future__ import annotations

from typing import Dict

from fastapi import APIRouter

router = APIRouter(prefix="/api", tags=["health"])


@router.get("/health")
def health() -> Dict[str, bool]:
    return {"ok": True}
