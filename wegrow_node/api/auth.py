"""
wegrow_node/api/auth.py
-----------------------

Signup / login. Both return ``{"user": ..., "token": ...}`` where the token is
the opaque caller identifier to send back in the ``X-Auth`` header.
"""

from __future__ import annotations

from typing import Any, Dict, Optional

from fastapi import APIRouter, Body, Depends
from pydantic import BaseModel, Field

from ..wegrow_runtime.marketplace import Marketplace
from .deps import get_marketplace

router = APIRouter(prefix="/api/auth", tags=["auth"])


# ---------------------------------------------------------------------------
# Models
# ---------------------------------------------------------------------------


class SignupRequest(BaseModel):
    email: Optional[str] = Field(None, max_length=320)
    name: Optional[str] = Field(None, max_length=120)
    location: Optional[str] = Field(None, max_length=200)


class LoginRequest(BaseModel):
    email: Optional[str] = Field(None, max_length=320)


# ---------------------------------------------------------------------------
# Routes
# ---------------------------------------------------------------------------


@router.post("/signup")
def signup(
    req: SignupRequest = Body(...),
    market: Marketplace = Depends(get_marketplace),
) -> Dict[str, Any]:
    return market.signup(req.email, name=req.name, location=req.location)


@router.post("/login")
def login(
    req: LoginRequest = Body(...),
    market: Marketplace = Depends(get_marketplace),
) -> Dict[str, Any]:
    return market.login(req.email)
