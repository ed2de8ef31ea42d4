from __future__ import annotations

from typing import Any, Dict, Optional

from fastapi import Depends, Header, Request

from ..api.deps import get_marketplace
from ..errors import Unauthorized


def current_user_optional(
    request: Request,
    x_auth: Optional[str] = Header(
        default=None,
        alias="X-Auth",
        description="Caller identifier returned as `token` by signup/login.",
    ),
) -> Optional[Dict[str, Any]]:
    if not x_auth:
        return None
    return get_marketplace(request).resolve(x_auth)


def require_current_user(
    user: Optional[Dict[str, Any]] = Depends(current_user_optional),
) -> Dict[str, Any]:
    if user is None:
        raise Unauthorized()
    return user
