"""
User records inside the document.
"""

from __future__ import annotations

import secrets
from typing import Any, Dict, Optional

from ..errors import UserNotFound

User = Dict[str, Any]

DEFAULT_NAME = "New Grower"


def new_user(email: str, name: Optional[str] = None, location: Optional[str] = None) -> User:
    return {
        "id": secrets.token_urlsafe(12),
        "name": name or DEFAULT_NAME,
        "email": email,
        "location": location or "",
        "bio": "",
        "interests": [],
        "membershipTier": "free",
        "points": 0,
        "badges": [],
    }


def find_user(doc: Dict[str, Any], user_id: Optional[str]) -> Optional[User]:
    if not user_id:
        return None
    for user in doc.get("users") or []:
        if user.get("id") == user_id:
            return user
    return None


def find_user_by_email(doc: Dict[str, Any], email: str) -> Optional[User]:
    for user in doc.get("users") or []:
        if user.get("email") == email:
            return user
    return None


def require_user(doc: Dict[str, Any], user_id: str) -> User:
    user = find_user(doc, user_id)
    if user is None:
        raise UserNotFound()
    return user
