"""
wegrow_node/wegrow_runtime/marketplace.py
-----------------------------------------

Plain CRUD around the economy: accounts, listings, message threads and the
static catalogs. Listing creation is the one path that crosses into the
economy, because posting a listing earns points.

Identity model: the "token" handed out at signup/login is the user id. It
is an opaque caller identifier, not a credential.
"""

from __future__ import annotations

import logging
import secrets
import time
from typing import Any, Dict, List, Optional

from ..errors import EmailExists, PeerNotFound, UserNotFound, ValidationError
from . import catalog
from .atomic_store import AtomicDocumentStore
from .economy import Economy
from .users import find_user, find_user_by_email, new_user, require_user

log = logging.getLogger(__name__)

LISTING_TYPES = ("Have", "Want")
DEFAULT_RADIUS_KM = 2


def _now_ms() -> int:
    return int(time.time() * 1000)


def _clean(value: Optional[str]) -> str:
    return (value or "").strip()


class Marketplace:
    def __init__(self, store: AtomicDocumentStore, economy: Economy) -> None:
        self.store = store
        self.economy = economy

    # ------------------------------------------------------------------
    # Accounts
    # ------------------------------------------------------------------

    def signup(self, email: Optional[str], name: Optional[str] = None, location: Optional[str] = None) -> Dict[str, Any]:
        email = _clean(email)
        if not email:
            raise ValidationError("Email required")

        def _apply(doc: Dict[str, Any]) -> Dict[str, Any]:
            # Uniqueness is checked inside the transaction so two concurrent
            # signups cannot both pass.
            if find_user_by_email(doc, email) is not None:
                raise EmailExists()
            user = new_user(email, name=_clean(name), location=_clean(location))
            doc["users"].append(user)
            return dict(user)

        user = self.store.transact(_apply)
        log.info("signup user=%s", user["id"])
        return {"user": user, "token": user["id"]}

    def login(self, email: Optional[str]) -> Dict[str, Any]:
        user = find_user_by_email(self.store.load(), _clean(email))
        if user is None:
            raise UserNotFound()
        return {"user": user, "token": user["id"]}

    def resolve(self, token: Optional[str]) -> Optional[Dict[str, Any]]:
        """Map a caller identifier to its user record, or None."""
        return find_user(self.store.load(), _clean(token))

    def get_user(self, user_id: str) -> Dict[str, Any]:
        return require_user(self.store.load(), user_id)

    # ------------------------------------------------------------------
    # Listings
    # ------------------------------------------------------------------

    def search_listings(self, type_: Optional[str] = None, q: Optional[str] = None) -> List[Dict[str, Any]]:
        out = self.store.load()["listings"]
        if type_:
            out = [item for item in out if item.get("type") == type_]
        if q:
            needle = str(q).lower()
            out = [
                item
                for item in out
                if needle in f"{item.get('plantName', '')} {item.get('description', '')}".lower()
            ]
        return out

    def create_listing(self, user: Dict[str, Any], fields: Dict[str, Any]) -> Dict[str, Any]:
        plant_name = _clean(fields.get("plantName"))
        listing_type = _clean(fields.get("type"))
        if not plant_name or not listing_type:
            raise ValidationError("Missing fields")
        if listing_type not in LISTING_TYPES:
            raise ValidationError(f"type must be one of {', '.join(LISTING_TYPES)}")

        radius = fields.get("radiusKm")
        if radius is not None and radius < 0:
            raise ValidationError("radiusKm must not be negative")

        listing = {
            "id": secrets.token_urlsafe(12),
            "ownerId": user["id"],
            "plantName": plant_name,
            "description": fields.get("description") or "",
            "type": listing_type,
            "location": fields.get("location") or user.get("location") or "",
            "radiusKm": radius or DEFAULT_RADIUS_KM,
            "photoUrl": fields.get("photoUrl") or "",
        }
        return self.economy.record_listing_created(user["id"], listing)

    # ------------------------------------------------------------------
    # Messages
    # ------------------------------------------------------------------

    def thread(self, user_id: str, peer_id: str) -> List[Dict[str, Any]]:
        msgs = [
            m
            for m in self.store.load()["messages"]
            if (m.get("fromId") == user_id and m.get("toId") == peer_id)
            or (m.get("fromId") == peer_id and m.get("toId") == user_id)
        ]
        return sorted(msgs, key=lambda m: int(m.get("ts") or 0))

    def send_message(self, user_id: str, peer_id: str, text: Optional[str]) -> Dict[str, Any]:
        if not text or not text.strip():
            raise ValidationError("Text required")

        def _apply(doc: Dict[str, Any]) -> Dict[str, Any]:
            require_user(doc, user_id)
            if find_user(doc, peer_id) is None:
                raise PeerNotFound()
            msg = {
                "id": secrets.token_urlsafe(12),
                "fromId": user_id,
                "toId": peer_id,
                "text": text,
                "ts": _now_ms(),
            }
            doc["messages"].append(msg)
            return msg

        return self.store.transact(_apply)

    # ------------------------------------------------------------------
    # Catalogs
    # ------------------------------------------------------------------

    def catalog(self, name: str) -> List[Dict[str, Any]]:
        return catalog.list_collection(self.store.load(), name)
