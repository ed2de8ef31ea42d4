"""
Accessors for the runtime objects attached to ``app.state`` by create_app().
"""

from __future__ import annotations

from fastapi import Request

from ..wegrow_runtime.economy import Economy
from ..wegrow_runtime.marketplace import Marketplace


def get_economy(request: Request) -> Economy:
    return request.app.state.economy


def get_marketplace(request: Request) -> Marketplace:
    return request.app.state.marketplace
