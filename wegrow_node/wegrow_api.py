from __future__ import annotations

import logging
import os
from typing import Any, Dict, Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from . import config
from .api import account, auth, catalog, health, listings, messages, quests, rewards
from .errors import WeGrowError
from .wegrow_runtime.atomic_store import AtomicDocumentStore
from .wegrow_runtime.economy import Economy
from .wegrow_runtime.marketplace import Marketplace

log = logging.getLogger(__name__)


def _error(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": message})


def _install_error_handlers(app: FastAPI) -> None:
    @app.exception_handler(WeGrowError)
    async def wegrow_error_handler(request: Request, exc: WeGrowError) -> JSONResponse:
        if exc.status_code >= 500:
            log.error("%s %s failed: %s", request.method, request.url.path, exc.message)
        return _error(exc.status_code, exc.message)

    @app.exception_handler(StarletteHTTPException)
    async def http_error_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
        return _error(exc.status_code, str(exc.detail))

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
        errors = exc.errors()
        if errors:
            first = errors[0]
            where = ".".join(str(p) for p in first.get("loc", ()) if p != "body")
            message = f"{where}: {first.get('msg')}" if where else str(first.get("msg"))
        else:
            message = "Invalid request"
        return _error(400, message)


def build_store(cfg: Dict[str, Any]) -> AtomicDocumentStore:
    return AtomicDocumentStore(
        config.get_db_path(cfg),
        keep_backups=config.get_keep_backups(cfg),
        lock_timeout_sec=config.get_lock_timeout(cfg),
    )


def create_app(cfg: Optional[Dict[str, Any]] = None, store: Optional[AtomicDocumentStore] = None) -> FastAPI:
    cfg = cfg or config.load_config(os.getcwd())
    config.configure_logging(cfg)

    store = store or build_store(cfg)
    economy = Economy(
        store,
        listing_points=config.get_listing_points(cfg),
        repeat_quest_points=config.get_repeat_quest_points(cfg),
    )

    app = FastAPI(title="WeGrow API", version="0.1.0")
    app.state.config = cfg
    app.state.store = store
    app.state.economy = economy
    app.state.marketplace = Marketplace(store, economy)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=config.get_cors_origins(cfg),
        allow_methods=["*"],
        allow_headers=["*"],
    )

    _install_error_handlers(app)

    # Routers
    for module in (health, auth, listings, messages, catalog, quests, rewards, account):
        app.include_router(module.router)

    log.info("WeGrow API ready (store=%s)", store.path)
    return app
