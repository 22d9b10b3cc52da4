from __future__ import annotations

import logging
import os
from typing import Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.staticfiles import StaticFiles

from .config import Settings
from .routers import rooms as rooms_router
from .routers import websockets as ws_router
from .runtime import build_runtime

logger = logging.getLogger(__name__)

# -----------------------------
# Static file mounting
# -----------------------------

# Custom StaticFiles variant that disables caching for the chat client assets.
class NoCacheStaticFiles(StaticFiles):
    async def get_response(self, path: str, scope):  # type: ignore[override]
        response = await super().get_response(path, scope)
        response.headers["Cache-Control"] = "no-cache, no-store, must-revalidate"
        response.headers["Pragma"] = "no-cache"
        response.headers["Expires"] = "0"
        return response


# -----------------------------
# FastAPI app factory
# -----------------------------

def create_app(settings: Optional[Settings] = None) -> FastAPI:
    """Build the relay app with its own, freshly created chat runtime."""
    settings = settings or Settings.from_env()

    app = FastAPI(title="Room Chat Relay")
    app.state.runtime = build_runtime(settings)

    if settings.cors_origins:
        app.add_middleware(
            CORSMiddleware,
            allow_origins=settings.cors_origins,
            allow_credentials=True,
            allow_methods=["*"],
            allow_headers=["*"],
        )

    app.include_router(rooms_router.router)
    app.include_router(ws_router.router)

    # Mounted last so the API and websocket routes take precedence over "/".
    if settings.static_dir and os.path.isdir(settings.static_dir):
        app.mount("/", NoCacheStaticFiles(directory=settings.static_dir, html=True), name="client")
    elif settings.static_dir:
        logger.warning("Static directory %r not found; serving API only", settings.static_dir)

    return app


__all__ = ["create_app", "NoCacheStaticFiles"]
