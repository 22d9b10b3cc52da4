"""Per-application chat state.

One ``ChatRuntime`` is built for each FastAPI app and stored on
``app.state.runtime``; the registry it owns lives exactly as long as the
server process serving that app.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from .config import Settings
from .hub import WebSocketHub
from .registry import SessionRegistry
from .router import EventRouter


@dataclass
class ChatRuntime:
    settings: Settings
    registry: SessionRegistry
    hub: WebSocketHub
    router: EventRouter


def build_runtime(settings: Optional[Settings] = None) -> ChatRuntime:
    settings = settings or Settings()
    registry = SessionRegistry()
    hub = WebSocketHub(registry, queue_size=settings.outbound_queue_size)
    router = EventRouter(
        registry,
        hub,
        admin_name=settings.admin_name,
        welcome_text=settings.welcome_text,
        time_format=settings.time_format,
    )
    return ChatRuntime(settings=settings, registry=registry, hub=hub, router=router)


__all__ = ["ChatRuntime", "build_runtime"]
