"""Shared fixtures: a registry and a transport that records every frame."""
from __future__ import annotations

from typing import Any, Dict, List, Tuple

import pytest

from roomchat.registry import SessionRegistry
from roomchat.router import EventRouter
from roomchat.transport import Transport


class RecordingTransport(Transport):
    def __init__(self, registry: SessionRegistry) -> None:
        super().__init__(registry)
        self.connected: List[str] = []
        self.sent: List[Tuple[str, Dict[str, Any]]] = []

    def connect(self, connection_id: str) -> None:
        self.connected.append(connection_id)

    def disconnect(self, connection_id: str) -> None:
        self.connected.remove(connection_id)

    def connection_ids(self) -> List[str]:
        return list(self.connected)

    def deliver(self, connection_id: str, frame: Dict[str, Any]) -> None:
        self.sent.append((connection_id, frame))

    def frames_for(self, connection_id: str, event: str = None) -> List[Dict[str, Any]]:
        return [
            f for cid, f in self.sent
            if cid == connection_id and (event is None or f["type"] == event)
        ]

    def clear(self) -> None:
        self.sent.clear()


@pytest.fixture
def registry() -> SessionRegistry:
    return SessionRegistry()


@pytest.fixture
def transport(registry: SessionRegistry) -> RecordingTransport:
    return RecordingTransport(registry)


@pytest.fixture
def router(registry: SessionRegistry, transport: RecordingTransport) -> EventRouter:
    return EventRouter(registry, transport)
