"""Delivery scopes and the transport abstraction the router emits through.

The router never touches sockets. It names *who* should receive an event
with a ``Scope`` and hands ``(scope, event, payload)`` to ``Transport.send``;
the transport resolves the scope to connection ids and delivers one frame
per recipient.
"""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Iterable, List, Optional

from pydantic import BaseModel

from .registry import SessionRegistry
from .room_index import members_of


class ScopeKind(str, Enum):
    CONNECTION = "connection"
    ROOM = "room"
    ALL = "all"


@dataclass(frozen=True)
class Scope:
    kind: ScopeKind
    connection_id: Optional[str] = None
    room: Optional[str] = None
    exclude: Optional[str] = None  # connection id left out of a room broadcast

    @classmethod
    def to_connection(cls, connection_id: str) -> "Scope":
        return cls(ScopeKind.CONNECTION, connection_id=connection_id)

    @classmethod
    def to_room(cls, room: str, exclude: Optional[str] = None) -> "Scope":
        return cls(ScopeKind.ROOM, room=room, exclude=exclude)

    @classmethod
    def everyone(cls) -> "Scope":
        return cls(ScopeKind.ALL)


def make_frame(event: str, payload: Any) -> Dict[str, Any]:
    """Wrap *payload* in the ``{"type", "data"}`` frame sent over the wire."""
    if isinstance(payload, BaseModel):
        payload = payload.model_dump()
    return {"type": event, "data": payload}


class Transport:
    """Base class for anything that can push frames to live connections.

    Subclasses implement ``connection_ids`` and ``deliver``. ``deliver`` must
    not block: the router calls ``send`` from inside an event handler and
    expects it to return immediately.
    """

    def __init__(self, registry: SessionRegistry) -> None:
        self.registry = registry

    # -------------------- Subclass hooks -------------------- #

    def connection_ids(self) -> Iterable[str]:
        raise NotImplementedError

    def deliver(self, connection_id: str, frame: Dict[str, Any]) -> None:
        raise NotImplementedError

    # -------------------- Scope resolution -------------------- #

    def recipients(self, scope: Scope) -> List[str]:
        if scope.kind is ScopeKind.CONNECTION:
            return [scope.connection_id] if scope.connection_id is not None else []
        if scope.kind is ScopeKind.ROOM:
            return [
                s.id for s in members_of(self.registry, scope.room or "")
                if s.id != scope.exclude
            ]
        return list(self.connection_ids())

    def send(self, scope: Scope, event: str, payload: Any) -> None:
        frame = make_frame(event, payload)
        for connection_id in self.recipients(scope):
            self.deliver(connection_id, frame)


__all__ = ["ScopeKind", "Scope", "make_frame", "Transport"]
