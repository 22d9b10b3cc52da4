"""Read-side helpers deriving rooms from the session registry.

Rooms are never stored: both queries rescan the registry on every call, so
an emptied room disappears the moment its last session is removed.
"""
from __future__ import annotations

from typing import List

from .registry import SessionRegistry
from .schemas import Session


def members_of(registry: SessionRegistry, room: str) -> List[Session]:
    """Return every session currently in *room*, in registry order."""
    return [s for s in registry.sessions() if s.room == room]


def active_rooms(registry: SessionRegistry) -> List[str]:
    """Return each room referenced by at least one session, first-seen order."""
    rooms: List[str] = []
    for session in registry.sessions():
        if session.room not in rooms:
            rooms.append(session.room)
    return rooms


__all__ = ["members_of", "active_rooms"]
