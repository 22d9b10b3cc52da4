"""Authoritative in-memory mapping of connection id -> ``Session``.

The registry is an ordinary object owned by the running application and
handed to whoever needs it; nothing here is module-global.
"""
from __future__ import annotations

import logging
from typing import Dict, List, Optional

from .schemas import Session

logger = logging.getLogger(__name__)


class SessionRegistry:
    """Holds at most one ``Session`` per connection id.

    All mutations are synchronous. The application runs on a single event
    loop and the router never awaits between a lookup and the mutation that
    follows it, so no lock is taken here.
    """

    def __init__(self) -> None:
        self._sessions: Dict[str, Session] = {}

    def activate(self, connection_id: str, name: str, room: str) -> Session:
        """Insert or replace the session for *connection_id* and return it."""
        session = Session(id=connection_id, name=name, room=room)
        self._sessions[connection_id] = session
        logger.debug("Activated %s as %r in %r", connection_id, name, room)
        return session

    def remove(self, connection_id: str) -> Optional[Session]:
        """Drop the session for *connection_id*; returns it, or *None* if absent."""
        session = self._sessions.pop(connection_id, None)
        if session is not None:
            logger.debug("Removed %s from %r", connection_id, session.room)
        return session

    def get(self, connection_id: str) -> Optional[Session]:
        return self._sessions.get(connection_id)

    def sessions(self) -> List[Session]:
        """Snapshot of all sessions in insertion order."""
        return list(self._sessions.values())

    def __contains__(self, connection_id: object) -> bool:
        return connection_id in self._sessions

    def __len__(self) -> int:
        return len(self._sessions)


__all__ = ["SessionRegistry"]
