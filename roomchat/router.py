"""Inbound event handling for the chat relay.

This module translates client events into registry mutations and outbound
broadcasts while remaining completely framework-agnostic. The websocket
endpoint feeds it raw frames; tests drive it through a recording transport.

Handlers are plain synchronous methods. Each one finishes its registry
update and queues every resulting broadcast before returning, so no other
event can observe a half-applied change.
"""
from __future__ import annotations

import logging
from typing import Any, Callable, Dict, Optional

from pydantic import TypeAdapter, ValidationError

from .constants import (
    ADMIN_NAME,
    EVENT_ACTIVITY,
    EVENT_ENTER_ROOM,
    EVENT_ERROR,
    EVENT_LEAVE_ROOM,
    EVENT_MESSAGE,
    EVENT_ROOM_LIST,
    EVENT_USER_LIST,
    JOINED_SELF_TEXT,
    JOINED_TEXT,
    LEFT_TEXT,
    TIME_FORMAT,
    WELCOME_TEXT,
)
from .envelope import build_message
from .registry import SessionRegistry
from .room_index import active_rooms, members_of
from .schemas import EnterRoomRequest, ErrorNotice, MessageRequest, RoomList, Session, UserList
from .transport import Scope, Transport

logger = logging.getLogger(__name__)

# ``activity`` carries a bare display name rather than an object
_DISPLAY_NAME = TypeAdapter(str)


class EventRouter:
    """Drives the session registry and fans events out to delivery scopes."""

    def __init__(
        self,
        registry: SessionRegistry,
        transport: Transport,
        *,
        admin_name: str = ADMIN_NAME,
        welcome_text: str = WELCOME_TEXT,
        time_format: str = TIME_FORMAT,
    ) -> None:
        self.registry = registry
        self.transport = transport
        self.admin_name = admin_name
        self.welcome_text = welcome_text
        self.time_format = time_format
        self._handlers: Dict[str, Callable[[str, Any], None]] = {
            EVENT_ENTER_ROOM: self.on_enter_room,
            EVENT_LEAVE_ROOM: lambda cid, _data: self.on_leave_room(cid),
            EVENT_MESSAGE: self.on_message,
            EVENT_ACTIVITY: self.on_activity,
        }

    # ---------------------------------------------------------------------
    # Emission helpers
    # ---------------------------------------------------------------------

    def _notice(self, scope: Scope, text: str) -> None:
        msg = build_message(self.admin_name, text, time_format=self.time_format)
        self.transport.send(scope, EVENT_MESSAGE, msg)

    def _send_user_list(self, room: str) -> None:
        self.transport.send(
            Scope.to_room(room), EVENT_USER_LIST, UserList(users=members_of(self.registry, room))
        )

    def _send_room_list(self) -> None:
        self.transport.send(
            Scope.everyone(), EVENT_ROOM_LIST, RoomList(rooms=active_rooms(self.registry))
        )

    def _leave(self, connection_id: str) -> Optional[Session]:
        """Remove *connection_id*'s session and tell its former room."""
        session = self.registry.remove(connection_id)
        if session is None:
            return None
        self._notice(Scope.to_room(session.room), LEFT_TEXT.format(name=session.name))
        self._send_user_list(session.room)
        return session

    # ---------------------------------------------------------------------
    # Event handlers
    # ---------------------------------------------------------------------

    def on_connect(self, connection_id: str) -> None:
        logger.info("User %s connected", connection_id)
        self._notice(Scope.to_connection(connection_id), self.welcome_text)

    def on_enter_room(self, connection_id: str, data: Any) -> None:
        req = EnterRoomRequest.model_validate(data)

        # Old room hears about the departure before anything about the new one.
        previous = self._leave(connection_id)

        session = self.registry.activate(connection_id, req.name, req.room)
        logger.info(
            "%s entered %r as %r%s",
            connection_id,
            session.room,
            session.name,
            f" (from {previous.room!r})" if previous else "",
        )

        self._notice(Scope.to_connection(connection_id), JOINED_SELF_TEXT.format(room=session.room))
        self._notice(
            Scope.to_room(session.room, exclude=connection_id),
            JOINED_TEXT.format(name=session.name),
        )
        self._send_user_list(session.room)
        self._send_room_list()

    def on_leave_room(self, connection_id: str) -> None:
        if self._leave(connection_id) is not None:
            self._send_room_list()

    def on_message(self, connection_id: str, data: Any) -> None:
        req = MessageRequest.model_validate(data)
        session = self.registry.get(connection_id)
        if session is None:
            logger.debug("Dropping message from %s: not in a room", connection_id)
            return
        msg = build_message(req.name, req.text, time_format=self.time_format)
        self.transport.send(Scope.to_room(session.room), EVENT_MESSAGE, msg)

    def on_activity(self, connection_id: str, data: Any) -> None:
        name = _DISPLAY_NAME.validate_python(data, strict=True)
        session = self.registry.get(connection_id)
        if session is None:
            logger.debug("Dropping activity from %s: not in a room", connection_id)
            return
        self.transport.send(Scope.to_room(session.room, exclude=connection_id), EVENT_ACTIVITY, name)

    def on_disconnect(self, connection_id: str) -> None:
        session = self._leave(connection_id)
        logger.info("User %s disconnected", connection_id)
        if session is not None:
            self._send_room_list()

    # ---------------------------------------------------------------------
    # Frame dispatch (single public entry point for raw client frames)
    # ---------------------------------------------------------------------

    def dispatch(self, connection_id: str, frame: Any) -> None:
        """Route a raw ``{"type": ..., "data": ...}`` frame to its handler.

        Unknown event kinds and malformed payloads are answered with an
        ``error`` event to the sender and change nothing else.
        """
        event = frame.get("type") if isinstance(frame, dict) else None
        handler = self._handlers.get(event) if isinstance(event, str) else None
        if handler is None:
            self.reject(connection_id, f"unknown event type: {event!r}")
            return
        try:
            handler(connection_id, frame.get("data"))
        except ValidationError as e:
            self.reject(connection_id, f"invalid {event} payload: {e}")

    def reject(self, connection_id: str, detail: str) -> None:
        """Answer *connection_id* with an ``error`` event; nothing else changes."""
        logger.debug("Rejecting frame from %s: %s", connection_id, detail)
        self.transport.send(Scope.to_connection(connection_id), EVENT_ERROR, ErrorNotice(detail=detail))


__all__ = ["EventRouter"]
