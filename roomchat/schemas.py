"""Pydantic data schemas used across the chat relay.

Every payload that crosses the websocket, in either direction, is declared
here so the router, the transport and the HTTP roster endpoints agree on a
single shape.
"""
from __future__ import annotations

from typing import List

from pydantic import BaseModel

# -----------------------------
# Runtime
# -----------------------------

class Session(BaseModel):
    """A live connection that has entered a room under a display name."""

    id: str
    name: str
    room: str


# -----------------------------
# Inbound payloads
# -----------------------------

class EnterRoomRequest(BaseModel):
    name: str
    room: str


class MessageRequest(BaseModel):
    name: str
    text: str


# -----------------------------
# Outbound payloads
# -----------------------------

class ChatMessage(BaseModel):
    """Envelope stamped on every chat line before it is fanned out."""

    name: str
    text: str
    time: str  # HH:MM:SS at send time


class UserList(BaseModel):
    users: List[Session]


class RoomList(BaseModel):
    rooms: List[str]


class ErrorNotice(BaseModel):
    detail: str


__all__ = [
    # runtime
    "Session",
    # inbound
    "EnterRoomRequest",
    "MessageRequest",
    # outbound
    "ChatMessage",
    "UserList",
    "RoomList",
    "ErrorNotice",
]
