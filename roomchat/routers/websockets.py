from __future__ import annotations

import json
import logging
import uuid
from typing import Any, Optional, Tuple

from fastapi import APIRouter, WebSocket

from ..runtime import ChatRuntime

logger = logging.getLogger(__name__)

router = APIRouter(prefix="", tags=["ws"])


def _decode(message: dict) -> Tuple[Any, Optional[str]]:
    """Return ``(frame, None)`` for a JSON text message, else ``(None, reason)``."""
    text = message.get("text")
    if text is None:
        return None, "binary frames are not supported"
    try:
        return json.loads(text), None
    except ValueError:
        return None, "frame is not valid JSON"


@router.websocket("/ws")
async def chat_ws_endpoint(ws: WebSocket):
    await ws.accept()
    runtime: ChatRuntime = ws.app.state.runtime
    connection_id = uuid.uuid4().hex

    runtime.hub.register(connection_id, ws)
    runtime.router.on_connect(connection_id)
    try:
        while True:
            message = await ws.receive()
            if message["type"] == "websocket.disconnect":
                break
            frame, problem = _decode(message)
            if problem is not None:
                runtime.router.reject(connection_id, problem)
                continue
            runtime.router.dispatch(connection_id, frame)
    finally:
        # No awaits here: the task may already be cancelled when the peer goes away.
        runtime.hub.unregister(connection_id)
        runtime.router.on_disconnect(connection_id)
