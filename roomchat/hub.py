"""Websocket-backed transport.

Each connection gets an outbound queue and a writer task draining it into
``WebSocket.send_json``. ``deliver`` only enqueues, so a broadcast never
waits on a slow or dead client. A client that stops reading loses frames
once its queue is full.
"""
from __future__ import annotations

import asyncio
import logging
from typing import Any, Dict, List, Tuple

from fastapi import WebSocket

from .registry import SessionRegistry
from .transport import Transport

logger = logging.getLogger(__name__)

OUTBOUND_QUEUE_SIZE = 256


class WebSocketHub(Transport):
    """Tracks every open websocket, whether or not it has entered a room."""

    def __init__(self, registry: SessionRegistry, queue_size: int = OUTBOUND_QUEUE_SIZE) -> None:
        super().__init__(registry)
        self.queue_size = queue_size
        # connection id -> (websocket, outbound queue, writer task)
        self.connections: Dict[str, Tuple[WebSocket, asyncio.Queue, asyncio.Task]] = {}

    def register(self, connection_id: str, ws: WebSocket) -> None:
        """Start delivering to *ws*; must be called from inside the event loop."""
        queue: asyncio.Queue = asyncio.Queue(maxsize=self.queue_size)
        task = asyncio.create_task(self._writer(connection_id, ws, queue))
        self.connections[connection_id] = (ws, queue, task)
        logger.debug("Registered connection %s", connection_id)

    def unregister(self, connection_id: str) -> None:
        """Stop delivering to *connection_id*; frames still queued are discarded."""
        entry = self.connections.pop(connection_id, None)
        if entry is None:
            return
        entry[2].cancel()
        logger.debug("Unregistered connection %s", connection_id)

    async def flush(self, connection_id: str) -> None:
        """Wait until every frame queued for *connection_id* has been written."""
        entry = self.connections.get(connection_id)
        if entry is not None:
            await entry[1].join()

    # -------------------- Transport hooks -------------------- #

    def connection_ids(self) -> List[str]:
        return list(self.connections)

    def deliver(self, connection_id: str, frame: Dict[str, Any]) -> None:
        entry = self.connections.get(connection_id)
        if entry is None:
            logger.debug("Dropping %s frame for unknown connection %s", frame.get("type"), connection_id)
            return
        try:
            entry[1].put_nowait(frame)
        except asyncio.QueueFull:
            logger.warning("Outbound queue full for %s; dropping %s frame", connection_id, frame.get("type"))

    # -------------------- Writer -------------------- #

    async def _writer(self, connection_id: str, ws: WebSocket, queue: asyncio.Queue) -> None:
        while True:
            frame = await queue.get()
            try:
                await ws.send_json(frame)
            except Exception as e:
                # Client went away; the receive loop will report the disconnect.
                logger.warning("Send to %s failed: %s", connection_id, e)
                self.connections.pop(connection_id, None)
                queue.task_done()
                self._drain(queue)
                return
            queue.task_done()

    @staticmethod
    def _drain(queue: asyncio.Queue) -> None:
        while not queue.empty():
            queue.get_nowait()
            queue.task_done()


__all__ = ["WebSocketHub"]
