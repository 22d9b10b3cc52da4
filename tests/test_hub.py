import asyncio

import pytest

from roomchat.hub import WebSocketHub
from roomchat.registry import SessionRegistry
from roomchat.transport import Scope


class FakeWebSocket:
    def __init__(self, fail: bool = False) -> None:
        self.sent = []
        self.fail = fail

    async def send_json(self, data) -> None:
        if self.fail:
            raise RuntimeError("socket closed")
        self.sent.append(data)


@pytest.fixture
def registry():
    return SessionRegistry()


@pytest.mark.asyncio
async def test_frames_are_written_in_order(registry) -> None:
    hub = WebSocketHub(registry)
    ws = FakeWebSocket()
    hub.register("c1", ws)

    hub.send(Scope.to_connection("c1"), "message", {"text": "one"})
    hub.send(Scope.everyone(), "roomList", {"rooms": []})
    await hub.flush("c1")

    assert ws.sent == [
        {"type": "message", "data": {"text": "one"}},
        {"type": "roomList", "data": {"rooms": []}},
    ]
    hub.unregister("c1")


@pytest.mark.asyncio
async def test_room_scope_uses_registry(registry) -> None:
    hub = WebSocketHub(registry)
    sockets = {cid: FakeWebSocket() for cid in ("c1", "c2", "c3")}
    for cid, ws in sockets.items():
        hub.register(cid, ws)
    registry.activate("c1", "Alice", "general")
    registry.activate("c2", "Bob", "general")

    hub.send(Scope.to_room("general", exclude="c1"), "activity", "Alice")
    for cid in sockets:
        await hub.flush(cid)

    assert sockets["c1"].sent == []
    assert sockets["c2"].sent == [{"type": "activity", "data": "Alice"}]
    assert sockets["c3"].sent == []
    for cid in sockets:
        hub.unregister(cid)


@pytest.mark.asyncio
async def test_send_does_not_wait_for_delivery(registry) -> None:
    hub = WebSocketHub(registry)
    ws = FakeWebSocket()
    hub.register("c1", ws)

    hub.send(Scope.to_connection("c1"), "message", {"text": "queued"})
    # Nothing is written until the writer task gets a turn.
    assert ws.sent == []

    await hub.flush("c1")
    assert len(ws.sent) == 1
    hub.unregister("c1")


@pytest.mark.asyncio
async def test_failed_send_drops_connection(registry) -> None:
    hub = WebSocketHub(registry)
    hub.register("c1", FakeWebSocket(fail=True))

    hub.send(Scope.to_connection("c1"), "message", {"text": "lost"})
    hub.send(Scope.to_connection("c1"), "message", {"text": "also lost"})
    await hub.flush("c1")

    assert "c1" not in hub.connection_ids()


@pytest.mark.asyncio
async def test_unregister_is_idempotent_and_stops_delivery(registry) -> None:
    hub = WebSocketHub(registry)
    ws = FakeWebSocket()
    hub.register("c1", ws)
    hub.unregister("c1")
    hub.unregister("c1")

    hub.send(Scope.to_connection("c1"), "message", {"text": "late"})
    await asyncio.sleep(0)

    assert ws.sent == []
    assert hub.connection_ids() == []


@pytest.mark.asyncio
async def test_full_queue_drops_extra_frames(registry) -> None:
    hub = WebSocketHub(registry, queue_size=2)
    ws = FakeWebSocket()
    hub.register("c1", ws)

    # The writer has not run yet, so the third frame finds the queue full.
    for n in range(3):
        hub.send(Scope.to_connection("c1"), "message", {"text": str(n)})
    await hub.flush("c1")

    assert [f["data"]["text"] for f in ws.sent] == ["0", "1"]

    hub.send(Scope.to_connection("c1"), "message", {"text": "later"})
    await hub.flush("c1")
    assert ws.sent[-1]["data"]["text"] == "later"
    hub.unregister("c1")
