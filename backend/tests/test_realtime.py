"""
Tests for change notification fan-out and the client-side change stream.
"""

import json

import httpx
import pytest

from noticeboard.board.backend_client import BackendClient
from noticeboard.core.exceptions import BackendError
from noticeboard.services.realtime_service import ChangeNotifier
from noticeboard.board.types import ChangeEvent as ClientChangeEvent
from noticeboard.schemas.realtime_schemas import ChangeEvent


class FakeWebSocket:
    def __init__(self, fail=False):
        self.fail = fail
        self.accepted = False
        self.sent = []

    async def accept(self):
        self.accepted = True

    async def send_text(self, text):
        if self.fail:
            raise RuntimeError("connection closed")
        self.sent.append(json.loads(text))


async def test_publish_reaches_websockets_and_queues():
    notifier = ChangeNotifier()
    socket = FakeWebSocket()
    await notifier.connect(socket)
    await notifier.connect(socket)
    queue = notifier.subscribe()

    await notifier.publish("posts", "INSERT", "post-1")

    expected = {"type": "change", "table": "posts", "event": "INSERT", "id": "post-1"}
    assert socket.accepted
    assert len(notifier.connections) == 1
    assert socket.sent == [expected]
    assert queue.get_nowait() == expected


async def test_failed_websocket_is_dropped():
    notifier = ChangeNotifier()
    healthy, broken = FakeWebSocket(), FakeWebSocket(fail=True)
    await notifier.connect(healthy)
    await notifier.connect(broken)

    await notifier.publish("post_likes", "DELETE", "post-1")

    assert notifier.connections == [healthy]
    assert len(healthy.sent) == 1


async def test_unsubscribed_queue_gets_nothing():
    notifier = ChangeNotifier()
    queue = notifier.subscribe()
    notifier.unsubscribe(queue)
    notifier.unsubscribe(queue)

    await notifier.publish("posts", "UPDATE", "post-1")

    assert queue.empty()


def sse_body(*payloads):
    lines = []
    for payload in payloads:
        data = payload if isinstance(payload, str) else json.dumps(payload)
        lines.append(f"data: {data}\n\n")
    return "".join(lines).encode()


async def test_changes_skips_heartbeats_and_noise():
    body = sse_body(
        {"type": "heartbeat"},
        {"type": "change", "table": "posts", "event": "INSERT", "id": "p1"},
        "not json",
        {"type": "change", "table": "anonymous_submissions", "event": "UPDATE", "id": "s1"},
    )

    def handler(request):
        assert request.url.path == "/api/realtime/stream"
        assert request.headers["X-Viewer-Id"] == "viewer-1"
        return httpx.Response(200, content=body, headers={"Content-Type": "text/event-stream"})

    backend = BackendClient(
        base_url="http://board.test", viewer_id="viewer-1", transport=httpx.MockTransport(handler)
    )
    events = [event async for event in backend.changes()]
    await backend.close()

    assert [(event.table, event.event, event.id) for event in events] == [
        ("posts", "INSERT", "p1"),
        ("anonymous_submissions", "UPDATE", "s1"),
    ]


async def test_changes_raises_backend_error_on_http_failure():
    backend = BackendClient(
        base_url="http://board.test", transport=httpx.MockTransport(lambda request: httpx.Response(503))
    )

    with pytest.raises(BackendError) as exc_info:
        async for _ in backend.changes():
            pass
    await backend.close()

    assert exc_info.value.status_code == 503


def test_websocket_ping_pong(client, notifier):
    with client.websocket_connect("/api/realtime/ws") as websocket:
        assert websocket.receive_json()["type"] == "connected"
        assert len(notifier.connections) == 1

        websocket.send_text(json.dumps({"type": "ping", "timestamp": 42}))
        assert websocket.receive_json() == {"type": "pong", "timestamp": 42}


def test_client_and_server_share_change_event_model():
    assert ClientChangeEvent is ChangeEvent


async def test_changes_rejects_malformed_change_event():
    body = sse_body(
        [1, 2, 3],
        {"type": "change", "table": "posts", "event": "RENAMED", "id": "p1"},
    )
    backend = BackendClient(
        base_url="http://board.test", transport=httpx.MockTransport(lambda request: httpx.Response(200, content=body))
    )

    with pytest.raises(BackendError):
        async for _ in backend.changes():
            pass
    await backend.close()
