from __future__ import annotations

import asyncio

from clubapi.core.events import EventBroadcaster


class _FakeSocket:
    def __init__(self, *, broken: bool = False) -> None:
        self.accepted = False
        self.sent: list[dict] = []
        self.broken = broken

    async def accept(self):
        self.accepted = True

    async def send_json(self, message):
        if self.broken:
            raise RuntimeError("socket closed")
        self.sent.append(message)


def test_publish_reaches_every_connected_client():
    async def scenario():
        events = EventBroadcaster()
        first, second = _FakeSocket(), _FakeSocket()
        await events.connect(first)
        await events.connect(second)
        delivered = await events.publish("member-added", {"id": "1"})
        return events, first, second, delivered

    events, first, second, delivered = asyncio.run(scenario())
    assert delivered == 2
    assert first.accepted and second.accepted
    assert first.sent == [{"event": "member-added", "data": {"id": "1"}}]
    assert second.sent == first.sent


def test_broken_clients_are_dropped():
    async def scenario():
        events = EventBroadcaster()
        good, bad = _FakeSocket(), _FakeSocket(broken=True)
        await events.connect(good)
        await events.connect(bad)
        delivered = await events.publish("news-deleted", {"id": "5"})
        return events, delivered

    events, delivered = asyncio.run(scenario())
    assert delivered == 1
    assert events.client_count == 1


def test_publish_without_clients_is_a_noop():
    assert asyncio.run(EventBroadcaster().publish("club-updated", {})) == 0
