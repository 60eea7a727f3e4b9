"""
Realtime change notifications.

Browsers connect to ``/ws`` and receive ``{"event": ..., "data": ...}``
messages whenever an admin action changes a document.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Any

from fastapi import WebSocket

logger = logging.getLogger(__name__)


class EventBroadcaster:
    """Keeps the connected WebSocket clients and fans events out to them."""

    def __init__(self) -> None:
        self._clients: set[WebSocket] = set()
        self._lock = asyncio.Lock()

    @property
    def client_count(self) -> int:
        return len(self._clients)

    async def connect(self, websocket: WebSocket) -> None:
        await websocket.accept()
        async with self._lock:
            self._clients.add(websocket)
        logger.info("Client connected (%d online)", len(self._clients))

    async def disconnect(self, websocket: WebSocket) -> None:
        async with self._lock:
            self._clients.discard(websocket)
        logger.info("Client disconnected (%d online)", len(self._clients))

    async def publish(self, event: str, data: Any) -> int:
        """Send one event to every client; returns how many received it."""
        message = {"event": event, "data": data}
        async with self._lock:
            clients = list(self._clients)
        delivered = 0
        for client in clients:
            try:
                await client.send_json(message)
                delivered += 1
            except Exception as exc:
                logger.warning("Dropping client after failed send of %s: %s", event, exc)
                await self.disconnect(client)
        logger.debug("Event %s delivered to %d client(s)", event, delivered)
        return delivered
