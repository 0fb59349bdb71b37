"""WebSocket connection manager for broadcasting dispatch state."""

import asyncio
import logging
from dataclasses import dataclass, field
from datetime import UTC, datetime

from fastapi import WebSocket

from cad_dispatch.schemas.state import StateResponse
from cad_dispatch.websocket.schemas import StateUpdateMessage

logger = logging.getLogger(__name__)


@dataclass
class StateSubscriber:
    """A client watching the dispatch board."""

    websocket: WebSocket
    connected_at: datetime = field(default_factory=lambda: datetime.now(UTC))
    messages_sent: int = 0


class ConnectionManager:
    """
    Manages state-watching WebSocket connections and broadcasts snapshots.

    Designed for single-instance deployment, matching the in-memory engine.
    """

    def __init__(self):
        self._connections: dict[WebSocket, StateSubscriber] = {}
        self._lock = asyncio.Lock()

    @property
    def connection_count(self) -> int:
        """Number of active connections."""
        return len(self._connections)

    async def connect(self, websocket: WebSocket) -> None:
        """Accept a new WebSocket connection."""
        await websocket.accept()
        async with self._lock:
            self._connections[websocket] = StateSubscriber(websocket=websocket)
        logger.info(f"WebSocket connected. Total connections: {self.connection_count}")

    async def disconnect(self, websocket: WebSocket) -> None:
        """Remove a disconnected WebSocket."""
        async with self._lock:
            if websocket in self._connections:
                del self._connections[websocket]
        logger.info(f"WebSocket disconnected. Total connections: {self.connection_count}")

    async def send_state(self, websocket: WebSocket, state: StateResponse) -> None:
        """Send one snapshot to a single client."""
        message = StateUpdateMessage(data=state, timestamp=datetime.now(UTC))
        await websocket.send_json(message.model_dump(mode="json", by_alias=True))

    async def broadcast(self, state: StateResponse) -> None:
        """Send a snapshot to every connected client."""
        async with self._lock:
            if not self._connections:
                return

            message = StateUpdateMessage(data=state, timestamp=datetime.now(UTC))
            tasks = [
                self._send_safe(subscriber, message)
                for subscriber in list(self._connections.values())
            ]

            await asyncio.gather(*tasks, return_exceptions=True)
            logger.debug(f"Broadcast state to {len(tasks)} subscribers")

    async def _send_safe(
        self, subscriber: StateSubscriber, message: StateUpdateMessage
    ) -> None:
        """Send message to websocket, handling errors gracefully."""
        try:
            await subscriber.websocket.send_json(message.model_dump(mode="json", by_alias=True))
            subscriber.messages_sent += 1
        except Exception as e:
            logger.warning(f"Failed to send to websocket: {e}")
            # Schedule disconnect (don't do it here to avoid deadlock)
            asyncio.create_task(self.disconnect(subscriber.websocket))
