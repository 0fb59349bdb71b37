"""WebSocket module for streaming dispatch events and state."""

from cad_dispatch.websocket.manager import ConnectionManager
from cad_dispatch.websocket.router import router as websocket_router

__all__ = ["ConnectionManager", "websocket_router"]
