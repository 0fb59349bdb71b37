"""WebSocket message schemas."""

from datetime import datetime
from typing import Literal

from pydantic import BaseModel

from cad_dispatch.schemas.state import StateResponse


class StateUpdateMessage(BaseModel):
    """Server message with the dispatch board after an applied event."""

    type: Literal["state_update"] = "state_update"
    data: StateResponse
    timestamp: datetime


class AckMessage(BaseModel):
    """Event accepted onto the receiver queue."""

    type: Literal["ack"] = "ack"
    pending: int


class PongMessage(BaseModel):
    """Pong response for keep-alive."""

    type: Literal["pong"] = "pong"


class ErrorMessage(BaseModel):
    """Error message from server."""

    type: Literal["error"] = "error"
    message: str
