"""Health and liveness endpoints."""

from datetime import UTC, datetime
from typing import Annotated

from fastapi import APIRouter, Depends, Request
from fastapi.responses import PlainTextResponse
from pydantic import BaseModel

from cad_dispatch.dependencies import get_engine
from cad_dispatch.services.engine import DispatchEngine

router = APIRouter(tags=["health"])


class BoardStatus(BaseModel):
    """Counts of live entities."""

    officers: int
    incidents: int
    assigned: int


class ReceiverStatus(BaseModel):
    """State of the event receiver."""

    running: bool
    pending: int
    processed: int


class HealthResponse(BaseModel):
    """Health check response."""

    status: str
    timestamp: datetime
    board: BoardStatus
    receiver: ReceiverStatus


@router.get("/health", response_model=HealthResponse)
async def health_check(
    request: Request,
    engine: Annotated[DispatchEngine, Depends(get_engine)],
) -> HealthResponse:
    """
    Health check endpoint with board and receiver status.

    Reports "degraded" when the receiver is not consuming events.
    """
    receiver = getattr(request.app.state, "receiver", None)
    receiver_status = ReceiverStatus(
        running=receiver.running if receiver else False,
        pending=receiver.pending if receiver else 0,
        processed=receiver.processed if receiver else 0,
    )

    return HealthResponse(
        status="healthy" if receiver_status.running else "degraded",
        timestamp=datetime.now(UTC),
        board=BoardStatus(**engine.stats()),
        receiver=receiver_status,
    )


@router.get("/ping", response_class=PlainTextResponse)
async def ping() -> str:
    """Ping test."""
    return "pong"


@router.get("/ready")
async def readiness_check() -> dict:
    """Simple readiness probe for container orchestration."""
    return {"status": "ready"}


@router.get("/live")
async def liveness_check() -> dict:
    """Simple liveness probe for container orchestration."""
    return {"status": "alive"}
