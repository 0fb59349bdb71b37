"""API route for submitting dispatch events over HTTP."""

import logging
from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, Request
from pydantic import BaseModel

from cad_dispatch.dependencies import get_receiver
from cad_dispatch.ratelimit import EVENTS_RATE_LIMIT, limiter
from cad_dispatch.services.receiver import EventReceiver, ReceiverFullError

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/events", tags=["events"])


class EventAccepted(BaseModel):
    """Acknowledgement for a queued event."""

    queued: bool
    pending: int


@router.post("", response_model=EventAccepted, status_code=202)
@limiter.limit(EVENTS_RATE_LIMIT)
async def submit_event(
    request: Request,
    receiver: Annotated[EventReceiver, Depends(get_receiver)],
) -> EventAccepted:
    """
    Queue one raw event envelope for processing.

    The body is passed through untouched; decoding and validation happen in
    the engine, where malformed events are logged and dropped.
    """
    body = await request.body()
    try:
        pending = receiver.submit_nowait(body)
    except ReceiverFullError as e:
        logger.warning(f"Rejecting event: {e}")
        raise HTTPException(status_code=503, detail=str(e)) from e

    return EventAccepted(queued=True, pending=pending)
