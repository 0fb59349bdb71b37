"""FastAPI dependencies resolving per-app dispatch components."""

from fastapi import HTTPException, Request

from cad_dispatch.services.engine import DispatchEngine
from cad_dispatch.services.receiver import EventReceiver


def get_engine(request: Request) -> DispatchEngine:
    """Dependency to get the app's dispatch engine."""
    return request.app.state.engine


def get_receiver(request: Request) -> EventReceiver:
    """Dependency to get the app's event receiver."""
    receiver = getattr(request.app.state, "receiver", None)
    if receiver is None:
        raise HTTPException(status_code=503, detail="Event receiver not running")
    return receiver
