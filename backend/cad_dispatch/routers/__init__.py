"""API routers."""

from cad_dispatch.routers.events import router as events_router
from cad_dispatch.routers.health import router as health_router
from cad_dispatch.routers.state import router as state_router

__all__ = ["events_router", "health_router", "state_router"]
