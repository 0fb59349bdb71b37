"""FastAPI application for the CAD dispatch engine."""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from slowapi import _rate_limit_exceeded_handler
from slowapi.errors import RateLimitExceeded

from cad_dispatch.config import get_settings
from cad_dispatch.ratelimit import limiter
from cad_dispatch.routers import events_router, health_router, state_router
from cad_dispatch.services.engine import DispatchEngine
from cad_dispatch.services.receiver import EventReceiver
from cad_dispatch.websocket import ConnectionManager, websocket_router

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)

settings = get_settings()


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan management."""
    logger.info("Starting CAD dispatch engine...")

    receiver = EventReceiver(
        app.state.engine,
        max_size=settings.event_queue_size,
        on_state_change=app.state.ws_manager.broadcast,
    )
    receiver.start()
    app.state.receiver = receiver

    yield

    # Shutdown
    await receiver.stop(drain=settings.drain_on_shutdown)
    app.state.receiver = None
    logger.info("CAD dispatch engine shut down")


async def global_exception_handler(request: Request, exc: Exception):
    """Handle unhandled exceptions."""
    logger.error(f"Unhandled exception: {exc}", exc_info=True)
    return JSONResponse(
        status_code=500,
        content={"detail": "Internal server error"},
    )


async def root():
    """Root endpoint with API info."""
    return {
        "name": "CAD Dispatch API",
        "version": "0.1.0",
        "docs": "/docs",
        "health": "/health",
        "state": f"{settings.api_v1_prefix}/state",
    }


def create_app(engine: DispatchEngine | None = None) -> FastAPI:
    """
    Build an app around its own DispatchEngine.

    The event receiver is created and started by the lifespan handler.
    """
    app = FastAPI(
        title="CAD Dispatch API",
        description="Live officer/incident dispatch state driven by an event stream",
        version="0.1.0",
        lifespan=lifespan,
    )
    app.state.engine = engine or DispatchEngine()
    app.state.ws_manager = ConnectionManager()
    app.state.receiver = None

    # Add rate limiter
    app.state.limiter = limiter
    app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)

    # Add CORS middleware
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.add_exception_handler(Exception, global_exception_handler)

    # Include routers
    app.include_router(health_router)
    app.include_router(state_router, prefix=settings.api_v1_prefix)
    app.include_router(events_router, prefix=settings.api_v1_prefix)
    app.include_router(websocket_router)  # /ws/events and /ws/state
    app.add_api_route("/", root, methods=["GET"])

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "cad_dispatch.main:app",
        host=settings.host,
        port=settings.port,
        reload=settings.debug,
    )
