"""Pytest fixtures for CAD dispatch tests."""

from collections.abc import AsyncGenerator
from typing import Any

import pytest
import pytest_asyncio
from fastapi import FastAPI
from httpx import ASGITransport, AsyncClient

from cad_dispatch.config import Settings
from cad_dispatch.geometry import Location
from cad_dispatch.main import create_app
from cad_dispatch.models import Incident
from cad_dispatch.services.dispatcher import EventDispatcher
from cad_dispatch.services.engine import DispatchEngine
from cad_dispatch.services.receiver import EventReceiver
from cad_dispatch.services.store import EntityStore


@pytest.fixture
def test_settings() -> Settings:
    """Test settings with safe defaults."""
    return Settings(
        event_queue_size=10,
        log_state_after_event=True,
        debug=True,
    )


@pytest.fixture
def store() -> EntityStore:
    """Empty entity store."""
    return EntityStore()


@pytest.fixture
def dispatcher(store: EntityStore) -> EventDispatcher:
    """Dispatcher bound to the store fixture."""
    return EventDispatcher(store)


@pytest.fixture
def engine() -> DispatchEngine:
    """Fresh engine with its own store."""
    return DispatchEngine()


@pytest.fixture
def app(engine: DispatchEngine) -> FastAPI:
    """Application wired to the engine fixture."""
    return create_app(engine)


@pytest_asyncio.fixture
async def receiver(app: FastAPI) -> AsyncGenerator[EventReceiver, None]:
    """Receiver attached to the app but not consuming, so queue state is observable."""
    receiver = EventReceiver(app.state.engine, max_size=3, log_state=False)
    app.state.receiver = receiver
    yield receiver
    await receiver.stop(drain=False)


@pytest_asyncio.fixture
async def client(app: FastAPI) -> AsyncGenerator[AsyncClient, None]:
    """Create test HTTP client for the app."""
    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test",
    ) as client:
        yield client


@pytest.fixture
def make_officer(store: EntityStore):
    """Register an officer at a location in the store fixture."""

    def _make(officer_id: int, x: int = 0, y: int = 0):
        store.upsert_officer(officer_id, f"B{officer_id}")
        return store.update_officer_location(officer_id, Location(x, y))

    return _make


@pytest.fixture
def make_incident(store: EntityStore):
    """Register an unassigned incident in the store fixture."""

    def _make(incident_id: int, x: int = 0, y: int = 0):
        incident = Incident(id=incident_id, code_name="code", location=Location(x, y))
        return store.add_incident(incident)

    return _make


@pytest.fixture
def incident_occurred() -> dict[str, Any]:
    """IncidentOccurred envelope from the example scenario."""
    return {
        "type": "IncidentOccurred",
        "incidentId": 10,
        "codeName": "code",
        "loc": {"x": 12, "y": 123124},
    }


@pytest.fixture
def officer_online() -> dict[str, Any]:
    """OfficerGoesOnline envelope from the example scenario."""
    return {"type": "OfficerGoesOnline", "officerId": 5, "badgeName": "B5"}
