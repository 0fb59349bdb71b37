"""Pydantic schemas for inbound events and published state."""

from cad_dispatch.schemas.events import DispatchEvent, event_adapter
from cad_dispatch.schemas.state import (
    ApiResponse,
    AssignedIncidentOut,
    IncidentOut,
    OfficerOut,
    OpenIncidentOut,
    StateResponse,
)

__all__ = [
    "ApiResponse",
    "AssignedIncidentOut",
    "DispatchEvent",
    "IncidentOut",
    "OfficerOut",
    "OpenIncidentOut",
    "StateResponse",
    "event_adapter",
]
