"""Dispatch state, matching and event intake."""

from cad_dispatch.services.dispatcher import DispatchOutcome, EventDispatcher
from cad_dispatch.services.engine import DispatchEngine
from cad_dispatch.services.receiver import EventReceiver
from cad_dispatch.services.store import EntityStore

__all__ = [
    "DispatchEngine",
    "DispatchOutcome",
    "EntityStore",
    "EventDispatcher",
    "EventReceiver",
]
