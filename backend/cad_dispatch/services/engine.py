"""Dispatch engine: the single owner of live dispatch state."""

import logging
import threading
from typing import Any

from cad_dispatch.schemas.events import DispatchEvent
from cad_dispatch.schemas.state import OfficerOut, StateResponse, incident_out
from cad_dispatch.services.dispatcher import DispatchOutcome, EventDispatcher
from cad_dispatch.services.store import EntityStore

logger = logging.getLogger(__name__)


class DispatchEngine:
    """
    Owns one EntityStore and serializes every access to it.

    All mutation goes through handle()/apply() and all reads through
    snapshot(); both take the same lock, so a reader never observes a
    partially applied event. Engines share nothing, so several can live in
    one process.
    """

    def __init__(self, store: EntityStore | None = None):
        self.store = store or EntityStore()
        self.dispatcher = EventDispatcher(self.store)
        self._lock = threading.Lock()

    def handle(self, payload: bytes | str | dict[str, Any]) -> DispatchOutcome:
        """Decode and apply one raw event payload."""
        with self._lock:
            return self.dispatcher.dispatch(payload)

    def apply(self, event: DispatchEvent) -> DispatchOutcome:
        """Apply one decoded event."""
        with self._lock:
            return self.dispatcher.apply(event)

    def snapshot(self) -> StateResponse:
        """Point-in-time copy of all incidents and officers."""
        with self._lock:
            return StateResponse(
                incidents=[incident_out(i) for i in self.store.incidents()],
                officers=[OfficerOut.from_officer(o) for o in self.store.officers()],
            )

    def stats(self) -> dict[str, int]:
        """Counts used by the health endpoint."""
        with self._lock:
            assigned = sum(1 for i in self.store.incidents() if not i.is_available)
            return {
                "officers": self.store.officer_count,
                "incidents": self.store.incident_count,
                "assigned": assigned,
            }
