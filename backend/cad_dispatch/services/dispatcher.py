"""Decode dispatch events and apply them to the entity store."""

import json
import logging
from dataclasses import dataclass
from typing import Any, Callable

from pydantic import ValidationError

from cad_dispatch.errors import DispatchError, EventDecodeError, UnknownEventTypeError
from cad_dispatch.models import Incident
from cad_dispatch.schemas.events import (
    EVENT_TYPES,
    DispatchEvent,
    IncidentOccurred,
    IncidentResolved,
    OfficerGoesOffline,
    OfficerGoesOnline,
    OfficerLocationUpdated,
    event_adapter,
)
from cad_dispatch.services import matching
from cad_dispatch.services.store import EntityStore

logger = logging.getLogger(__name__)

APPLIED = "applied"
DROPPED = "dropped"
REJECTED = "rejected"


@dataclass(frozen=True)
class DispatchOutcome:
    """
    Result of handling one payload.

    status is APPLIED when the event changed (or deliberately left) state,
    DROPPED when the payload could not be decoded or had an unknown type,
    and REJECTED when a well-formed event referred to state it cannot apply
    to (e.g. a location update for an officer who is not online).
    """

    status: str
    event_type: str | None = None
    detail: str | None = None

    @property
    def applied(self) -> bool:
        return self.status == APPLIED


def decode_event(payload: bytes | str | dict[str, Any]) -> DispatchEvent:
    """
    Decode a raw payload into a typed event.

    Raises UnknownEventTypeError for a well-formed envelope whose type is
    not recognised, and EventDecodeError for anything else that is not a
    valid envelope.
    """
    if isinstance(payload, (bytes, bytearray, str)):
        try:
            data = json.loads(payload)
        except (json.JSONDecodeError, UnicodeDecodeError) as e:
            raise EventDecodeError(f"Invalid JSON: {e}") from e
    else:
        data = payload

    if not isinstance(data, dict):
        raise EventDecodeError(f"Event must be a JSON object, got {type(data).__name__}")

    event_type = data.get("type")
    if not isinstance(event_type, str):
        raise EventDecodeError("Event has no string 'type' field")
    if event_type not in EVENT_TYPES:
        raise UnknownEventTypeError(event_type)

    try:
        return event_adapter.validate_python(data)
    except ValidationError as e:
        raise EventDecodeError(f"Invalid {event_type} event: {e}") from e


class EventDispatcher:
    """
    Routes events to handlers that mutate an EntityStore.

    dispatch() never raises for bad input: malformed payloads and unknown
    event types are logged and dropped so the consuming loop keeps going.
    """

    def __init__(self, store: EntityStore):
        self.store = store
        self._handlers: dict[type, Callable[[Any], None]] = {
            IncidentOccurred: self._on_incident_occurred,
            IncidentResolved: self._on_incident_resolved,
            OfficerGoesOnline: self._on_officer_goes_online,
            OfficerLocationUpdated: self._on_officer_location_updated,
            OfficerGoesOffline: self._on_officer_goes_offline,
        }

    def dispatch(self, payload: bytes | str | dict[str, Any]) -> DispatchOutcome:
        """Decode a payload and apply it."""
        try:
            event = decode_event(payload)
        except UnknownEventTypeError as e:
            logger.warning(f"Dropping event: {e}")
            return DispatchOutcome(status=DROPPED, event_type=e.event_type, detail=str(e))
        except EventDecodeError as e:
            logger.warning(f"Dropping malformed event: {e}")
            return DispatchOutcome(status=DROPPED, detail=str(e))

        return self.apply(event)

    def apply(self, event: DispatchEvent) -> DispatchOutcome:
        """Apply an already decoded event."""
        handler = self._handlers[type(event)]
        try:
            handler(event)
        except DispatchError as e:
            logger.warning(f"Rejected {event.type}: {e}")
            return DispatchOutcome(status=REJECTED, event_type=event.type, detail=str(e))
        return DispatchOutcome(status=APPLIED, event_type=event.type)

    def _on_incident_occurred(self, event: IncidentOccurred) -> None:
        incident = Incident(
            id=event.incident_id,
            code_name=event.code_name,
            location=event.loc.to_location(),
        )
        self.store.add_incident(incident)

        officer = matching.nearest_available_officer(self.store, incident.location)
        if officer is not None:
            matching.assign(self.store, incident, officer)
        else:
            logger.info(f"No officer available for incident {incident.id}")

    def _on_incident_resolved(self, event: IncidentResolved) -> None:
        incident = self.store.find_incident(event.incident_id)
        if incident is None:
            logger.info(f"Resolved unknown incident {event.incident_id}; ignoring")
            return
        matching.unassign(self.store, incident=incident)
        self.store.remove_incident(incident.id)

    def _on_officer_goes_online(self, event: OfficerGoesOnline) -> None:
        officer = self.store.upsert_officer(event.officer_id, event.badge_name)
        if not officer.is_available:
            return

        incident = matching.find_first_available_incident(self.store)
        if incident is not None:
            matching.assign(self.store, incident, officer)

    def _on_officer_location_updated(self, event: OfficerLocationUpdated) -> None:
        self.store.update_officer_location(event.officer_id, event.loc.to_location())

    def _on_officer_goes_offline(self, event: OfficerGoesOffline) -> None:
        officer = self.store.find_officer(event.officer_id)
        if officer is None:
            logger.info(f"Unknown officer {event.officer_id} went offline; ignoring")
            return
        matching.unassign(self.store, officer=officer)
        self.store.remove_officer(officer.id)
