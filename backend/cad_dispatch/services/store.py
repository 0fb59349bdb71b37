"""In-memory store for officers, incidents and the assignment relation."""

import logging
from collections.abc import Iterator

from cad_dispatch.errors import DuplicateEntityError, UnknownEntityError
from cad_dispatch.geometry import Location
from cad_dispatch.models import Incident, Officer

logger = logging.getLogger(__name__)


class EntityStore:
    """
    Owns every live Officer and Incident.

    Entities are kept in insertion order; iteration order only matters for
    tie-breaking during matching. The officer/incident relation is stored as
    ids on both sides and is only changed through link() and unlink().

    Not safe for concurrent use; DispatchEngine serializes access.
    """

    def __init__(self):
        self._officers: dict[int, Officer] = {}
        self._incidents: dict[int, Incident] = {}

    def officers(self) -> Iterator[Officer]:
        """Iterate live officers in store order."""
        return iter(list(self._officers.values()))

    def incidents(self) -> Iterator[Incident]:
        """Iterate live incidents in store order."""
        return iter(list(self._incidents.values()))

    @property
    def officer_count(self) -> int:
        return len(self._officers)

    @property
    def incident_count(self) -> int:
        return len(self._incidents)

    def find_officer(self, officer_id: int) -> Officer | None:
        return self._officers.get(officer_id)

    def find_incident(self, incident_id: int) -> Incident | None:
        return self._incidents.get(incident_id)

    def upsert_officer(self, officer_id: int, badge_name: str) -> Officer:
        """
        Return the officer with this id, registering a new one if unknown.

        An existing officer is returned untouched; its badge name and
        location are not overwritten.
        """
        officer = self._officers.get(officer_id)
        if officer is None:
            officer = Officer(id=officer_id, badge_name=badge_name)
            self._officers[officer_id] = officer
            logger.info(f"Officer {officer_id} registered ({badge_name})")
        return officer

    def add_incident(self, incident: Incident) -> Incident:
        """Register a new incident. Raises DuplicateEntityError on id reuse."""
        if incident.id in self._incidents:
            raise DuplicateEntityError("incident", incident.id)
        self._incidents[incident.id] = incident
        logger.info(f"Incident {incident.id} registered ({incident.code_name})")
        return incident

    def update_officer_location(self, officer_id: int, location: Location) -> Officer:
        """Move a live officer. Raises UnknownEntityError if not found."""
        officer = self._officers.get(officer_id)
        if officer is None:
            raise UnknownEntityError("officer", officer_id)
        officer.location = location
        return officer

    def remove_officer(self, officer_id: int) -> Officer | None:
        """Unlink and delete an officer. Unknown ids are ignored."""
        officer = self._officers.get(officer_id)
        if officer is None:
            return None
        self.unlink(officer=officer)
        del self._officers[officer_id]
        logger.info(f"Officer {officer_id} removed")
        return officer

    def remove_incident(self, incident_id: int) -> Incident | None:
        """Unlink and delete an incident. Unknown ids are ignored."""
        incident = self._incidents.get(incident_id)
        if incident is None:
            return None
        self.unlink(incident=incident)
        del self._incidents[incident_id]
        logger.info(f"Incident {incident_id} removed")
        return incident

    def link(self, incident: Incident, officer: Officer) -> None:
        """Set both sides of the relation."""
        incident.officer_id = officer.id
        officer.incident_id = incident.id

    def unlink(
        self,
        incident: Incident | None = None,
        officer: Officer | None = None,
    ) -> None:
        """
        Clear the relation starting from either side.

        The counterpart is resolved by id and cleared too. Calling this on an
        unlinked entity does nothing.
        """
        if incident is not None and incident.officer_id is not None:
            counterpart = self._officers.get(incident.officer_id)
            if counterpart is not None and counterpart.incident_id == incident.id:
                counterpart.incident_id = None
            incident.officer_id = None

        if officer is not None and officer.incident_id is not None:
            counterpart = self._incidents.get(officer.incident_id)
            if counterpart is not None and counterpart.officer_id == officer.id:
                counterpart.officer_id = None
            officer.incident_id = None
