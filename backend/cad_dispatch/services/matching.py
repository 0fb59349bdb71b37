"""Greedy officer/incident matching."""

import logging

from cad_dispatch.errors import AssignmentConflictError
from cad_dispatch.geometry import Location, distance
from cad_dispatch.models import Incident, Officer
from cad_dispatch.services.store import EntityStore

logger = logging.getLogger(__name__)


def find_first_available_incident(store: EntityStore) -> Incident | None:
    """
    First unassigned incident in store order.

    Used when an officer becomes available. Not distance based: backlog is
    picked up in arrival order.
    """
    for incident in store.incidents():
        if incident.is_available:
            return incident
    return None


def nearest_available_officer(store: EntityStore, location: Location) -> Officer | None:
    """
    Unassigned officer closest to location.

    Ties go to the officer seen first in store order.
    """
    best: Officer | None = None
    best_distance = 0.0
    for officer in store.officers():
        if not officer.is_available:
            continue
        d = distance(location, officer.location)
        if best is None or d < best_distance:
            best = officer
            best_distance = d
    return best


def assign(store: EntityStore, incident: Incident, officer: Officer) -> None:
    """
    Link an incident and an officer.

    Raises AssignmentConflictError if either side is already linked to a
    different counterpart.
    """
    if incident.officer_id == officer.id and officer.incident_id == incident.id:
        return
    if not incident.is_available:
        raise AssignmentConflictError(
            f"Incident {incident.id} already assigned to officer {incident.officer_id}"
        )
    if not officer.is_available:
        raise AssignmentConflictError(
            f"Officer {officer.id} already assigned to incident {officer.incident_id}"
        )

    store.link(incident, officer)
    logger.info(f"Assigned officer {officer.id} to incident {incident.id}")


def unassign(
    store: EntityStore,
    incident: Incident | None = None,
    officer: Officer | None = None,
) -> None:
    """Clear an assignment from either side. Idempotent."""
    if incident is not None and incident.officer_id is not None:
        logger.info(f"Unassigned officer {incident.officer_id} from incident {incident.id}")
    elif officer is not None and officer.incident_id is not None:
        logger.info(f"Unassigned officer {officer.id} from incident {officer.incident_id}")
    store.unlink(incident=incident, officer=officer)
