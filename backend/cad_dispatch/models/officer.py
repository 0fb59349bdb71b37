"""Officer model for field units tracked by the engine."""

from dataclasses import dataclass, field

from cad_dispatch.geometry import Location


@dataclass
class Officer:
    """
    Field officer known to the dispatch engine.

    Lives from OfficerGoesOnline until OfficerGoesOffline. The assigned
    incident is held by id and resolved through the store.
    """

    id: int
    badge_name: str
    location: Location = field(default_factory=Location)

    # Relation
    incident_id: int | None = None

    @property
    def is_available(self) -> bool:
        return self.incident_id is None

    def __repr__(self) -> str:
        return f"<Officer {self.id}: {self.badge_name}>"
