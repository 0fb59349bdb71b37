"""Incident model for open calls awaiting or under response."""

from dataclasses import dataclass

from cad_dispatch.geometry import Location


@dataclass
class Incident:
    """
    Open incident known to the dispatch engine.

    Location is fixed at creation. officer_id is both the relation to the
    assigned officer and the value published as officerID.
    """

    id: int
    code_name: str
    location: Location

    # Relation
    officer_id: int | None = None

    @property
    def is_available(self) -> bool:
        return self.officer_id is None

    def __repr__(self) -> str:
        return f"<Incident {self.id}: {self.code_name}>"
