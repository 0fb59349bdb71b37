"""Pydantic schemas for the published dispatch state."""

from pydantic import BaseModel, ConfigDict, Field

from cad_dispatch.models import Incident, Officer


class LocationOut(BaseModel):
    """Grid coordinates."""

    x: int
    y: int


class _IncidentBase(BaseModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="forbid")

    id: int
    code_name: str = Field(alias="codeName")
    loc: LocationOut


class OpenIncidentOut(_IncidentBase):
    """Incident still waiting for an officer. Has no officerID key."""

    @property
    def officer_id(self) -> None:
        return None


class AssignedIncidentOut(_IncidentBase):
    """Incident view. Carries the officer id only, never the officer."""

    officer_id: int = Field(alias="officerID")


IncidentOut = AssignedIncidentOut | OpenIncidentOut


def incident_out(incident: Incident) -> IncidentOut:
    """Published view of an incident, with officerID only once assigned."""
    loc = LocationOut(x=incident.location.x, y=incident.location.y)
    if incident.officer_id is None:
        return OpenIncidentOut(id=incident.id, code_name=incident.code_name, loc=loc)
    return AssignedIncidentOut(
        id=incident.id,
        code_name=incident.code_name,
        loc=loc,
        officer_id=incident.officer_id,
    )


class OfficerOut(BaseModel):
    """Officer view. The assigned incident is visible from the incident side."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    id: int
    badge_name: str = Field(alias="badgeName")
    loc: LocationOut

    @classmethod
    def from_officer(cls, officer: Officer) -> "OfficerOut":
        return cls(
            id=officer.id,
            badge_name=officer.badge_name,
            loc=LocationOut(x=officer.location.x, y=officer.location.y),
        )


class StateResponse(BaseModel):
    """Point-in-time contents of the dispatch board."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    incidents: list[IncidentOut] = Field(default_factory=list, alias="Incidents")
    officers: list[OfficerOut] = Field(default_factory=list, alias="Officers")


class ErrorResponse(BaseModel):
    """Reserved error body."""

    code: str
    message: str


class ApiResponse(BaseModel):
    """Envelope returned by the state endpoint."""

    data: StateResponse | None = None
    error: ErrorResponse | None = None
