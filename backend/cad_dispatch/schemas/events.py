"""Pydantic schemas for inbound dispatch events."""

from typing import Annotated, Any, Literal, Union

from pydantic import BaseModel, BeforeValidator, ConfigDict, Field, TypeAdapter

from cad_dispatch.geometry import Location


def _integral_number(value: Any) -> Any:
    """JSON numbers may arrive as floats; only whole ones count as ints."""
    if isinstance(value, bool):
        raise ValueError("boolean is not a number")
    if isinstance(value, float) and value.is_integer():
        return int(value)
    return value


# Ids and coordinates: strings, booleans and fractions are rejected
WireInt = Annotated[int, Field(strict=True), BeforeValidator(_integral_number)]


class LocationIn(BaseModel):
    """Grid coordinates as sent on the wire."""

    x: WireInt
    y: WireInt

    def to_location(self) -> Location:
        return Location(x=self.x, y=self.y)


class _Event(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="ignore")


class IncidentOccurred(_Event):
    """A new incident needs an officer."""

    type: Literal["IncidentOccurred"] = "IncidentOccurred"
    incident_id: WireInt = Field(alias="incidentId")
    code_name: str = Field(alias="codeName")
    loc: LocationIn


class IncidentResolved(_Event):
    """An incident is closed and leaves the board."""

    type: Literal["IncidentResolved"] = "IncidentResolved"
    incident_id: WireInt = Field(alias="incidentId")


class OfficerGoesOnline(_Event):
    """An officer starts a shift or comes back into service."""

    type: Literal["OfficerGoesOnline"] = "OfficerGoesOnline"
    officer_id: WireInt = Field(alias="officerId")
    badge_name: str = Field(alias="badgeName")


class OfficerLocationUpdated(_Event):
    """Position report from an officer."""

    type: Literal["OfficerLocationUpdated"] = "OfficerLocationUpdated"
    officer_id: WireInt = Field(alias="officerId")
    loc: LocationIn


class OfficerGoesOffline(_Event):
    """An officer leaves service."""

    type: Literal["OfficerGoesOffline"] = "OfficerGoesOffline"
    officer_id: WireInt = Field(alias="officerId")


DispatchEvent = Annotated[
    Union[
        IncidentOccurred,
        IncidentResolved,
        OfficerGoesOnline,
        OfficerLocationUpdated,
        OfficerGoesOffline,
    ],
    Field(discriminator="type"),
]

event_adapter: TypeAdapter[DispatchEvent] = TypeAdapter(DispatchEvent)

EVENT_TYPES = frozenset(
    {
        "IncidentOccurred",
        "IncidentResolved",
        "OfficerGoesOnline",
        "OfficerLocationUpdated",
        "OfficerGoesOffline",
    }
)
