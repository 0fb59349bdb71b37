"""In-memory dispatch entities."""

from cad_dispatch.models.incident import Incident
from cad_dispatch.models.officer import Officer

__all__ = [
    "Incident",
    "Officer",
]
