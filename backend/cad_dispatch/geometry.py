"""Planar geometry for officer and incident positions."""

import math
from dataclasses import dataclass


@dataclass(frozen=True)
class Location:
    """Integer grid position."""

    x: int = 0
    y: int = 0


def distance(a: Location, b: Location) -> float:
    """Euclidean distance between two locations."""
    dx = a.x - b.x
    dy = a.y - b.y
    return math.sqrt(float(dx * dx + dy * dy))
