"""Domain models for campus locations and the paths between them."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum

from ..errors import InvalidInputError
from ..services import geospatial


class LocationCategory(str, Enum):
    """Closed set of campus location kinds."""

    ACADEMIC = "academic"
    ADMINISTRATIVE = "administrative"
    RESIDENTIAL = "residential"
    RECREATIONAL = "recreational"
    DINING = "dining"
    LIBRARY = "library"
    MEDICAL = "medical"
    TRANSPORT = "transport"
    BANK = "bank"
    LANDMARK = "landmark"
    PARKING = "parking"
    ENTRANCE = "entrance"
    OTHER = "other"

    @property
    def display_name(self) -> str:
        return _DISPLAY_NAMES[self]


_DISPLAY_NAMES = {
    LocationCategory.ACADEMIC: "Academic Building",
    LocationCategory.ADMINISTRATIVE: "Administrative Building",
    LocationCategory.RESIDENTIAL: "Residential Hall",
    LocationCategory.RECREATIONAL: "Recreational Facility",
    LocationCategory.DINING: "Dining Facility",
    LocationCategory.LIBRARY: "Library",
    LocationCategory.MEDICAL: "Medical Facility",
    LocationCategory.TRANSPORT: "Transport Hub",
    LocationCategory.BANK: "Bank/ATM",
    LocationCategory.LANDMARK: "Notable Landmark",
    LocationCategory.PARKING: "Parking Area",
    LocationCategory.ENTRANCE: "Campus Entrance",
    LocationCategory.OTHER: "Other",
}

# Categories counted as landmarks when describing or sorting routes.
LANDMARK_CATEGORIES = frozenset(
    {LocationCategory.LANDMARK, LocationCategory.BANK, LocationCategory.LIBRARY}
)


@dataclass(frozen=True, slots=True)
class Location:
    """A named point on campus. Two locations are equal when their ids match."""

    id: str
    name: str = field(compare=False)
    latitude: float = field(compare=False)
    longitude: float = field(compare=False)
    category: LocationCategory = field(default=LocationCategory.OTHER, compare=False)
    description: str = field(default="", compare=False)

    def distance_to(self, other: Location) -> float:
        return geospatial.distance(self, other)

    def __str__(self) -> str:
        return self.name


@dataclass(frozen=True, slots=True)
class Edge:
    """Directed, weighted path from ``source`` to ``target``."""

    source: Location
    target: Location
    distance: float
    base_travel_time: float
    difficulty_multiplier: float = 1.0
    path_type: str = "walkway"

    def __post_init__(self) -> None:
        if self.distance < 0:
            raise InvalidInputError(f"Edge {self.source.id}->{self.target.id} has negative distance.")
        if self.base_travel_time < 0:
            raise InvalidInputError(f"Edge {self.source.id}->{self.target.id} has negative travel time.")
        if self.difficulty_multiplier < 1.0:
            raise InvalidInputError(
                f"Edge {self.source.id}->{self.target.id} difficulty multiplier must be >= 1.0."
            )

    @classmethod
    def between(cls, source: Location, target: Location, path_type: str = "walkway") -> Edge:
        """Edge weighted by straight-line distance at walking speed."""
        meters = geospatial.distance(source, target)
        return cls(
            source=source,
            target=target,
            distance=meters,
            base_travel_time=geospatial.walking_minutes(meters),
            path_type=path_type,
        )

    @property
    def effective_time(self) -> float:
        return self.base_travel_time * self.difficulty_multiplier

    def cost(self, optimize_for_time: bool) -> float:
        return self.effective_time if optimize_for_time else self.distance

    def __str__(self) -> str:
        return f"{self.source.name} -> {self.target.name} ({self.distance:.0f}m, {self.effective_time:.1f}min)"
