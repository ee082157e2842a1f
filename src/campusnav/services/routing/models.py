"""Routing domain models."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, List, Sequence

from ...models.domain import LANDMARK_CATEGORIES, Edge, Location, LocationCategory


@dataclass(frozen=True, slots=True)
class Route:
    """Ordered walk through the campus graph.

    Totals are computed once at construction. Routes deliberately define no
    ordering; use :mod:`campusnav.services.routing.sorting` with an explicit
    criterion instead.
    """

    waypoints: Sequence[Location]
    edges: Sequence[Edge]
    route_type: str
    total_distance: float = field(init=False, compare=False)
    total_time: float = field(init=False, compare=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "waypoints", tuple(self.waypoints))
        object.__setattr__(self, "edges", tuple(self.edges))
        object.__setattr__(self, "total_distance", sum(edge.distance for edge in self.edges))
        object.__setattr__(self, "total_time", sum(edge.effective_time for edge in self.edges))

    @property
    def source(self) -> Location | None:
        return self.waypoints[0] if self.waypoints else None

    @property
    def destination(self) -> Location | None:
        return self.waypoints[-1] if self.waypoints else None

    @property
    def landmarks(self) -> List[Location]:
        return [location for location in self.waypoints if location.category in LANDMARK_CATEGORIES]

    def passes_through(self, category: LocationCategory) -> bool:
        return any(location.category == category for location in self.waypoints)

    def __str__(self) -> str:
        return f"{self.route_type} Route: {self.total_distance:.0f}m, {self.total_time:.1f}min"


@dataclass(slots=True)
class RouteAnalysis:
    route: Route
    landmarks: List[Location]
    category_counts: Dict[LocationCategory, int]

    def summary(self) -> str:
        lines = [
            "Route Analysis:",
            f"Total Distance: {self.route.total_distance:.0f} meters",
            f"Estimated Time: {self.route.total_time:.1f} minutes",
            f"Waypoints: {len(self.route.waypoints)}",
            f"Landmarks: {len(self.landmarks)}",
        ]
        if self.landmarks:
            lines.append("Notable Landmarks: " + ", ".join(location.name for location in self.landmarks))
        return "\n".join(lines)
