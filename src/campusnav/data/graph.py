"""Read-only campus graph and the builder that assembles it."""

from __future__ import annotations

from types import MappingProxyType
from typing import Iterable, Mapping

from ..errors import InvalidInputError
from ..models.domain import Edge, Location, LocationCategory
from ..services import geospatial


class CampusGraph:
    """Registry of locations plus a directed adjacency list.

    Instances are frozen once built: the location map is a mapping proxy and
    every adjacency list is a tuple, so concurrent readers never see partial
    state. Use :class:`GraphBuilder` to construct one.
    """

    __slots__ = ("_locations", "_adjacency")

    def __init__(self, locations: Mapping[str, Location], adjacency: Mapping[Location, tuple[Edge, ...]]) -> None:
        self._locations = MappingProxyType(dict(locations))
        self._adjacency = MappingProxyType(
            {location: tuple(adjacency.get(location, ())) for location in self._locations.values()}
        )

    def __len__(self) -> int:
        return len(self._locations)

    def __contains__(self, location: object) -> bool:
        return isinstance(location, Location) and location.id in self._locations

    def all_locations(self) -> list[Location]:
        return list(self._locations.values())

    def location_by_id(self, location_id: str) -> Location | None:
        return self._locations.get(location_id)

    def location_by_name(self, name: str) -> Location | None:
        wanted = name.strip().casefold()
        for location in self._locations.values():
            if location.name.casefold() == wanted:
                return location
        return None

    def locations_by_category(self, category: LocationCategory) -> list[Location]:
        return [location for location in self._locations.values() if location.category == category]

    def outgoing_edges(self, location: Location) -> tuple[Edge, ...]:
        return self._adjacency.get(location, ())

    def edge_between(self, source: Location, target: Location) -> Edge | None:
        for edge in self.outgoing_edges(source):
            if edge.target == target:
                return edge
        return None

    def edge_count(self) -> int:
        return sum(len(edges) for edges in self._adjacency.values())

    def search_by_keyword(self, keyword: str) -> list[Location]:
        """Locations whose name, description or category display name contains ``keyword``."""
        needle = keyword.casefold()
        return [
            location
            for location in self._locations.values()
            if needle in location.name.casefold()
            or needle in location.description.casefold()
            or needle in location.category.display_name.casefold()
        ]


class GraphBuilder:
    """Mutable staging area for a :class:`CampusGraph`."""

    def __init__(self) -> None:
        self._locations: dict[str, Location] = {}
        self._adjacency: dict[Location, list[Edge]] = {}

    def add_location(self, location: Location) -> GraphBuilder:
        if location.id in self._locations:
            raise InvalidInputError(f"Duplicate location id '{location.id}'.")
        self._locations[location.id] = location
        self._adjacency[location] = []
        return self

    def add_locations(self, locations: Iterable[Location]) -> GraphBuilder:
        for location in locations:
            self.add_location(location)
        return self

    def _require(self, location_id: str) -> Location:
        location = self._locations.get(location_id)
        if location is None:
            raise InvalidInputError(f"Unknown location id '{location_id}'.")
        return location

    def add_edge(
        self,
        source_id: str,
        target_id: str,
        distance: float | None = None,
        base_travel_time: float | None = None,
        difficulty_multiplier: float = 1.0,
        path_type: str = "walkway",
    ) -> Edge:
        """Add a one-way edge. Missing distance/time fall back to straight-line walking values."""
        source = self._require(source_id)
        target = self._require(target_id)
        meters = distance if distance is not None else source.distance_to(target)
        minutes = base_travel_time if base_travel_time is not None else geospatial.walking_minutes(meters)
        edge = Edge(source, target, meters, minutes, difficulty_multiplier, path_type)
        self._adjacency[source].append(edge)
        return edge

    def add_bidirectional_edge(
        self,
        first_id: str,
        second_id: str,
        distance: float | None = None,
        base_travel_time: float | None = None,
        difficulty_multiplier: float = 1.0,
        path_type: str = "walkway",
    ) -> tuple[Edge, Edge]:
        forward = self.add_edge(first_id, second_id, distance, base_travel_time, difficulty_multiplier, path_type)
        backward = self.add_edge(second_id, first_id, distance, base_travel_time, difficulty_multiplier, path_type)
        return forward, backward

    def build(self) -> CampusGraph:
        return CampusGraph(self._locations, {location: tuple(edges) for location, edges in self._adjacency.items()})
