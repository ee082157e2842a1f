"""Helpers shared by the search engines and the route composer."""

from __future__ import annotations

import logging
from typing import Iterable, Mapping

from ...data.graph import CampusGraph
from ...errors import InvalidInputError
from ...models.domain import Location
from .models import Route

logger = logging.getLogger(__name__)


def require_endpoints(graph: CampusGraph, source: Location | None, destination: Location | None) -> None:
    if source is None:
        raise InvalidInputError("Source location cannot be None")
    if destination is None:
        raise InvalidInputError("Destination location cannot be None")
    for location in (source, destination):
        if location not in graph:
            raise InvalidInputError(f"Location '{location.id}' is not part of the campus graph")


def require_max_paths(max_paths: int) -> None:
    if max_paths < 1:
        raise InvalidInputError("max_paths must be at least 1")


def reconstruct_path(
    graph: CampusGraph,
    destination: Location,
    previous: Mapping[Location, Location],
    route_type: str,
) -> Route:
    """Follow parent pointers back from ``destination`` and rebuild the route.

    A missing edge between two consecutive waypoints means the graph was
    loaded inconsistently; the edge is left out and a warning logged.
    """
    waypoints = [destination]
    current = destination
    while current in previous:
        current = previous[current]
        waypoints.append(current)
    waypoints.reverse()

    edges = []
    for start, end in zip(waypoints, waypoints[1:]):
        edge = graph.edge_between(start, end)
        if edge is None:
            logger.warning(f"Missing edge from {start.name} to {end.name}; omitting it from the route")
            continue
        edges.append(edge)
    return Route(waypoints, edges, route_type)


def route_similarity(first: Route, second: Route) -> float:
    """Share of waypoints of ``first`` that also appear in ``second``, over the longer route."""
    longest = max(len(first.waypoints), len(second.waypoints))
    if longest == 0:
        return 0.0
    others = set(second.waypoints)
    common = sum(1 for waypoint in first.waypoints if waypoint in others)
    return common / longest


def is_similar(candidate: Route, existing: Iterable[Route], threshold: float) -> bool:
    return any(route_similarity(candidate, route) > threshold for route in existing)
