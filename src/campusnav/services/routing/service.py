"""Routing orchestration service."""

from __future__ import annotations

import logging
from collections import Counter
from typing import List, Optional, Sequence

from ...config import settings
from ...data.graph import CampusGraph
from ...errors import InvalidInputError
from ...models.domain import Location, LocationCategory
from .astar import HeuristicSearchEngine
from .composer import RouteComposer
from .dijkstra import ShortestPathEngine
from .models import Route, RouteAnalysis
from .paths import require_max_paths
from .sorting import SortAlgorithm, SortCriterion, sort_routes

logger = logging.getLogger(__name__)


class NavigationService:
    """Facade over the search engines for one campus graph.

    The graph is injected and never mutated, so a single service instance can
    answer queries from several threads at once.
    """

    def __init__(
        self,
        graph: CampusGraph,
        *,
        dijkstra: Optional[ShortestPathEngine] = None,
        astar: Optional[HeuristicSearchEngine] = None,
        composer: Optional[RouteComposer] = None,
    ) -> None:
        self.graph = graph
        self.dijkstra = dijkstra or ShortestPathEngine(graph)
        self.astar = astar or HeuristicSearchEngine(graph)
        self.composer = composer or RouteComposer(graph, engine=self.dijkstra)

    def resolve(self, name_or_id: str) -> Optional[Location]:
        """Find a location by exact id, then by case-insensitive name."""
        return self.graph.location_by_id(name_or_id) or self.graph.location_by_name(name_or_id)

    def find_routes(
        self,
        source: Location,
        destination: Location,
        optimize_for_time: bool = False,
        max_routes: Optional[int] = None,
        *,
        criterion: Optional[SortCriterion] = None,
        algorithm: SortAlgorithm = SortAlgorithm.BUILTIN,
    ) -> List[Route]:
        """Dijkstra's route plus distinct A* alternatives, best first.

        Without an explicit ``criterion`` the routes are ordered by time or
        distance to match ``optimize_for_time``.
        """
        if max_routes is None:
            max_routes = settings.default_max_routes
        require_max_paths(max_routes)

        routes: list[Route] = []
        primary = self.dijkstra.shortest_path(source, destination, optimize_for_time)
        if primary is not None:
            routes.append(primary)
        alternatives = self.astar.alternatives(source, destination, optimize_for_time, max_routes)
        routes = self.composer.merge_distinct(routes, alternatives)

        if criterion is None:
            criterion = SortCriterion.TIME if optimize_for_time else SortCriterion.DISTANCE
        ordered = sort_routes(routes, criterion, algorithm)
        logger.info(
            f"Routes {source.id} -> {destination.id}: {len(ordered)} candidate(s), returning {min(len(ordered), max_routes)}"
        )
        return ordered[:max_routes]

    def find_routes_by_name(
        self,
        source_name: str,
        destination_name: str,
        optimize_for_time: bool = False,
        max_routes: Optional[int] = None,
    ) -> List[Route]:
        source = self.resolve(source_name)
        destination = self.resolve(destination_name)
        if source is None or destination is None:
            return []
        return self.find_routes(source, destination, optimize_for_time, max_routes)

    def find_landmark_routes(
        self,
        source: Location,
        destination: Location,
        category: LocationCategory,
        max_routes: Optional[int] = None,
    ) -> List[Route]:
        if max_routes is None:
            max_routes = settings.default_max_routes
        return self.composer.routes_via_landmark(source, destination, category, max_routes)

    def find_landmark_routes_by_name(
        self,
        source_name: str,
        destination_name: str,
        category: LocationCategory,
        max_routes: Optional[int] = None,
    ) -> List[Route]:
        source = self.resolve(source_name)
        destination = self.resolve(destination_name)
        if source is None or destination is None:
            return []
        return self.find_landmark_routes(source, destination, category, max_routes)

    def route_through(self, waypoints: Sequence[Location], route_type: str = "Custom") -> Route:
        """Rebuild a route that visits ``waypoints`` in order over existing edges."""
        if not waypoints:
            raise InvalidInputError("A route needs at least one waypoint")
        edges = []
        for start, end in zip(waypoints, waypoints[1:]):
            edge = self.graph.edge_between(start, end)
            if edge is None:
                raise InvalidInputError(f"No path from '{start.id}' to '{end.id}'")
            edges.append(edge)
        return Route(waypoints, edges, route_type)

    def search_locations(self, keyword: str) -> List[Location]:
        if not keyword or not keyword.strip():
            raise InvalidInputError("Search keyword cannot be empty")
        return self.graph.search_by_keyword(keyword.strip())

    def locations_by_category(self, category: LocationCategory) -> List[Location]:
        return self.graph.locations_by_category(category)

    def all_locations(self) -> List[Location]:
        return self.graph.all_locations()

    @staticmethod
    def analyze_route(route: Route) -> RouteAnalysis:
        counts = Counter(location.category for location in route.waypoints)
        return RouteAnalysis(route=route, landmarks=route.landmarks, category_counts=dict(counts))
