"""A* search with a great-circle heuristic and diverse alternative routes."""

from __future__ import annotations

import heapq
import itertools
import logging
from typing import AbstractSet, Dict, List, Optional

from ...config import settings
from ...data.graph import CampusGraph
from ...errors import DeadlineExceededError
from ...models.domain import Location
from ..geospatial import heuristic
from .models import Route
from .paths import is_similar, reconstruct_path, require_endpoints, require_max_paths

logger = logging.getLogger(__name__)


class HeuristicSearchEngine:
    """A* over the campus graph.

    The heuristic is the straight-line distance to the destination (converted
    to walking minutes for time searches). It is admissible and consistent, so
    the first time the destination is popped its route is optimal and a
    closed node never needs reopening.

    Alternatives come from a node-exclusion strategy: each interior waypoint
    of the optimal route is banned in turn and the search rerun. This finds
    diverse routes cheaply but is not a k-shortest-paths algorithm.
    """

    def __init__(
        self,
        graph: CampusGraph,
        *,
        similarity_threshold: Optional[float] = None,
        max_iterations: Optional[int] = None,
    ) -> None:
        self.graph = graph
        self.similarity_threshold = (
            similarity_threshold if similarity_threshold is not None else settings.alternative_similarity_threshold
        )
        self.max_iterations = max_iterations if max_iterations is not None else settings.max_search_iterations

    @staticmethod
    def _route_type(optimize_for_time: bool) -> str:
        return "A* Fastest" if optimize_for_time else "A* Shortest"

    def _search(
        self,
        source: Location,
        destination: Location,
        optimize_for_time: bool,
        excluded: AbstractSet[Location] = frozenset(),
    ) -> Optional[Route]:
        g_score: Dict[Location, float] = {source: 0.0}
        f_score: Dict[Location, float] = {source: heuristic(source, destination, optimize_for_time)}
        previous: Dict[Location, Location] = {}
        closed: set[Location] = set()
        tie_breaker = itertools.count()
        open_set: list[tuple[float, int, Location]] = [(f_score[source], next(tie_breaker), source)]
        pops = 0

        while open_set:
            _, _, current = heapq.heappop(open_set)
            pops += 1
            if self.max_iterations is not None and pops > self.max_iterations:
                raise DeadlineExceededError("A* search", self.max_iterations)
            if current in closed:
                continue

            if current == destination:
                logger.debug(f"A* reached {destination.id} after {pops} pops, {len(closed)} closed")
                return reconstruct_path(self.graph, destination, previous, self._route_type(optimize_for_time))

            closed.add(current)
            for edge in self.graph.outgoing_edges(current):
                neighbor = edge.target
                if neighbor in closed or neighbor in excluded:
                    continue
                tentative = g_score[current] + edge.cost(optimize_for_time)
                if tentative < g_score.get(neighbor, float("inf")):
                    previous[neighbor] = current
                    g_score[neighbor] = tentative
                    f_score[neighbor] = tentative + heuristic(neighbor, destination, optimize_for_time)
                    heapq.heappush(open_set, (f_score[neighbor], next(tie_breaker), neighbor))

        return None

    def shortest_path(
        self,
        source: Location,
        destination: Location,
        optimize_for_time: bool = False,
    ) -> Optional[Route]:
        """Return the optimal route, or ``None`` when the destination is unreachable."""
        require_endpoints(self.graph, source, destination)
        if source == destination:
            return Route([source], [], "A* Same Location")
        return self._search(source, destination, optimize_for_time)

    def alternatives(
        self,
        source: Location,
        destination: Location,
        optimize_for_time: bool = False,
        max_paths: int = 3,
    ) -> List[Route]:
        """Optimal route first, followed by sufficiently different detours.

        A detour is kept only when its waypoint similarity to every route
        already kept is at most ``similarity_threshold``.
        """
        require_max_paths(max_paths)
        primary = self.shortest_path(source, destination, optimize_for_time)
        if primary is None:
            return []

        routes = [primary]
        for waypoint in primary.waypoints[1:-1]:
            if len(routes) >= max_paths:
                break
            candidate = self._search(source, destination, optimize_for_time, excluded=frozenset({waypoint}))
            if candidate is not None and not is_similar(candidate, routes, self.similarity_threshold):
                routes.append(candidate)

        logger.debug(f"Found {len(routes)} route(s) from {source.id} to {destination.id}")
        return routes
