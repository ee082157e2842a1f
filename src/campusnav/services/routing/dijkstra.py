"""Dijkstra shortest-path search over the campus graph."""

from __future__ import annotations

import heapq
import itertools
import logging
from typing import Dict, Optional

from ...config import settings
from ...data.graph import CampusGraph
from ...errors import DeadlineExceededError
from ...models.domain import Location
from .models import Route
from .paths import reconstruct_path, require_endpoints

logger = logging.getLogger(__name__)


class ShortestPathEngine:
    """Label-setting Dijkstra with a binary heap.

    ``heapq`` has no decrease-key, so an improved label is pushed again and
    stale entries are skipped when popped for an already visited node.
    """

    def __init__(self, graph: CampusGraph, *, max_iterations: Optional[int] = None) -> None:
        self.graph = graph
        self.max_iterations = max_iterations if max_iterations is not None else settings.max_search_iterations

    def _search(
        self,
        source: Location,
        destination: Optional[Location],
        optimize_for_time: bool,
    ) -> Dict[Location, Location]:
        costs: Dict[Location, float] = {source: 0.0}
        previous: Dict[Location, Location] = {}
        visited: set[Location] = set()
        tie_breaker = itertools.count()
        queue: list[tuple[float, int, Location]] = [(0.0, next(tie_breaker), source)]
        pops = 0

        while queue:
            cost, _, current = heapq.heappop(queue)
            pops += 1
            if self.max_iterations is not None and pops > self.max_iterations:
                raise DeadlineExceededError("Dijkstra search", self.max_iterations)
            if current in visited:
                continue
            visited.add(current)

            if current == destination:
                break

            for edge in self.graph.outgoing_edges(current):
                neighbor = edge.target
                if neighbor in visited:
                    continue
                candidate = cost + edge.cost(optimize_for_time)
                if candidate < costs.get(neighbor, float("inf")):
                    costs[neighbor] = candidate
                    previous[neighbor] = current
                    heapq.heappush(queue, (candidate, next(tie_breaker), neighbor))

        logger.debug(f"Dijkstra from {source.id} settled {len(visited)} nodes in {pops} pops")
        return previous

    @staticmethod
    def _route_type(optimize_for_time: bool) -> str:
        return "Fastest" if optimize_for_time else "Shortest"

    def shortest_path(
        self,
        source: Location,
        destination: Location,
        optimize_for_time: bool = False,
    ) -> Optional[Route]:
        """Return the cheapest route, or ``None`` when the destination is unreachable."""
        require_endpoints(self.graph, source, destination)
        route_type = self._route_type(optimize_for_time)
        if source == destination:
            return Route([source], [], route_type)

        previous = self._search(source, destination, optimize_for_time)
        if destination not in previous:
            return None
        return reconstruct_path(self.graph, destination, previous, route_type)

    def all_shortest_paths(self, source: Location, optimize_for_time: bool = False) -> Dict[Location, Route]:
        """Cheapest route from ``source`` to every other reachable location."""
        require_endpoints(self.graph, source, source)
        previous = self._search(source, None, optimize_for_time)
        route_type = self._route_type(optimize_for_time)
        return {
            destination: reconstruct_path(self.graph, destination, previous, route_type)
            for destination in self.graph.all_locations()
            if destination != source and destination in previous
        }
