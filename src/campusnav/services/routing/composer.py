"""Landmark-constrained route composition and duplicate filtering."""

from __future__ import annotations

import logging
from typing import Iterable, List, Optional, Sequence

from ...config import settings
from ...data.graph import CampusGraph
from ...models.domain import Location, LocationCategory
from .dijkstra import ShortestPathEngine
from .models import Route
from .paths import is_similar, require_endpoints, require_max_paths

logger = logging.getLogger(__name__)


def concatenate(first: Route, second: Route, route_type: str) -> Route:
    """Join two legs that meet at ``first.destination == second.source``."""
    waypoints = list(first.waypoints) + list(second.waypoints[1:])
    edges = list(first.edges) + list(second.edges)
    return Route(waypoints, edges, route_type)


class RouteComposer:
    """Builds routes forced through a landmark category and merges route lists."""

    def __init__(
        self,
        graph: CampusGraph,
        *,
        engine: Optional[ShortestPathEngine] = None,
        similarity_threshold: Optional[float] = None,
    ) -> None:
        self.graph = graph
        self.engine = engine or ShortestPathEngine(graph)
        self.similarity_threshold = (
            similarity_threshold if similarity_threshold is not None else settings.composition_similarity_threshold
        )

    def routes_via_landmark(
        self,
        source: Location,
        destination: Location,
        category: LocationCategory,
        max_paths: int,
    ) -> List[Route]:
        """Shortest source->landmark->destination routes, one per landmark of ``category``.

        Each candidate is two independent distance-optimized legs glued at the
        landmark. Detours that visit a landmark on the way are not searched,
        so the result is not the optimal "visit any landmark" route.
        """
        require_endpoints(self.graph, source, destination)
        require_max_paths(max_paths)

        route_type = f"via {category.display_name}"
        candidates: list[Route] = []
        for landmark in self.graph.locations_by_category(category):
            to_landmark = self.engine.shortest_path(source, landmark, False)
            if to_landmark is None:
                continue
            from_landmark = self.engine.shortest_path(landmark, destination, False)
            if from_landmark is None:
                continue
            candidates.append(concatenate(to_landmark, from_landmark, route_type))

        candidates.sort(key=lambda route: route.total_distance)
        logger.debug(
            f"{len(candidates)} landmark route(s) via {category.value} from {source.id} to {destination.id}"
        )
        return candidates[:max_paths]

    def merge_distinct(self, existing: Sequence[Route], candidates: Iterable[Route]) -> List[Route]:
        """Append each candidate unless it overlaps an already kept route by more than the threshold."""
        merged = list(existing)
        for route in candidates:
            if not is_similar(route, merged, self.similarity_threshold):
                merged.append(route)
        return merged
