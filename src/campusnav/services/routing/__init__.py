"""Routing services."""

from .astar import HeuristicSearchEngine
from .composer import RouteComposer
from .dijkstra import ShortestPathEngine
from .models import Route, RouteAnalysis
from .service import NavigationService
from .sorting import SortAlgorithm, SortCriterion, sort_routes

__all__ = [
    "HeuristicSearchEngine",
    "NavigationService",
    "Route",
    "RouteAnalysis",
    "RouteComposer",
    "ShortestPathEngine",
    "SortAlgorithm",
    "SortCriterion",
    "sort_routes",
]
