"""Shared FastAPI dependencies."""

from __future__ import annotations

from functools import lru_cache

from ..data.graph import CampusGraph
from ..data.graph_repository import load_graph
from ..services.routing.service import NavigationService


def get_graph() -> CampusGraph:
    return load_graph()


@lru_cache(maxsize=1)
def get_navigation_service() -> NavigationService:
    return NavigationService(get_graph())
