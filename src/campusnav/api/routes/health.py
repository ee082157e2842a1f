"""Health endpoints."""

from __future__ import annotations

import logging

from fastapi import APIRouter, status

router = APIRouter(tags=["health"])


@router.get("/health", status_code=status.HTTP_200_OK)
def health_root() -> dict:
    """Simple health check endpoint that doesn't require any dependencies."""
    return {"status": "ok"}


def _get_graph_loader():
    """Lazy import to avoid startup failures."""
    from ..dependencies import get_graph
    return get_graph


@router.get("/health/graph", status_code=status.HTTP_200_OK)
def health_graph() -> dict:
    """Report whether the campus graph can be loaded."""
    try:
        graph = _get_graph_loader()()
    except (FileNotFoundError, ValueError) as exc:
        logging.warning(f"Campus graph unavailable: {exc}")
        return {"service": "graph", "healthy": False, "error": str(exc)}
    return {
        "service": "graph",
        "healthy": True,
        "locations": len(graph),
        "edges": graph.edge_count(),
    }
