"""Campus graph loader backed by a JSON document."""

from __future__ import annotations

import functools
import json
import logging
from pathlib import Path
from typing import Any, Optional

from ..config import settings
from ..models.domain import Location, LocationCategory
from ..services import geospatial
from .graph import CampusGraph, GraphBuilder

logger = logging.getLogger(__name__)


def _parse_category(value: Any) -> LocationCategory:
    if value is None:
        return LocationCategory.OTHER
    text = str(value).strip().lower()
    try:
        return LocationCategory(text)
    except ValueError:
        logger.warning(f"Unknown location category '{value}', using 'other'")
        return LocationCategory.OTHER


def _location_from_row(row: dict) -> Location:
    return Location(
        id=str(row["id"]).strip(),
        name=str(row.get("name") or row["id"]).strip(),
        latitude=float(row["latitude"]),
        longitude=float(row["longitude"]),
        category=_parse_category(row.get("category")),
        description=str(row.get("description") or ""),
    )


def _optional_float(row: dict, key: str) -> Optional[float]:
    value = row.get(key)
    return None if value is None else float(value)


def _straight_line_floor(
    source: Location,
    target: Location,
    distance: Optional[float],
    walking_time: Optional[float],
    difficulty: float,
) -> tuple[Optional[float], Optional[float]]:
    """Raise explicit weights that undercut the straight-line bound the A* heuristic relies on."""
    meters = geospatial.distance(source, target)
    if distance is not None and distance < meters:
        logger.warning(
            f"Edge {source.id}<->{target.id} distance {distance:g}m is shorter than the straight line "
            f"({meters:.1f}m); raising it"
        )
        distance = meters
    fastest = geospatial.walking_minutes(meters)
    if walking_time is not None and walking_time * difficulty < fastest:
        logger.warning(
            f"Edge {source.id}<->{target.id} takes {walking_time * difficulty:g}min, faster than walking "
            f"speed allows ({fastest:.2f}min); raising it"
        )
        walking_time = fastest / difficulty
    return distance, walking_time


def build_graph(document: dict) -> CampusGraph:
    """Build a frozen graph from a ``{"locations": [...], "edges": [...]}`` document.

    Edges are bidirectional unless they set ``"bidirectional": false``.
    Distance and walking time default to straight-line walking values, and
    explicit values below those are raised to them with a warning.
    """
    builder = GraphBuilder()
    locations: dict[str, Location] = {}
    for row in document.get("locations", []):
        try:
            location = _location_from_row(row)
            builder.add_location(location)
        except (KeyError, ValueError, TypeError) as exc:
            raise ValueError(f"Invalid location row {row!r}: {exc}") from exc
        locations[location.id] = location

    for row in document.get("edges", []):
        try:
            source_id, target_id = str(row["from"]), str(row["to"])
            distance = _optional_float(row, "distance")
            walking_time = _optional_float(row, "walking_time")
            difficulty = float(row.get("difficulty", 1.0))
        except (KeyError, ValueError, TypeError) as exc:
            raise ValueError(f"Invalid edge row {row!r}: {exc}") from exc
        if source_id in locations and target_id in locations and difficulty >= 1.0:
            distance, walking_time = _straight_line_floor(
                locations[source_id], locations[target_id], distance, walking_time, difficulty
            )
        args = (source_id, target_id, distance, walking_time, difficulty, str(row.get("path_type", "walkway")))
        if row.get("bidirectional", True):
            builder.add_bidirectional_edge(*args)
        else:
            builder.add_edge(*args)

    graph = builder.build()
    logger.info(f"Loaded campus graph with {len(graph)} locations and {graph.edge_count()} edges")
    return graph


@functools.lru_cache(maxsize=1)
def load_graph(source: Optional[Path] = None) -> CampusGraph:
    """Load and cache the campus graph from ``settings.graph_file``."""
    graph_path = source or settings.graph_file
    if not graph_path.exists():
        raise FileNotFoundError(f"Campus graph file not found: {graph_path}")
    with graph_path.open("r", encoding="utf-8") as handle:
        document = json.load(handle)
    return build_graph(document)
