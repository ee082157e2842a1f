"""Geospatial helper functions."""

from __future__ import annotations

import math
from typing import TYPE_CHECKING

from ..config import settings

if TYPE_CHECKING:
    from ..models.domain import Location

EARTH_RADIUS_M = 6_371_000.0


def haversine_m(lat1: float, lon1: float, lat2: float, lon2: float) -> float:
    """Compute distance in meters between two coordinates using the Haversine formula."""

    phi1, phi2 = math.radians(lat1), math.radians(lat2)
    d_phi = math.radians(lat2 - lat1)
    d_lambda = math.radians(lon2 - lon1)

    a = math.sin(d_phi / 2) ** 2 + math.cos(phi1) * math.cos(phi2) * math.sin(d_lambda / 2) ** 2
    c = 2 * math.atan2(math.sqrt(a), math.sqrt(1 - a))
    return EARTH_RADIUS_M * c


def distance(a: "Location", b: "Location") -> float:
    """Great-circle distance between two locations in meters."""

    return haversine_m(a.latitude, a.longitude, b.latitude, b.longitude)


def walking_minutes(meters: float) -> float:
    return meters / settings.walking_speed_m_per_min


def heuristic(a: "Location", b: "Location", optimize_for_time: bool) -> float:
    """Lower bound on the remaining cost from ``a`` to ``b``.

    Straight-line distance never exceeds the length of any path, so it is
    admissible for distance searches. For time searches the distance is
    converted at walking speed.
    """

    meters = distance(a, b)
    if optimize_for_time:
        return walking_minutes(meters)
    return meters
