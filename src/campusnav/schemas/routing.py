"""Routing request/response schemas."""

from __future__ import annotations

from typing import Dict, List, Optional

from pydantic import BaseModel, Field

from ..models.domain import Edge, Location, LocationCategory
from ..services.routing.models import Route, RouteAnalysis
from ..services.routing.sorting import SortAlgorithm, SortCriterion


class LocationModel(BaseModel):
    id: str
    name: str
    latitude: float
    longitude: float
    category: LocationCategory
    category_display_name: str
    description: str = ""

    @classmethod
    def from_domain(cls, location: Location) -> "LocationModel":
        return cls(
            id=location.id,
            name=location.name,
            latitude=location.latitude,
            longitude=location.longitude,
            category=location.category,
            category_display_name=location.category.display_name,
            description=location.description,
        )


class LocationsResponse(BaseModel):
    count: int
    locations: List[LocationModel]


class EdgeModel(BaseModel):
    source_id: str
    target_id: str
    distance_m: float
    effective_time_min: float
    path_type: str

    @classmethod
    def from_domain(cls, edge: Edge) -> "EdgeModel":
        return cls(
            source_id=edge.source.id,
            target_id=edge.target.id,
            distance_m=edge.distance,
            effective_time_min=edge.effective_time,
            path_type=edge.path_type,
        )


class RouteModel(BaseModel):
    route_type: str
    total_distance_m: float
    total_time_min: float
    waypoints: List[LocationModel]
    edges: List[EdgeModel]
    landmarks: List[str]
    category_counts: Dict[str, int]
    summary: str

    @classmethod
    def from_domain(cls, route: Route, analysis: RouteAnalysis) -> "RouteModel":
        return cls(
            route_type=route.route_type,
            total_distance_m=route.total_distance,
            total_time_min=route.total_time,
            waypoints=[LocationModel.from_domain(location) for location in route.waypoints],
            edges=[EdgeModel.from_domain(edge) for edge in route.edges],
            landmarks=[location.name for location in analysis.landmarks],
            category_counts={category.value: count for category, count in analysis.category_counts.items()},
            summary=analysis.summary(),
        )


class RouteRequest(BaseModel):
    source: str = Field(..., description="Location id or name to start from.")
    destination: str = Field(..., description="Location id or name to reach.")
    optimize_for_time: bool = False
    max_routes: Optional[int] = Field(default=None, ge=1)
    sort_criterion: Optional[SortCriterion] = Field(
        default=None,
        description="Ordering of returned routes. Defaults to time or distance following optimize_for_time.",
    )
    sort_algorithm: SortAlgorithm = SortAlgorithm.BUILTIN


class RouteInput(BaseModel):
    waypoints: List[str] = Field(..., min_length=1, description="Location ids or names in visiting order.")
    route_type: str = "Custom"


class SortRequest(BaseModel):
    routes: List[RouteInput]
    sort_criterion: SortCriterion
    sort_algorithm: SortAlgorithm


class LandmarkRouteRequest(BaseModel):
    source: str
    destination: str
    category: LocationCategory
    max_routes: Optional[int] = Field(default=None, ge=1)


class RoutesResponse(BaseModel):
    source_id: str
    destination_id: str
    metadata: dict
    routes: List[RouteModel]


class SortedRoutesResponse(BaseModel):
    metadata: dict
    routes: List[RouteModel]
