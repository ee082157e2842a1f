"""Routing endpoints."""

from __future__ import annotations

import logging
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, status

from ...errors import DeadlineExceededError, InvalidInputError
from ...models.domain import Location
from ...schemas.routing import (
    LandmarkRouteRequest,
    RouteModel,
    RouteRequest,
    RoutesResponse,
    SortedRoutesResponse,
    SortRequest,
)
from ...services.routing import sorting
from ...services.routing.models import Route
from ...services.routing.service import NavigationService
from ...services.routing.sorting import SortAlgorithm, SortCriterion
from ..dependencies import get_navigation_service

router = APIRouter(prefix="/routes", tags=["routes"])


def _resolve(service: NavigationService, name_or_id: str) -> Location:
    location = service.resolve(name_or_id)
    if location is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=f"Location '{name_or_id}' not found")
    return location


def _response(
    service: NavigationService,
    source: Location,
    destination: Location,
    routes: List[Route],
    metadata: dict,
) -> RoutesResponse:
    return RoutesResponse(
        source_id=source.id,
        destination_id=destination.id,
        metadata={**metadata, "count": len(routes)},
        routes=[RouteModel.from_domain(route, service.analyze_route(route)) for route in routes],
    )


def _find(
    service: NavigationService,
    source_name: str,
    destination_name: str,
    optimize_for_time: bool,
    max_routes: Optional[int],
    criterion: Optional[SortCriterion],
    algorithm: SortAlgorithm,
) -> RoutesResponse:
    source = _resolve(service, source_name)
    destination = _resolve(service, destination_name)
    try:
        routes = service.find_routes(
            source,
            destination,
            optimize_for_time,
            max_routes,
            criterion=criterion,
            algorithm=algorithm,
        )
    except InvalidInputError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc
    except DeadlineExceededError as exc:
        logging.warning(f"Route search aborted: {exc}")
        raise HTTPException(status_code=status.HTTP_503_SERVICE_UNAVAILABLE, detail=str(exc)) from exc
    metadata = {
        "optimize_for_time": optimize_for_time,
        "sort_criterion": criterion.value if criterion else None,
        "sort_algorithm": algorithm.value,
    }
    return _response(service, source, destination, routes, metadata)


@router.post("/find", response_model=RoutesResponse, status_code=status.HTTP_200_OK)
def find_routes(
    payload: RouteRequest,
    service: NavigationService = Depends(get_navigation_service),
) -> RoutesResponse:
    return _find(
        service,
        payload.source,
        payload.destination,
        payload.optimize_for_time,
        payload.max_routes,
        payload.sort_criterion,
        payload.sort_algorithm,
    )


@router.post("/sort", response_model=SortedRoutesResponse, status_code=status.HTTP_200_OK)
def sort_routes(
    payload: SortRequest,
    service: NavigationService = Depends(get_navigation_service),
) -> SortedRoutesResponse:
    try:
        routes = [
            service.route_through(
                [_resolve(service, name_or_id) for name_or_id in item.waypoints],
                item.route_type,
            )
            for item in payload.routes
        ]
    except InvalidInputError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc
    ordered = sorting.sort_routes(routes, payload.sort_criterion, payload.sort_algorithm)
    return SortedRoutesResponse(
        metadata={
            "sort_criterion": payload.sort_criterion.value,
            "sort_algorithm": payload.sort_algorithm.value,
            "count": len(ordered),
        },
        routes=[RouteModel.from_domain(route, service.analyze_route(route)) for route in ordered],
    )


@router.post("/landmark", response_model=RoutesResponse, status_code=status.HTTP_200_OK)
def find_landmark_routes(
    payload: LandmarkRouteRequest,
    service: NavigationService = Depends(get_navigation_service),
) -> RoutesResponse:
    source = _resolve(service, payload.source)
    destination = _resolve(service, payload.destination)
    try:
        routes = service.find_landmark_routes(source, destination, payload.category, payload.max_routes)
    except InvalidInputError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc
    except DeadlineExceededError as exc:
        logging.warning(f"Landmark route search aborted: {exc}")
        raise HTTPException(status_code=status.HTTP_503_SERVICE_UNAVAILABLE, detail=str(exc)) from exc
    return _response(service, source, destination, routes, {"category": payload.category.value})
