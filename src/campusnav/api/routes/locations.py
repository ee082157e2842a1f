"""Location lookup endpoints."""

from __future__ import annotations

from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query, status

from ...errors import InvalidInputError
from ...models.domain import LocationCategory
from ...schemas.routing import LocationModel, LocationsResponse
from ...services.routing.service import NavigationService
from ..dependencies import get_navigation_service

router = APIRouter(prefix="/locations", tags=["locations"])


@router.get("", response_model=LocationsResponse, status_code=status.HTTP_200_OK)
def list_locations(
    category: Optional[LocationCategory] = Query(default=None),
    q: Optional[str] = Query(default=None, description="Keyword matched against name, description and category."),
    service: NavigationService = Depends(get_navigation_service),
) -> LocationsResponse:
    try:
        locations = service.search_locations(q) if q is not None else service.all_locations()
    except InvalidInputError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc
    if category is not None:
        locations = [location for location in locations if location.category == category]
    return LocationsResponse(
        count=len(locations),
        locations=[LocationModel.from_domain(location) for location in locations],
    )


@router.get("/{location_id}", response_model=LocationModel, status_code=status.HTTP_200_OK)
def get_location(
    location_id: str,
    service: NavigationService = Depends(get_navigation_service),
) -> LocationModel:
    location = service.resolve(location_id)
    if location is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=f"Location '{location_id}' not found")
    return LocationModel.from_domain(location)
