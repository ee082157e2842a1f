"""Capacity allocation endpoints."""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, HTTPException, status

from ...errors import DeadlineExceededError, InvalidInputError
from ...schemas.allocation import AllocationModel, AllocationRequest, AllocationResponse
from ...services.allocation.service import plan_allocation
from ...services.routing.service import NavigationService
from ..dependencies import get_navigation_service

router = APIRouter(prefix="/allocation", tags=["allocation"])


@router.post("/solve", response_model=AllocationResponse, status_code=status.HTTP_200_OK)
def solve_allocation(
    payload: AllocationRequest,
    service: NavigationService = Depends(get_navigation_service),
) -> AllocationResponse:
    missing = [
        location_id
        for location_id in (*payload.source_ids, *payload.destination_ids)
        if service.resolve(location_id) is None
    ]
    if missing:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Unknown location(s): {', '.join(missing)}",
        )
    sources = [service.resolve(location_id) for location_id in payload.source_ids]
    destinations = [service.resolve(location_id) for location_id in payload.destination_ids]

    try:
        plan = plan_allocation(sources, destinations, payload.supply, payload.demand, payload.cost_matrix)
    except InvalidInputError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc
    except DeadlineExceededError as exc:
        logging.warning(f"Allocation aborted: {exc}")
        raise HTTPException(status_code=status.HTTP_503_SERVICE_UNAVAILABLE, detail=str(exc)) from exc

    return AllocationResponse(
        total_quantity=plan.total_quantity,
        total_cost=plan.total_cost,
        remaining_supply=plan.remaining_supply,
        remaining_demand=plan.remaining_demand,
        metadata=plan.metadata,
        allocations=[
            AllocationModel(
                source_id=allocation.source.id,
                destination_id=allocation.destination.id,
                quantity=allocation.quantity,
                unit_cost=allocation.unit_cost,
                total_cost=allocation.total_cost,
            )
            for allocation in plan.allocations
        ],
    )
