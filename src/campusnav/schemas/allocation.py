"""Allocation request/response schemas."""

from __future__ import annotations

from typing import List, Optional

from pydantic import BaseModel, Field


class AllocationRequest(BaseModel):
    source_ids: List[str] = Field(..., min_length=1, description="Locations that hold capacity.")
    destination_ids: List[str] = Field(..., min_length=1, description="Locations that need capacity.")
    supply: List[float] = Field(..., description="Capacity per source, same order as source_ids.")
    demand: List[float] = Field(..., description="Demand per destination, same order as destination_ids.")
    cost_matrix: Optional[List[List[float]]] = Field(
        default=None,
        description="Explicit unit costs; defaults to great-circle meters between the locations.",
    )


class AllocationModel(BaseModel):
    source_id: str
    destination_id: str
    quantity: float = Field(..., ge=0)
    unit_cost: float
    total_cost: float


class AllocationResponse(BaseModel):
    total_quantity: float
    total_cost: float
    remaining_supply: List[float]
    remaining_demand: List[float]
    metadata: dict
    allocations: List[AllocationModel]
