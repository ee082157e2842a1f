"""Capacity/demand balancing between groups of campus locations."""

from __future__ import annotations

import logging
from typing import Optional, Sequence

from ...models.domain import Location
from .vam import AllocationPlan, allocate, build_cost_matrix

logger = logging.getLogger(__name__)


def plan_allocation(
    sources: Sequence[Location],
    destinations: Sequence[Location],
    supply: Sequence[float],
    demand: Sequence[float],
    cost_matrix: Optional[Sequence[Sequence[float]]] = None,
    *,
    max_iterations: Optional[int] = None,
) -> AllocationPlan:
    """Run Vogel's method and describe the outcome.

    Without an explicit ``cost_matrix`` the cost of a cell is the
    great-circle distance between source and destination.
    """
    matrix = cost_matrix if cost_matrix is not None else build_cost_matrix(sources, destinations)
    plan = allocate(sources, destinations, supply, demand, matrix, max_iterations=max_iterations)

    total_supply = float(sum(supply))
    total_demand = float(sum(demand))
    plan.metadata.update(
        {
            "method": "vogel",
            "balanced": total_supply == total_demand,
            "total_supply": total_supply,
            "total_demand": total_demand,
            "cost_source": "explicit" if cost_matrix is not None else "haversine_m",
        }
    )
    if not plan.metadata["balanced"]:
        logger.warning(
            f"Unbalanced allocation problem: supply {total_supply:g} vs demand {total_demand:g}; "
            f"leftover capacity stays unallocated"
        )
    logger.info(
        f"Allocated {plan.total_quantity:g} unit(s) across {len(plan.allocations)} cell(s), total cost {plan.total_cost:.1f}"
    )
    return plan
