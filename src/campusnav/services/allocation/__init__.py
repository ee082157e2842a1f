"""Allocation services."""

from .service import plan_allocation
from .vam import Allocation, AllocationPlan, allocate, build_cost_matrix, solve, solve_by_distance

__all__ = [
    "Allocation",
    "AllocationPlan",
    "allocate",
    "build_cost_matrix",
    "plan_allocation",
    "solve",
    "solve_by_distance",
]
