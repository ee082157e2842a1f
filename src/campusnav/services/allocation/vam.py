"""Supply/demand allocation with Vogel's Approximation Method."""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass, field
from typing import List, Optional, Sequence

from ...config import settings
from ...errors import DeadlineExceededError, InvalidInputError
from ...models.domain import Location
from ..geospatial import distance

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class Allocation:
    source: Location
    destination: Location
    quantity: float
    unit_cost: float

    @property
    def total_cost(self) -> float:
        return self.quantity * self.unit_cost


@dataclass(slots=True)
class AllocationPlan:
    allocations: List[Allocation]
    remaining_supply: List[float]
    remaining_demand: List[float]
    metadata: dict = field(default_factory=dict)

    @property
    def total_quantity(self) -> float:
        return sum(allocation.quantity for allocation in self.allocations)

    @property
    def total_cost(self) -> float:
        return sum(allocation.total_cost for allocation in self.allocations)


def _validate(
    sources: Sequence[Location],
    destinations: Sequence[Location],
    supply: Sequence[float],
    demand: Sequence[float],
    cost_matrix: Sequence[Sequence[float]],
) -> None:
    if len(supply) != len(sources):
        raise InvalidInputError(f"supply has {len(supply)} entries for {len(sources)} sources")
    if len(demand) != len(destinations):
        raise InvalidInputError(f"demand has {len(demand)} entries for {len(destinations)} destinations")
    if any(value < 0 for value in supply):
        raise InvalidInputError("supply values must be >= 0")
    if any(value < 0 for value in demand):
        raise InvalidInputError("demand values must be >= 0")
    if len(cost_matrix) != len(sources):
        raise InvalidInputError(f"cost matrix has {len(cost_matrix)} rows for {len(sources)} sources")
    for index, row in enumerate(cost_matrix):
        if len(row) != len(destinations):
            raise InvalidInputError(f"cost matrix row {index} has {len(row)} columns for {len(destinations)} destinations")
        if not all(math.isfinite(value) for value in row):
            raise InvalidInputError(f"cost matrix row {index} contains a non-finite cost")


def _penalty(costs: List[float]) -> Optional[float]:
    """Gap between the two cheapest active costs; the lone cost when only one is left."""
    if not costs:
        return None
    if len(costs) == 1:
        return costs[0]
    cheapest, runner_up = sorted(costs)[:2]
    return runner_up - cheapest


def _row_penalties(cost_matrix, row_done: List[bool], col_done: List[bool]) -> List[Optional[float]]:
    return [
        None if row_done[i] else _penalty([cost for j, cost in enumerate(row) if not col_done[j]])
        for i, row in enumerate(cost_matrix)
    ]


def _column_penalties(cost_matrix, row_done: List[bool], col_done: List[bool]) -> List[Optional[float]]:
    return [
        None if col_done[j] else _penalty([cost_matrix[i][j] for i in range(len(cost_matrix)) if not row_done[i]])
        for j in range(len(col_done))
    ]


def _cheapest_index(costs: Sequence[float], done: List[bool]) -> int:
    best_index = -1
    best_cost = math.inf
    for index, cost in enumerate(costs):
        if not done[index] and cost < best_cost:
            best_cost = cost
            best_index = index
    return best_index


def _first_active_cell(row_done: List[bool], col_done: List[bool]) -> tuple[int, int]:
    """First cell in row-major order whose row and column are both active."""
    return row_done.index(False), col_done.index(False)


def allocate(
    sources: Sequence[Location],
    destinations: Sequence[Location],
    supply: Sequence[float],
    demand: Sequence[float],
    cost_matrix: Sequence[Sequence[float]],
    *,
    max_iterations: Optional[int] = None,
) -> AllocationPlan:
    """Allocate supply to demand greedily by largest opportunity cost.

    Each round picks the row or column with the largest penalty (rows are
    scanned before columns, lowest index wins ties), fills its cheapest
    active cell as far as possible and retires whichever line ran out. The
    loop ends once every row or every column is retired. Balanced problems
    end fully allocated; the result is near-optimal, not optimal.
    """
    _validate(sources, destinations, supply, demand, cost_matrix)
    max_iterations = max_iterations if max_iterations is not None else settings.max_allocation_iterations

    remaining_supply = [float(value) for value in supply]
    remaining_demand = [float(value) for value in demand]
    # Lines that start empty can never take an allocation.
    row_done = [value == 0 for value in remaining_supply]
    col_done = [value == 0 for value in remaining_demand]
    allocations: list[Allocation] = []
    rounds = 0

    while not all(row_done) and not all(col_done):
        rounds += 1
        if max_iterations is not None and rounds > max_iterations:
            raise DeadlineExceededError("Vogel allocation", max_iterations)

        row_penalties = _row_penalties(cost_matrix, row_done, col_done)
        col_penalties = _column_penalties(cost_matrix, row_done, col_done)

        best_penalty: Optional[float] = None
        best_row = best_col = -1
        for i, penalty in enumerate(row_penalties):
            if penalty is not None and (best_penalty is None or penalty > best_penalty):
                best_penalty, best_row, best_col = penalty, i, -1
        for j, penalty in enumerate(col_penalties):
            if penalty is not None and (best_penalty is None or penalty > best_penalty):
                best_penalty, best_row, best_col = penalty, -1, j

        if best_row >= 0:
            row, col = best_row, _cheapest_index(cost_matrix[best_row], col_done)
        elif best_col >= 0:
            column_costs = [cost_matrix[i][best_col] for i in range(len(cost_matrix))]
            row, col = _cheapest_index(column_costs, row_done), best_col
        else:
            # Guard only: finite costs give every active line a penalty.
            row, col = _first_active_cell(row_done, col_done)

        quantity = min(remaining_supply[row], remaining_demand[col])
        allocations.append(Allocation(sources[row], destinations[col], quantity, cost_matrix[row][col]))
        remaining_supply[row] -= quantity
        remaining_demand[col] -= quantity
        if remaining_supply[row] == 0:
            row_done[row] = True
        if remaining_demand[col] == 0:
            col_done[col] = True

    logger.debug(f"Vogel allocation finished after {rounds} round(s) with {len(allocations)} allocation(s)")
    return AllocationPlan(
        allocations=allocations,
        remaining_supply=remaining_supply,
        remaining_demand=remaining_demand,
        metadata={"rounds": rounds},
    )


def solve(
    sources: Sequence[Location],
    destinations: Sequence[Location],
    supply: Sequence[float],
    demand: Sequence[float],
    cost_matrix: Sequence[Sequence[float]],
    *,
    max_iterations: Optional[int] = None,
) -> List[Allocation]:
    """Allocations produced by :func:`allocate`, in the order they were made."""
    return allocate(sources, destinations, supply, demand, cost_matrix, max_iterations=max_iterations).allocations


def build_cost_matrix(sources: Sequence[Location], destinations: Sequence[Location]) -> List[List[float]]:
    """Great-circle distance in meters from every source to every destination."""
    return [[distance(source, destination) for destination in destinations] for source in sources]


def solve_by_distance(
    sources: Sequence[Location],
    destinations: Sequence[Location],
    supply: Sequence[float],
    demand: Sequence[float],
    *,
    max_iterations: Optional[int] = None,
) -> List[Allocation]:
    return solve(
        sources,
        destinations,
        supply,
        demand,
        build_cost_matrix(sources, destinations),
        max_iterations=max_iterations,
    )
