"""Route ordering by selectable criterion and sorting algorithm.

Criteria and algorithms are independent strategy tables so every
combination can be exercised on its own. Quicksort and heapsort are not
stable; mergesort and the builtin sort keep the input order of ties.
"""

from __future__ import annotations

from enum import Enum
from typing import Callable, Dict, List, Sequence, TypeVar

from .models import Route

T = TypeVar("T")
KeyFunc = Callable[[T], float]


class SortCriterion(str, Enum):
    DISTANCE = "distance"
    TIME = "time"
    LANDMARK_COUNT = "landmark_count"
    WEIGHTED_COMBINATION = "weighted_combination"


class SortAlgorithm(str, Enum):
    QUICKSORT = "quicksort"
    MERGESORT = "mergesort"
    HEAPSORT = "heapsort"
    BUILTIN = "builtin"


def weighted_score(route: Route) -> float:
    # Minutes are scaled by 10 to sit on roughly the same scale as meters.
    return 0.6 * route.total_distance + 0.4 * (route.total_time * 10)


CRITERIA: Dict[SortCriterion, Callable[[Route], float]] = {
    SortCriterion.DISTANCE: lambda route: route.total_distance,
    SortCriterion.TIME: lambda route: route.total_time,
    SortCriterion.LANDMARK_COUNT: lambda route: len(route.landmarks),
    SortCriterion.WEIGHTED_COMBINATION: weighted_score,
}


def _partition(items: List[T], low: int, high: int, key: KeyFunc) -> int:
    pivot = key(items[high])
    i = low - 1
    for j in range(low, high):
        if key(items[j]) <= pivot:
            i += 1
            items[i], items[j] = items[j], items[i]
    items[i + 1], items[high] = items[high], items[i + 1]
    return i + 1


def _quicksort(items: List[T], low: int, high: int, key: KeyFunc) -> None:
    # Recurse into the smaller half and loop on the larger to bound stack depth.
    while low < high:
        pivot_index = _partition(items, low, high, key)
        if pivot_index - low < high - pivot_index:
            _quicksort(items, low, pivot_index - 1, key)
            low = pivot_index + 1
        else:
            _quicksort(items, pivot_index + 1, high, key)
            high = pivot_index - 1


def quicksort(items: List[T], key: KeyFunc) -> None:
    """In-place quicksort with Lomuto partitioning around the last element."""
    if len(items) > 1:
        _quicksort(items, 0, len(items) - 1, key)


def _merge(items: List[T], buffer: List[T], left: int, mid: int, right: int, key: KeyFunc) -> None:
    buffer[left : right + 1] = items[left : right + 1]
    i, j, k = left, mid + 1, left
    while i <= mid and j <= right:
        # "<=" takes from the left run on ties, which keeps the sort stable.
        if key(buffer[i]) <= key(buffer[j]):
            items[k] = buffer[i]
            i += 1
        else:
            items[k] = buffer[j]
            j += 1
        k += 1
    while i <= mid:
        items[k] = buffer[i]
        i += 1
        k += 1
    while j <= right:
        items[k] = buffer[j]
        j += 1
        k += 1


def _mergesort(items: List[T], buffer: List[T], left: int, right: int, key: KeyFunc) -> None:
    if left < right:
        mid = left + (right - left) // 2
        _mergesort(items, buffer, left, mid, key)
        _mergesort(items, buffer, mid + 1, right, key)
        _merge(items, buffer, left, mid, right, key)


def mergesort(items: List[T], key: KeyFunc) -> None:
    """In-place stable top-down mergesort."""
    if len(items) > 1:
        _mergesort(items, list(items), 0, len(items) - 1, key)


def _sift_down(items: List[T], size: int, root: int, key: KeyFunc) -> None:
    while True:
        largest = root
        left = 2 * root + 1
        right = left + 1
        if left < size and key(items[left]) > key(items[largest]):
            largest = left
        if right < size and key(items[right]) > key(items[largest]):
            largest = right
        if largest == root:
            return
        items[root], items[largest] = items[largest], items[root]
        root = largest


def heapsort(items: List[T], key: KeyFunc) -> None:
    """In-place heapsort on a binary max-heap."""
    size = len(items)
    for root in range(size // 2 - 1, -1, -1):
        _sift_down(items, size, root, key)
    for end in range(size - 1, 0, -1):
        items[0], items[end] = items[end], items[0]
        _sift_down(items, end, 0, key)


def builtin_sort(items: List[T], key: KeyFunc) -> None:
    items.sort(key=key)


ALGORITHMS: Dict[SortAlgorithm, Callable[[List[T], KeyFunc], None]] = {
    SortAlgorithm.QUICKSORT: quicksort,
    SortAlgorithm.MERGESORT: mergesort,
    SortAlgorithm.HEAPSORT: heapsort,
    SortAlgorithm.BUILTIN: builtin_sort,
}


def sort_routes(routes: Sequence[Route], criterion: SortCriterion, algorithm: SortAlgorithm) -> List[Route]:
    """Return a sorted copy of ``routes``; the input is left untouched."""
    ordered = list(routes)
    ALGORITHMS[algorithm](ordered, CRITERIA[criterion])
    return ordered
