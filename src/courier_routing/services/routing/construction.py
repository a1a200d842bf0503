"""Priority-aware nearest-neighbor tour construction."""

from __future__ import annotations

import math
from typing import Sequence

from ...models.domain import Stop
from .matrix import DistanceMatrix


def nearest_neighbor_order(
    stops: Sequence[Stop],
    matrix: DistanceMatrix,
    start_index: int = 0,
) -> list[int]:
    """Build an initial visiting order as a list of indices into ``stops``.

    The tour starts at ``start_index``. High priority stops follow in their
    input order, regardless of where they are. Every remaining position then
    goes to the unvisited stop closest to the last one visited; on equal
    distances the lowest index wins.
    """
    n = len(stops)
    if n <= 2:
        return list(range(n))

    visited = [False] * n
    order = [start_index]
    visited[start_index] = True
    current = start_index

    for index, stop in enumerate(stops):
        if stop.priority == "high" and not visited[index]:
            visited[index] = True
            order.append(index)
            current = index

    while len(order) < n:
        nearest_index = -1
        nearest_distance = math.inf
        for candidate in range(n):
            if not visited[candidate] and matrix[current][candidate] < nearest_distance:
                nearest_distance = matrix[current][candidate]
                nearest_index = candidate
        visited[nearest_index] = True
        order.append(nearest_index)
        current = nearest_index

    return order
