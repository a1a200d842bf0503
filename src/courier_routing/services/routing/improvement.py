"""2-opt local improvement of a visiting order."""

from __future__ import annotations

from typing import Sequence

from .matrix import DistanceMatrix


def two_opt(order: Sequence[int], matrix: DistanceMatrix, fixed_prefix: int = 1) -> list[int]:
    """Reverse sub-tours while doing so strictly shortens the route.

    ``order`` holds indices into ``matrix``. The first ``fixed_prefix``
    positions (at least the start) and the last position never move. Scanning
    continues after each reversal and full passes repeat until one finds no
    improving swap.
    """
    route = list(order)
    n = len(route)
    if n <= 3:
        return route

    first = max(1, fixed_prefix)
    improved = True
    while improved:
        improved = False
        for i in range(first, n - 2):
            for j in range(i + 1, n - 1):
                a, b, c, d = route[i - 1], route[i], route[j], route[j + 1]
                current = matrix[a][b] + matrix[c][d]
                swapped = matrix[a][c] + matrix[b][d]
                if swapped < current:
                    route[i : j + 1] = reversed(route[i : j + 1])
                    improved = True
    return route
