"""Pairwise great-circle distance matrix over a list of stops."""

from __future__ import annotations

from typing import Sequence

from ...models.domain import Stop
from ..geospatial import haversine_km

DistanceMatrix = list[list[float]]


def build_distance_matrix(stops: Sequence[Stop]) -> DistanceMatrix:
    """Return an N x N symmetric matrix of haversine distances in km.

    The diagonal is exactly zero. Each pair is computed once and mirrored.
    """
    n = len(stops)
    matrix: DistanceMatrix = [[0.0] * n for _ in range(n)]
    for i in range(n):
        for j in range(i + 1, n):
            distance = haversine_km(stops[i].lat, stops[i].lng, stops[j].lat, stops[j].lng)
            matrix[i][j] = distance
            matrix[j][i] = distance
    return matrix


def route_distance(order: Sequence[int], matrix: DistanceMatrix) -> float:
    """Sum of consecutive legs along ``order`` (indices into ``matrix``)."""
    return sum(matrix[order[k]][order[k + 1]] for k in range(len(order) - 1))
