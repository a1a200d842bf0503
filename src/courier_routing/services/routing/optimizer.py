"""Delivery route optimization for a single driver.

The visiting order comes from a priority-aware nearest-neighbor construction
followed by 2-opt improvement over a haversine distance matrix. Results carry
per-leg segments and the savings measured against the order the stops were
given in.
"""

from __future__ import annotations

import logging
import math
from typing import Sequence

from ...config import settings
from ...models.domain import (
    Coordinate,
    OptimizedRoute,
    RouteSavings,
    RouteSegment,
    Stop,
    current_location_stop,
)
from ..geospatial import haversine_km
from .construction import nearest_neighbor_order
from .duration import estimate_duration
from .improvement import two_opt
from .matrix import DistanceMatrix, build_distance_matrix, route_distance

logger = logging.getLogger(__name__)


def _round_half_up(value: float, digits: int = 0) -> float:
    factor = 10**digits
    return math.floor(value * factor + 0.5) / factor


def _priority_prefix_length(stops: Sequence[Stop], order: Sequence[int]) -> int:
    """Number of leading positions (start included) held by the start and high priority stops."""
    length = 1
    for index in order[1:]:
        if stops[index].priority != "high":
            break
        length += 1
    return length


def _respects_priorities(stops: Sequence[Stop], order: Sequence[int]) -> bool:
    seen_regular = False
    for index in order[1:]:
        if stops[index].priority == "high":
            if seen_regular:
                return False
        else:
            seen_regular = True
    return True


def _best_order(stops: Sequence[Stop], matrix: DistanceMatrix) -> list[int]:
    """Pick the shortest improved tour among the construction and the input order.

    The input order only competes when it already keeps high priority stops
    ahead of the others, so the result never loses the priority rule.
    """
    identity = list(range(len(stops)))
    constructed = nearest_neighbor_order(stops, matrix, start_index=0)
    best = two_opt(constructed, matrix, fixed_prefix=_priority_prefix_length(stops, constructed))
    best_distance = route_distance(best, matrix)

    if constructed != identity and _respects_priorities(stops, identity):
        candidate = two_opt(identity, matrix, fixed_prefix=_priority_prefix_length(stops, identity))
        candidate_distance = route_distance(candidate, matrix)
        if candidate_distance < best_distance:
            logger.debug(
                f"Input order beats nearest-neighbor tour ({candidate_distance:.3f} km vs {best_distance:.3f} km)"
            )
            best, best_distance = candidate, candidate_distance
    return best


def _build_segments(tour: Sequence[Stop]) -> list[RouteSegment]:
    segments: list[RouteSegment] = []
    for from_stop, to_stop in zip(tour, tour[1:]):
        distance = haversine_km(from_stop.lat, from_stop.lng, to_stop.lat, to_stop.lng)
        segments.append(
            RouteSegment(
                from_stop=from_stop,
                to_stop=to_stop,
                distance=_round_half_up(distance, 1),
                duration=int(_round_half_up(estimate_duration(distance))),
            )
        )
    return segments


def optimize_route(
    stops: Sequence[Stop],
    current_location: Coordinate | None = None,
) -> OptimizedRoute:
    """Compute a short visiting order for ``stops``.

    When ``current_location`` is given the tour starts there; the synthetic
    start stop is counted in distances and segments but left out of the
    returned stops. Otherwise the first stop in ``stops`` is the fixed start.
    Stops must carry numeric coordinates; the input is never modified.
    """
    if not stops:
        return OptimizedRoute.empty()

    start = current_location_stop(current_location) if current_location is not None else None
    working: list[Stop] = [start, *stops] if start is not None else list(stops)

    matrix = build_distance_matrix(working)
    naive_distance = route_distance(range(len(working)), matrix)

    order = _best_order(working, matrix)
    tour = [working[index] for index in order]
    optimized_stops = [stop for stop in tour if stop is not start]

    final_tour = [start, *optimized_stops] if start is not None else optimized_stops
    final_matrix = build_distance_matrix(final_tour)
    optimized_distance = route_distance(range(len(final_tour)), final_matrix)

    segments = _build_segments(final_tour)

    dwell_minutes = sum(
        stop.estimated_duration if stop.estimated_duration else settings.default_stop_duration_min
        for stop in optimized_stops
    )
    total_duration = _round_half_up(estimate_duration(optimized_distance)) + dwell_minutes

    distance_saved = _round_half_up(naive_distance - optimized_distance, 1)
    time_saved = int(_round_half_up(estimate_duration(distance_saved)))
    percentage = int(_round_half_up(distance_saved / naive_distance * 100)) if naive_distance > 0 else 0

    logger.debug(
        f"Optimized {len(optimized_stops)} stops: {naive_distance:.2f} km -> {optimized_distance:.2f} km "
        f"({len(segments)} segments, start={'current location' if start else working[0].id})"
    )

    return OptimizedRoute(
        stops=optimized_stops,
        total_distance=_round_half_up(optimized_distance, 1),
        total_duration=total_duration,
        savings=RouteSavings(
            distance=max(0.0, distance_saved),
            time=max(0, time_saved),
            percentage=max(0, percentage),
        ),
        segments=segments,
    )
