"""Per-driver navigation route cache with deviation detection."""

from __future__ import annotations

import logging
import time
from typing import Callable

from ...config import settings
from ...errors import RoutingServiceError
from ...models.domain import Coordinate, RouteResult
from ..geospatial import haversine_km, haversine_m
from .osrm_client import OSRMClient, build_fallback_route

logger = logging.getLogger(__name__)

# Only every Nth polyline point is checked against the driver position
DEVIATION_SAMPLE_STEP = 5


class RouteTracker:
    """Holds the last fetched route for one driver session.

    Each tracker owns its cache, so concurrent drivers never share state.
    """

    def __init__(
        self,
        client: OSRMClient | None = None,
        *,
        deviation_threshold_m: float | None = None,
        refetch_cooldown_seconds: float | None = None,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self._client = client
        self.deviation_threshold_m = (
            deviation_threshold_m if deviation_threshold_m is not None else settings.route_deviation_threshold_m
        )
        self.refetch_cooldown_seconds = (
            refetch_cooldown_seconds
            if refetch_cooldown_seconds is not None
            else settings.route_refetch_cooldown_seconds
        )
        self._clock = clock
        self.cached_route: RouteResult | None = None
        self.last_fetch_time: float | None = None

    @property
    def client(self) -> OSRMClient:
        if self._client is None:
            self._client = OSRMClient()
        return self._client

    def fetch(self, origin: Coordinate, destination: Coordinate) -> RouteResult:
        """Fetch a road route and cache it, falling back to a straight line."""
        try:
            result = self.client.route(origin, destination)
        except (RoutingServiceError, ValueError) as e:
            logger.warning(f"OSRM route unavailable, using straight-line fallback: {e}")
            result = build_fallback_route(origin, destination)
        self.cached_route = result
        self.last_fetch_time = self._clock()
        return result

    def is_deviating(self, position: Coordinate) -> bool:
        """True when the driver is farther than the threshold from the cached route."""
        if self.cached_route is None or not self.cached_route.coordinates:
            return False

        coordinates = self.cached_route.coordinates
        min_distance = float("inf")
        for lat, lng in coordinates[::DEVIATION_SAMPLE_STEP]:
            min_distance = min(min_distance, haversine_m(position.lat, position.lng, lat, lng))
            if min_distance < self.deviation_threshold_m:
                return False

        last_lat, last_lng = coordinates[-1]
        if haversine_m(position.lat, position.lng, last_lat, last_lng) < self.deviation_threshold_m:
            return False

        return min_distance >= self.deviation_threshold_m

    def should_refetch(self, position: Coordinate) -> bool:
        if self.cached_route is None or self.last_fetch_time is None:
            return True
        elapsed = self._clock() - self.last_fetch_time
        return self.is_deviating(position) and elapsed > self.refetch_cooldown_seconds

    def clear(self) -> None:
        self.cached_route = None
        self.last_fetch_time = None


def remaining_distance_km(position: Coordinate, destination: Coordinate) -> float:
    return haversine_km(position.lat, position.lng, destination.lat, destination.lng)
