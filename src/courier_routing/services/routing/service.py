"""Routing orchestration service."""

from __future__ import annotations

import logging

from ...data.deliveries_repository import get_pending_stops
from ...models.domain import Coordinate, OptimizedRoute, RouteResult
from ...persistence.filesystem import FileStorage
from ...schemas.routing import (
    NavigationRequest,
    NavigationResponse,
    OptimizedRouteResponse,
    RouteOptimizationRequest,
    RouteSavingsModel,
    RouteSegmentModel,
    StopModel,
)
from ..export.geojson import optimized_route_to_geojson, save_geojson
from ..outputs.formatter import (
    format_distance,
    format_duration,
    format_travel_time,
    optimized_route_to_csv,
    optimized_route_to_json,
)
from .duration import estimate_travel_time
from .optimizer import optimize_route
from .tracking import RouteTracker, remaining_distance_km

logger = logging.getLogger(__name__)


def _to_response(route: OptimizedRoute, metadata: dict) -> OptimizedRouteResponse:
    return OptimizedRouteResponse(
        stops=[StopModel.from_domain(stop) for stop in route.stops],
        total_distance=route.total_distance,
        total_duration=route.total_duration,
        savings=RouteSavingsModel(
            distance=route.savings.distance,
            time=route.savings.time,
            percentage=route.savings.percentage,
        ),
        segments=[
            RouteSegmentModel(
                from_stop=StopModel.from_domain(segment.from_stop),
                to_stop=StopModel.from_domain(segment.to_stop),
                distance=segment.distance,
                duration=segment.duration,
            )
            for segment in route.segments
        ],
        display={
            "total_distance": format_distance(route.total_distance),
            "total_duration": format_duration(route.total_duration),
            "distance_saved": format_distance(route.savings.distance),
            "time_saved": format_duration(route.savings.time),
        },
        metadata=metadata,
    )


def _persist(route: OptimizedRoute, payload: RouteOptimizationRequest, metadata: dict) -> str:
    storage = FileStorage()
    prefix = f"route_{payload.driver_id}" if payload.driver_id else "route"
    run_dir = storage.make_run_directory(prefix=prefix)
    storage.write_json(
        run_dir / "summary.json",
        {
            "run_label": payload.run_label,
            "driver_id": payload.driver_id,
            "metadata": metadata,
            "route": optimized_route_to_json(route),
        },
    )
    storage.write_csv(run_dir / "segments.csv", optimized_route_to_csv(route))
    save_geojson(optimized_route_to_geojson(route), run_dir / "route.geojson")
    logger.info(f"Persisted optimized route to {run_dir}")
    return str(run_dir)


def optimize_driver_route(payload: RouteOptimizationRequest) -> OptimizedRouteResponse:
    """Optimize the given stops, or the driver's pending deliveries when none are given.

    Raises:
        StopsUnavailableError: pending stops could not be loaded.
    """
    if payload.stops is not None:
        stops = [stop.to_domain() for stop in payload.stops]
        source = "request"
    else:
        stops = get_pending_stops(payload.driver_id)
        source = "deliveries"

    current_location = payload.current_location.to_domain() if payload.current_location else None
    route = optimize_route(stops, current_location)

    metadata: dict = {
        "status": "optimized" if route.stops else "empty",
        "source": source,
        "stop_count": len(route.stops),
        "started_from_current_location": current_location is not None,
        "time_windows_enforced": False,
    }
    if payload.persist and route.stops:
        metadata["output_dir"] = _persist(route, payload, metadata)

    logger.info(
        f"Optimized {len(route.stops)} stops from {source}: {route.total_distance} km, "
        f"saved {route.savings.distance} km ({route.savings.percentage}%)"
    )
    return _to_response(route, metadata)


def plan_navigation(payload: NavigationRequest, tracker: RouteTracker | None = None) -> NavigationResponse:
    """Road route between two points with a vehicle-specific travel time."""
    tracker = tracker or RouteTracker()
    origin: Coordinate = payload.origin.to_domain()
    destination: Coordinate = payload.destination.to_domain()
    result: RouteResult = tracker.fetch(origin, destination)

    travel_min = estimate_travel_time(result.distance_meters / 1000, payload.vehicle_type)
    remaining_km = remaining_distance_km(origin, destination)
    return NavigationResponse(
        coordinates=result.coordinates,
        distance_meters=result.distance_meters,
        duration_seconds=result.duration_seconds,
        source=result.source,
        estimated_travel_min=travel_min,
        remaining_distance_km=round(remaining_km, 2),
        display={
            "distance": format_distance(result.distance_meters / 1000),
            "travel_time": format_travel_time(travel_min),
            "remaining": format_distance(remaining_km),
        },
    )
