"""Display formatting and serializers for optimized routes."""

from __future__ import annotations

import csv
import io
import math

from ...models.domain import OptimizedRoute, Stop


def _round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def format_distance(km: float) -> str:
    if km < 1:
        return f"{_round_half_up(km * 1000)} m"
    return f"{km:.1f} km"


def format_duration(minutes: float) -> str:
    if minutes < 60:
        return f"{_round_half_up(minutes)} min"
    hours = int(minutes // 60)
    mins = _round_half_up(minutes % 60)
    return f"{hours}h {mins}min"


def format_travel_time(minutes: int) -> str:
    """Whole-minute variant used for navigation estimates."""
    if minutes < 60:
        return f"{minutes} min"
    return f"{minutes // 60}h {minutes % 60}min"


def stop_to_json(stop: Stop) -> dict:
    return {
        "id": stop.id,
        "name": stop.name,
        "address": stop.address,
        "lat": stop.lat,
        "lng": stop.lng,
        "type": stop.type,
        "priority": stop.priority,
        "timeWindow": (
            {"start": stop.time_window.start, "end": stop.time_window.end} if stop.time_window else None
        ),
        "estimatedDuration": stop.estimated_duration,
    }


def optimized_route_to_json(route: OptimizedRoute) -> dict:
    return {
        "stops": [stop_to_json(stop) for stop in route.stops],
        "totalDistance": route.total_distance,
        "totalDuration": route.total_duration,
        "savings": {
            "distance": route.savings.distance,
            "time": route.savings.time,
            "percentage": route.savings.percentage,
        },
        "segments": [
            {
                "from": stop_to_json(segment.from_stop),
                "to": stop_to_json(segment.to_stop),
                "distance": segment.distance,
                "duration": segment.duration,
            }
            for segment in route.segments
        ],
    }


def optimized_route_to_csv(route: OptimizedRoute) -> str:
    buffer = io.StringIO()
    fieldnames = [
        "sequence",
        "from_id",
        "from_name",
        "to_id",
        "to_name",
        "to_address",
        "distance_km",
        "duration_min",
    ]
    writer = csv.DictWriter(buffer, fieldnames=fieldnames)
    writer.writeheader()
    for sequence, segment in enumerate(route.segments, start=1):
        writer.writerow(
            {
                "sequence": sequence,
                "from_id": segment.from_stop.id,
                "from_name": segment.from_stop.name,
                "to_id": segment.to_stop.id,
                "to_name": segment.to_stop.name,
                "to_address": segment.to_stop.address,
                "distance_km": segment.distance,
                "duration_min": segment.duration,
            }
        )
    return buffer.getvalue()
