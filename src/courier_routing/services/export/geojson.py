"""GeoJSON export of optimized routes for map overlays."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Dict, List

from shapely.geometry import LineString, Point, mapping

from ...models.domain import OptimizedRoute, Stop

ROUTE_COLOR = "#3B82F6"
START_COLOR = "#10B981"
HIGH_PRIORITY_COLOR = "#EF4444"
STOP_COLOR = "#F59E0B"


def _stop_color(stop: Stop) -> str:
    if stop.is_current_location:
        return START_COLOR
    if stop.priority == "high":
        return HIGH_PRIORITY_COLOR
    return STOP_COLOR


def _tour(route: OptimizedRoute) -> List[Stop]:
    """Stops in visiting order, including the synthetic start when segments carry it."""
    if route.segments:
        return [route.segments[0].from_stop, *(segment.to_stop for segment in route.segments)]
    return list(route.stops)


def optimized_route_to_geojson(route: OptimizedRoute) -> Dict[str, Any]:
    """Build a FeatureCollection with the route line and one point per stop.

    GeoJSON uses lon,lat order (x,y).
    """
    tour = _tour(route)
    features: List[Dict[str, Any]] = []

    if len(tour) >= 2:
        line = LineString([(stop.lng, stop.lat) for stop in tour])
        features.append(
            {
                "type": "Feature",
                "geometry": mapping(line),
                "properties": {
                    "kind": "route",
                    "color": ROUTE_COLOR,
                    "total_distance_km": route.total_distance,
                    "total_duration_min": route.total_duration,
                },
            }
        )

    sequence = 0
    for stop in tour:
        if not stop.is_current_location:
            sequence += 1
        features.append(
            {
                "type": "Feature",
                "geometry": mapping(Point(stop.lng, stop.lat)),
                "properties": {
                    "kind": "start" if stop.is_current_location else "stop",
                    "id": stop.id,
                    "name": stop.name,
                    "address": stop.address,
                    "sequence": 0 if stop.is_current_location else sequence,
                    "priority": stop.priority,
                    "type": stop.type,
                    "color": _stop_color(stop),
                },
            }
        )

    return {"type": "FeatureCollection", "features": features}


def save_geojson(data: Dict[str, Any], path: Path) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    with path.open("w", encoding="utf-8") as handle:
        json.dump(data, handle, ensure_ascii=False, indent=2)
