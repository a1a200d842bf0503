"""Travel time estimates from straight-line distances."""

from __future__ import annotations

import math

from ...config import settings


def estimate_duration(distance_km: float, speed_kmh: float | None = None) -> float:
    """Minutes needed to cover ``distance_km`` at the route-planning speed."""
    speed = speed_kmh if speed_kmh is not None else settings.route_average_speed_kmh
    return (distance_km / speed) * 60


def estimate_travel_time(distance_km: float, vehicle_type: str | None = None) -> int:
    """Point-to-point travel time in whole minutes for a vehicle type.

    Unknown vehicle types use the default vehicle speed. Partial minutes are
    rounded up.
    """
    speed = settings.speed_for_vehicle(vehicle_type or settings.default_vehicle_type)
    return math.ceil((distance_km / speed) * 60)
