"""Domain models for delivery stops and optimized routes."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Literal, Optional

Priority = Literal["high", "normal", "low"]
StopType = Literal["pickup", "delivery"]

CURRENT_LOCATION_ID = "current-location"


@dataclass(slots=True, frozen=True)
class Coordinate:
    lat: float
    lng: float


@dataclass(slots=True, frozen=True)
class TimeWindow:
    """Delivery window as ``HH:mm`` strings. Carried through, never enforced."""

    start: str
    end: str


@dataclass(slots=True, frozen=True)
class Stop:
    """A pickup or delivery waypoint the driver has to visit."""

    id: str
    name: str
    address: str
    lat: float
    lng: float
    type: StopType = "delivery"
    priority: Optional[Priority] = None
    time_window: Optional[TimeWindow] = None
    estimated_duration: Optional[float] = None  # minutes at the stop

    @property
    def is_current_location(self) -> bool:
        return self.id == CURRENT_LOCATION_ID


def current_location_stop(location: Coordinate) -> Stop:
    """Synthetic start stop placed at the driver's position."""

    return Stop(
        id=CURRENT_LOCATION_ID,
        name="Position actuelle",
        address="Ma position",
        lat=location.lat,
        lng=location.lng,
        type="pickup",
    )


@dataclass(slots=True)
class RouteSegment:
    from_stop: Stop
    to_stop: Stop
    distance: float  # km, one decimal
    duration: int  # minutes


@dataclass(slots=True)
class RouteSavings:
    distance: float = 0.0
    time: int = 0
    percentage: int = 0


@dataclass(slots=True)
class OptimizedRoute:
    stops: List[Stop]
    total_distance: float
    total_duration: float
    savings: RouteSavings = field(default_factory=RouteSavings)
    segments: List[RouteSegment] = field(default_factory=list)

    @classmethod
    def empty(cls) -> "OptimizedRoute":
        return cls(stops=[], total_distance=0.0, total_duration=0.0)


@dataclass(slots=True)
class RouteResult:
    """Road route between two points, coordinates as ``(lat, lng)`` pairs."""

    coordinates: List[tuple[float, float]]
    distance_meters: float
    duration_seconds: float
    source: Literal["osrm", "fallback"] = "osrm"
