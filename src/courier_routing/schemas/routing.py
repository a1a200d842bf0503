"""Routing request/response schemas."""

from __future__ import annotations

from typing import List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, model_validator

from ..models.domain import Coordinate, Stop, TimeWindow


class CoordinateModel(BaseModel):
    lat: float = Field(..., ge=-90, le=90)
    lng: float = Field(..., ge=-180, le=180)

    def to_domain(self) -> Coordinate:
        return Coordinate(lat=self.lat, lng=self.lng)


class TimeWindowModel(BaseModel):
    start: str = Field(..., pattern=r"^\d{2}:\d{2}$", description="Window start, HH:mm")
    end: str = Field(..., pattern=r"^\d{2}:\d{2}$", description="Window end, HH:mm")


class StopModel(BaseModel):
    """A stop as exchanged with the driver app (camelCase or snake_case keys)."""

    model_config = ConfigDict(populate_by_name=True)

    id: str
    name: str = ""
    address: str = ""
    lat: float = Field(..., ge=-90, le=90)
    lng: float = Field(..., ge=-180, le=180)
    priority: Optional[Literal["high", "normal", "low"]] = None
    time_window: Optional[TimeWindowModel] = Field(default=None, alias="timeWindow")
    estimated_duration: Optional[float] = Field(default=None, ge=0, alias="estimatedDuration")
    type: Literal["pickup", "delivery"] = "delivery"

    def to_domain(self) -> Stop:
        return Stop(
            id=self.id,
            name=self.name,
            address=self.address,
            lat=self.lat,
            lng=self.lng,
            type=self.type,
            priority=self.priority,
            time_window=TimeWindow(self.time_window.start, self.time_window.end) if self.time_window else None,
            estimated_duration=self.estimated_duration,
        )

    @classmethod
    def from_domain(cls, stop: Stop) -> "StopModel":
        return cls(
            id=stop.id,
            name=stop.name,
            address=stop.address,
            lat=stop.lat,
            lng=stop.lng,
            type=stop.type,
            priority=stop.priority,
            time_window=(
                TimeWindowModel(start=stop.time_window.start, end=stop.time_window.end)
                if stop.time_window
                else None
            ),
            estimated_duration=stop.estimated_duration,
        )


class RouteOptimizationRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    driver_id: Optional[str] = Field(
        default=None,
        alias="driverId",
        description="Driver whose pending deliveries are optimized when no stops are given.",
    )
    stops: Optional[List[StopModel]] = None
    current_location: Optional[CoordinateModel] = Field(default=None, alias="currentLocation")
    persist: bool = False
    run_label: Optional[str] = Field(default=None, description="Friendly name for persisted outputs.")

    @model_validator(mode="after")
    def _require_source(self) -> "RouteOptimizationRequest":
        if self.stops is None and not self.driver_id:
            raise ValueError("Either stops or driver_id must be provided.")
        if self.stops is not None:
            ids = [stop.id for stop in self.stops]
            if len(ids) != len(set(ids)):
                raise ValueError("Stop ids must be unique.")
        return self


class RouteSavingsModel(BaseModel):
    distance: float
    time: int
    percentage: int


class RouteSegmentModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    from_stop: StopModel = Field(..., alias="from")
    to_stop: StopModel = Field(..., alias="to")
    distance: float
    duration: int


class OptimizedRouteResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    stops: List[StopModel]
    total_distance: float = Field(..., alias="totalDistance")
    total_duration: float = Field(..., alias="totalDuration")
    savings: RouteSavingsModel
    segments: List[RouteSegmentModel]
    display: dict[str, str] = Field(default_factory=dict)
    metadata: dict = Field(default_factory=dict)


class PendingStopsResponse(BaseModel):
    driver_id: str
    stops: List[StopModel]


class NavigationRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    origin: CoordinateModel
    destination: CoordinateModel
    vehicle_type: Optional[str] = Field(default=None, alias="vehicleType")


class NavigationResponse(BaseModel):
    coordinates: List[tuple[float, float]]
    distance_meters: float
    duration_seconds: float
    source: Literal["osrm", "fallback"]
    estimated_travel_min: int
    remaining_distance_km: float = Field(..., description="Straight-line distance left to the destination.")
    display: dict[str, str] = Field(default_factory=dict)
