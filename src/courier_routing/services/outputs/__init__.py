"""Route output formatting."""

from .formatter import (
    format_distance,
    format_duration,
    format_travel_time,
    optimized_route_to_csv,
    optimized_route_to_json,
)

__all__ = [
    "format_distance",
    "format_duration",
    "format_travel_time",
    "optimized_route_to_json",
    "optimized_route_to_csv",
]
