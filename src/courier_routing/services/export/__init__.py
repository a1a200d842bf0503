"""Export services."""

from .geojson import optimized_route_to_geojson, save_geojson

__all__ = [
    "optimized_route_to_geojson",
    "save_geojson",
]
