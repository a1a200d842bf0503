import csv
import io

import pytest

from src.courier_routing.models.domain import Coordinate, Stop
from src.courier_routing.services.export.geojson import optimized_route_to_geojson
from src.courier_routing.services.outputs.formatter import (
    format_distance,
    format_duration,
    format_travel_time,
    optimized_route_to_csv,
    optimized_route_to_json,
)
from src.courier_routing.services.routing.optimizer import optimize_route


@pytest.mark.parametrize(
    "km, expected",
    [(0.5, "500 m"), (0.123, "123 m"), (0, "0 m"), (1, "1.0 km"), (3.456, "3.5 km"), (5.678, "5.7 km")],
)
def test_format_distance(km, expected):
    assert format_distance(km) == expected


@pytest.mark.parametrize(
    "minutes, expected",
    [(45, "45 min"), (0, "0 min"), (45.7, "46 min"), (90, "1h 30min"), (125.4, "2h 5min")],
)
def test_format_duration(minutes, expected):
    assert format_duration(minutes) == expected


def test_format_travel_time():
    assert format_travel_time(42) == "42 min"
    assert format_travel_time(135) == "2h 15min"


def _route():
    stops = [
        Stop(id="1", name="Colis #2341", address="Cocody Riviera 3", lat=5.3602, lng=-3.9934),
        Stop(id="2", name="Colis #2342", address="Plateau", lat=5.3207, lng=-4.0167, priority="high"),
        Stop(id="3", name="Colis #2343", address="Marcory Zone 4", lat=5.3012, lng=-3.9858),
    ]
    return optimize_route(stops, Coordinate(lat=5.34, lng=-4.00))


def test_route_json_uses_client_field_names():
    payload = optimized_route_to_json(_route())

    assert set(payload) == {"stops", "totalDistance", "totalDuration", "savings", "segments"}
    assert payload["stops"][0]["id"] == "2"
    assert payload["segments"][0]["from"]["id"] == "current-location"
    assert "estimatedDuration" in payload["stops"][0]


def test_route_csv_has_one_row_per_segment():
    route = _route()
    rows = list(csv.DictReader(io.StringIO(optimized_route_to_csv(route))))

    assert len(rows) == len(route.segments) == 3
    assert rows[0]["sequence"] == "1"
    assert rows[0]["from_id"] == "current-location"
    assert rows[-1]["to_id"] == route.stops[-1].id


def test_route_geojson_contains_line_and_points():
    route = _route()
    collection = optimized_route_to_geojson(route)

    assert collection["type"] == "FeatureCollection"
    line, *points = collection["features"]
    assert line["geometry"]["type"] == "LineString"
    assert len(line["geometry"]["coordinates"]) == 4
    # GeoJSON coordinates are lon,lat
    assert tuple(line["geometry"]["coordinates"][0]) == (-4.00, 5.34)

    assert [p["properties"]["kind"] for p in points] == ["start", "stop", "stop", "stop"]
    assert [p["properties"]["sequence"] for p in points] == [0, 1, 2, 3]
    assert points[1]["properties"]["id"] == "2"
    assert points[1]["properties"]["color"] == "#EF4444"


def test_geojson_for_single_stop_has_no_line():
    route = optimize_route([Stop(id="a", name="A", address="", lat=5.3, lng=-4.0)])
    collection = optimized_route_to_geojson(route)

    assert [f["geometry"]["type"] for f in collection["features"]] == ["Point"]
