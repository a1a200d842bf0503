from pathlib import Path

import pytest
from fastapi.testclient import TestClient

from src.courier_routing.errors import StopsUnavailableError
from src.courier_routing.main import create_app
from src.courier_routing.models.domain import Stop


def _stop(sid: str, lat: float, lng: float, priority: str | None = None) -> Stop:
    return Stop(
        id=sid,
        name=f"Colis #{sid}",
        address=f"Adresse {sid}",
        lat=lat,
        lng=lng,
        priority=priority,
        estimated_duration=5,
    )


class DownOSRM:
    def route(self, origin, destination):
        raise ValueError("OSRM base URL is not configured.")


@pytest.fixture
def api_client(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> TestClient:
    app = create_app()
    client = TestClient(app)

    # ensure filesystem writes go to tmpdir
    from src.courier_routing.services.routing import service as routing_service
    from src.courier_routing.persistence.filesystem import FileStorage

    monkeypatch.setattr(routing_service, "FileStorage", lambda: FileStorage(root=tmp_path))

    return client


def test_root_and_health(api_client: TestClient):
    root = api_client.get("/")
    assert root.status_code == 200
    assert root.json()["health"] == "/api/health"

    health = api_client.get("/api/health")
    assert health.status_code == 200
    assert health.json() == {"status": "ok"}


def test_optimize_endpoint_with_request_stops(api_client: TestClient):
    body = {
        "stops": [
            {"id": "a", "name": "Colis #1", "address": "Cocody", "lat": 5.50, "lng": -4.00},
            {"id": "c", "name": "Colis #3", "address": "Marcory", "lat": 5.30, "lng": -4.00},
            {
                "id": "b",
                "name": "Colis #2",
                "address": "Plateau",
                "lat": 5.40,
                "lng": -4.00,
                "priority": "normal",
                "timeWindow": {"start": "09:00", "end": "11:00"},
                "estimatedDuration": 10,
            },
        ]
    }

    response = api_client.post("/api/routes/optimize", json=body)

    assert response.status_code == 200
    payload = response.json()
    assert [stop["id"] for stop in payload["stops"]] == ["a", "b", "c"]
    assert payload["totalDistance"] > 0
    assert payload["totalDuration"] >= 20
    assert payload["savings"]["percentage"] > 0
    assert payload["segments"][0]["from"]["id"] == "a"
    assert payload["segments"][0]["to"]["id"] == "b"
    assert payload["stops"][1]["timeWindow"] == {"start": "09:00", "end": "11:00"}
    assert payload["metadata"]["source"] == "request"


def test_optimize_endpoint_loads_driver_deliveries(api_client: TestClient, monkeypatch: pytest.MonkeyPatch):
    from src.courier_routing.services.routing import service as routing_service

    stops = [_stop("1", 5.3602, -3.9934), _stop("2", 5.3207, -4.0167, "high"), _stop("3", 5.3012, -3.9858)]
    monkeypatch.setattr(routing_service, "get_pending_stops", lambda driver_id: stops)

    response = api_client.post(
        "/api/routes/optimize",
        json={"driverId": "driver-7", "currentLocation": {"lat": 5.34, "lng": -4.0}, "persist": True},
    )

    assert response.status_code == 200
    payload = response.json()
    assert payload["stops"][0]["id"] == "2"
    assert payload["segments"][0]["from"]["id"] == "current-location"
    assert Path(payload["metadata"]["output_dir"]).exists()


def test_optimize_endpoint_requires_stops_or_driver(api_client: TestClient):
    response = api_client.post("/api/routes/optimize", json={"persist": False})

    assert response.status_code == 422


def test_optimize_endpoint_rejects_invalid_coordinates(api_client: TestClient):
    response = api_client.post("/api/routes/optimize", json={"stops": [{"id": "a", "lat": 123.0, "lng": 0.0}]})

    assert response.status_code == 422


def test_optimize_endpoint_reports_unavailable_backend(api_client: TestClient, monkeypatch: pytest.MonkeyPatch):
    from src.courier_routing.services.routing import service as routing_service

    def unavailable(driver_id):
        raise StopsUnavailableError(driver_id, "Supabase client is not configured")

    monkeypatch.setattr(routing_service, "get_pending_stops", unavailable)

    response = api_client.post("/api/routes/optimize", json={"driverId": "driver-7"})

    assert response.status_code == 503
    assert "driver-7" in response.json()["detail"]


def test_pending_stops_endpoint(api_client: TestClient, monkeypatch: pytest.MonkeyPatch):
    from src.courier_routing.api.routes import routes as routes_module

    monkeypatch.setattr(
        routes_module,
        "get_pending_stops",
        lambda driver_id: [_stop("1", 5.3602, -3.9934), _stop("2", 5.3207, -4.0167, "high")],
    )

    response = api_client.get("/api/routes/pending/driver-7")

    assert response.status_code == 200
    payload = response.json()
    assert payload["driver_id"] == "driver-7"
    assert [stop["id"] for stop in payload["stops"]] == ["1", "2"]
    assert payload["stops"][1]["priority"] == "high"


def test_navigation_endpoint_falls_back_to_straight_line(api_client: TestClient, monkeypatch: pytest.MonkeyPatch):
    from src.courier_routing.services.routing import service as routing_service
    from src.courier_routing.services.routing.tracking import RouteTracker

    monkeypatch.setattr(routing_service, "RouteTracker", lambda: RouteTracker(DownOSRM()))

    response = api_client.post(
        "/api/routes/navigation",
        json={
            "origin": {"lat": 5.3207, "lng": -4.0167},
            "destination": {"lat": 5.3602, "lng": -3.9934},
            "vehicleType": "moto",
        },
    )

    assert response.status_code == 200
    payload = response.json()
    assert payload["source"] == "fallback"
    assert len(payload["coordinates"]) == 2
    # ~5.1 km at 25 km/h
    assert payload["estimated_travel_min"] == 13


def test_pending_stops_endpoint_skips_corrupt_delivery_rows(api_client: TestClient, monkeypatch: pytest.MonkeyPatch):
    from src.courier_routing.data import deliveries_repository

    class Response:
        data = [
            {"id": "d1", "delivery_latitude": "abc", "delivery_longitude": "1"},
            {"id": "d2", "tracking_code": "LT-9", "delivery_latitude": 5.3207, "delivery_longitude": -4.0167},
        ]

    class Query:
        not_ = property(lambda self: self)

        def __getattr__(self, name):
            return lambda *args, **kwargs: self

        def execute(self):
            return Response()

    class Client:
        def table(self, name):
            return Query()

    monkeypatch.setattr(deliveries_repository, "get_supabase_client", lambda: Client())

    response = api_client.get("/api/routes/pending/driver-7")

    assert response.status_code == 200
    assert [stop["id"] for stop in response.json()["stops"]] == ["d2"]


def test_navigation_endpoint_answers_when_osrm_errors(api_client: TestClient, monkeypatch: pytest.MonkeyPatch):
    from src.courier_routing.errors import RoutingServiceError
    from src.courier_routing.services.routing import service as routing_service
    from src.courier_routing.services.routing.tracking import RouteTracker

    class FailingOSRM:
        def route(self, origin, destination):
            raise RoutingServiceError("OSRM error: 500")

    monkeypatch.setattr(routing_service, "RouteTracker", lambda: RouteTracker(FailingOSRM()))

    response = api_client.post(
        "/api/routes/navigation",
        json={"origin": {"lat": 5.3207, "lng": -4.0167}, "destination": {"lat": 5.3602, "lng": -3.9934}},
    )

    assert response.status_code == 200
    payload = response.json()
    assert payload["source"] == "fallback"
    assert payload["remaining_distance_km"] == pytest.approx(5.09, abs=0.01)
    assert payload["display"]["remaining"] == "5.1 km"
