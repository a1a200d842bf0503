"""HTTP client for fetching road routes from OSRM."""

from __future__ import annotations

import logging
import time

import httpx

from ...config import settings
from ...errors import RoutingServiceError
from ...models.domain import Coordinate, RouteResult
from ..geospatial import haversine_m

logger = logging.getLogger(__name__)


class OSRMClient:
    def __init__(
        self,
        base_url: str | None = None,
        profile: str | None = None,
        timeout: float | None = None,
        max_retries: int | None = None,
        backoff_seconds: float | None = None,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        self.base_url = (base_url or settings.osrm_base_url or "").rstrip("/")
        if not self.base_url:
            raise ValueError("OSRM base URL is not configured.")
        self.profile = profile or settings.osrm_profile
        self.timeout = timeout if timeout is not None else settings.osrm_timeout_seconds
        self.max_retries = max_retries if max_retries is not None else settings.osrm_max_retries
        self.backoff_seconds = backoff_seconds if backoff_seconds is not None else settings.osrm_backoff_seconds
        self._transport = transport

    def _get_client(self) -> httpx.Client:
        return httpx.Client(
            timeout=httpx.Timeout(self.timeout, connect=5.0),
            transport=self._transport,
        )

    def route(self, origin: Coordinate, destination: Coordinate) -> RouteResult:
        """Get the driving route between two points.

        OSRM expects ``lng,lat`` pairs; the returned coordinates are flipped
        back to ``(lat, lng)`` for map polylines.

        Raises:
            RoutingServiceError: OSRM is unreachable after retries or found no route.
        """
        coordinate_str = f"{origin.lng},{origin.lat};{destination.lng},{destination.lat}"
        url = f"{self.base_url}/route/v1/{self.profile}/{coordinate_str}"
        params = {"overview": "full", "geometries": "geojson"}

        client = self._get_client()
        try:
            attempt = 0
            while True:
                try:
                    response = client.get(url, params=params)
                    response.raise_for_status()
                    return _parse_route(response.json())
                except httpx.HTTPStatusError as e:
                    attempt += 1
                    if attempt > self.max_retries:
                        raise RoutingServiceError(f"OSRM error: {e.response.status_code}") from e
                    time.sleep(self.backoff_seconds * attempt)
                except (httpx.TimeoutException, httpx.NetworkError) as e:
                    attempt += 1
                    if attempt > self.max_retries:
                        logger.warning(f"OSRM route request failed after {self.max_retries} retries: {e}")
                        raise RoutingServiceError(
                            f"Failed to reach OSRM service at {self.base_url}: {e}"
                        ) from e
                    wait_time = self.backoff_seconds * (2 ** (attempt - 1))  # Exponential backoff
                    logger.debug(f"OSRM network error, retrying in {wait_time:.1f}s (attempt {attempt}/{self.max_retries})")
                    time.sleep(wait_time)
        finally:
            client.close()


def _parse_route(data: dict) -> RouteResult:
    if data.get("code") != "Ok" or not data.get("routes"):
        raise RoutingServiceError(f"OSRM: no route found ({data.get('message', data.get('code'))})")
    route = data["routes"][0]
    coordinates = [(lat, lng) for lng, lat in route["geometry"]["coordinates"]]
    return RouteResult(
        coordinates=coordinates,
        distance_meters=float(route["distance"]),
        duration_seconds=float(route["duration"]),
        source="osrm",
    )


def build_fallback_route(origin: Coordinate, destination: Coordinate) -> RouteResult:
    """Straight-line route used when OSRM is unavailable."""
    distance = haversine_m(origin.lat, origin.lng, destination.lat, destination.lng)
    return RouteResult(
        coordinates=[(origin.lat, origin.lng), (destination.lat, destination.lng)],
        distance_meters=distance,
        duration_seconds=(distance / 1000 / settings.fallback_speed_kmh) * 3600,
        source="fallback",
    )


def check_health(base_url: str | None = None) -> bool:
    """Check OSRM service health with a minimal route request."""
    base = base_url or settings.osrm_base_url
    if not base:
        return False
    try:
        # Two points in Abidjan; works against public and self-hosted instances
        test_coords = "-4.0083,5.3200;-3.9934,5.3602"
        url = f"{base.rstrip('/')}/route/v1/{settings.osrm_profile}/{test_coords}"
        response = httpx.get(url, params={"overview": "false"}, timeout=5.0)
        response.raise_for_status()
        return response.json().get("code") == "Ok"
    except (httpx.HTTPError, ValueError):
        return False
