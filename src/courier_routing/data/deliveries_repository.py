"""Data access helpers for loading a driver's pending delivery stops."""

from __future__ import annotations

import logging
from typing import Any, Iterable, Mapping, Optional

from ..config import settings
from ..db.supabase import get_supabase_client
from ..errors import StopsUnavailableError
from ..models.domain import Stop

logger = logging.getLogger(__name__)

ACTIVE_STATUSES: tuple[str, ...] = (
    "assigned",
    "accepted",
    "picking_up",
    "picked_up",
    "in_transit",
    "arriving",
)

DELIVERY_COLUMNS = (
    "id, tracking_code, package_description, delivery_address, "
    "delivery_latitude, delivery_longitude, is_express, status, route_position, created_at"
)


def _coerce_float(value: Any) -> Optional[float]:
    if value is None or value == "":
        return None
    try:
        return float(value)
    except (TypeError, ValueError) as exc:
        raise ValueError(f"Unable to parse float from value '{value}'") from exc


def row_to_stop(row: Mapping[str, Any]) -> Optional[Stop]:
    """Map a deliveries row to a Stop, or None when it has no coordinates."""

    lat = _coerce_float(row.get("delivery_latitude"))
    lng = _coerce_float(row.get("delivery_longitude"))
    if lat is None or lng is None:
        return None
    tracking_code = (row.get("tracking_code") or "").strip()
    name = (row.get("package_description") or "").strip() or (f"Colis #{tracking_code}" if tracking_code else "Colis")
    return Stop(
        id=str(row["id"]),
        name=name,
        address=(row.get("delivery_address") or "").strip(),
        lat=lat,
        lng=lng,
        type="delivery",
        priority="high" if row.get("is_express") else "normal",
        estimated_duration=settings.default_stop_duration_min,
    )


def rows_to_stops(rows: Iterable[Mapping[str, Any]]) -> list[Stop]:
    stops: list[Stop] = []
    for row in rows:
        try:
            stop = row_to_stop(row)
        except ValueError as exc:
            logger.warning(f"Skipping delivery {row.get('id')} with invalid coordinates: {exc}")
            continue
        if stop is None:
            logger.debug(f"Skipping delivery {row.get('id')} without coordinates")
            continue
        stops.append(stop)
    return stops


def get_pending_stops(driver_id: str) -> list[Stop]:
    """Fetch the driver's active deliveries as stops, in their current route order.

    Rows without delivery coordinates are excluded. Raises
    StopsUnavailableError when the backend is not configured or the query fails.
    """
    client = get_supabase_client()
    if client is None:
        raise StopsUnavailableError(driver_id, "deliveries backend is not configured")

    try:
        response = (
            client.table(settings.deliveries_table)
            .select(DELIVERY_COLUMNS)
            .eq("driver_id", driver_id)
            .in_("status", list(ACTIVE_STATUSES))
            .not_.is_("delivery_latitude", "null")
            .not_.is_("delivery_longitude", "null")
            .order("route_position")
            .order("created_at")
            .execute()
        )
    except Exception as exc:
        logger.error(f"Failed to load pending deliveries for driver '{driver_id}': {exc}")
        raise StopsUnavailableError(driver_id, str(exc)) from exc

    stops = rows_to_stops(response.data or [])
    logger.info(f"Loaded {len(stops)} pending stops for driver '{driver_id}'")
    return stops
