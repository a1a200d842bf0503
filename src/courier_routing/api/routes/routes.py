"""Routing endpoints."""

from __future__ import annotations

import logging

from fastapi import APIRouter, HTTPException, status

from ...data.deliveries_repository import get_pending_stops
from ...errors import StopsUnavailableError
from ...schemas.routing import (
    NavigationRequest,
    NavigationResponse,
    OptimizedRouteResponse,
    PendingStopsResponse,
    RouteOptimizationRequest,
    StopModel,
)
from ...services.routing.service import optimize_driver_route, plan_navigation

router = APIRouter(prefix="/routes", tags=["routes"])


@router.post("/optimize", response_model=OptimizedRouteResponse, status_code=status.HTTP_200_OK)
def optimize(payload: RouteOptimizationRequest) -> OptimizedRouteResponse:
    try:
        return optimize_driver_route(payload)
    except StopsUnavailableError as exc:
        logging.warning(f"Route optimization aborted: {exc}")
        raise HTTPException(status_code=status.HTTP_503_SERVICE_UNAVAILABLE, detail=str(exc)) from exc
    except ValueError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc
    except Exception as exc:
        logging.exception(f"Error optimizing route: {exc}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=f"Failed to optimize route: {str(exc)}",
        ) from exc


@router.get("/pending/{driver_id}", response_model=PendingStopsResponse, status_code=status.HTTP_200_OK)
def pending_stops(driver_id: str) -> PendingStopsResponse:
    """List the driver's active deliveries in their current route order."""
    try:
        stops = get_pending_stops(driver_id)
    except StopsUnavailableError as exc:
        raise HTTPException(status_code=status.HTTP_503_SERVICE_UNAVAILABLE, detail=str(exc)) from exc
    return PendingStopsResponse(driver_id=driver_id, stops=[StopModel.from_domain(stop) for stop in stops])


@router.post("/navigation", response_model=NavigationResponse, status_code=status.HTTP_200_OK)
def navigation(payload: NavigationRequest) -> NavigationResponse:
    """Road route between two points, straight line when OSRM is unavailable."""
    try:
        return plan_navigation(payload)
    except Exception as exc:
        logging.exception(f"Error planning navigation: {exc}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=f"Failed to plan navigation: {str(exc)}",
        ) from exc
