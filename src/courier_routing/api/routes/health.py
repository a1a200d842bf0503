"""Health endpoints."""

from __future__ import annotations

from fastapi import APIRouter, status

router = APIRouter(tags=["health"])


@router.get("/health", status_code=status.HTTP_200_OK)
def health_root() -> dict:
    """Simple health check endpoint that doesn't require any dependencies."""
    return {"status": "ok"}


def _get_osrm_health_check():
    """Lazy import to avoid startup failures."""
    from ...services.routing.osrm_client import check_health as osrm_health_check
    return osrm_health_check


def _get_supabase_health_check():
    """Lazy import to avoid startup failures."""
    from ...db.supabase import check_health as supabase_health_check
    return supabase_health_check


@router.get("/health/osrm", status_code=status.HTTP_200_OK)
def health_osrm() -> dict:
    """Check OSRM service health."""
    try:
        osrm_health_check = _get_osrm_health_check()
        return {"service": "osrm", "healthy": osrm_health_check()}
    except Exception as e:
        return {"service": "osrm", "healthy": False, "error": str(e)}


@router.get("/health/supabase", status_code=status.HTTP_200_OK)
def health_supabase() -> dict:
    """Check that the deliveries table is reachable."""
    try:
        supabase_health_check = _get_supabase_health_check()
        return {"service": "supabase", "healthy": supabase_health_check()}
    except Exception as e:
        return {"service": "supabase", "healthy": False, "error": str(e)}
