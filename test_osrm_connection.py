#!/usr/bin/env python3
"""Manual script to verify OSRM connectivity for navigation routes."""

import sys
from pathlib import Path

# Add src to path
project_root = Path(__file__).parent
sys.path.insert(0, str(project_root / "src"))

from courier_routing.config import settings
from courier_routing.errors import RoutingServiceError
from courier_routing.models.domain import Coordinate
from courier_routing.services.routing.osrm_client import OSRMClient, check_health


def main():
    print("=" * 60)
    print("OSRM Connection Test")
    print("=" * 60)
    print()

    print("1. Checking OSRM configuration...")
    if not settings.osrm_base_url:
        print("   [ERROR] OSRM base URL is not configured")
        print("   Please set COURIER_OSRM_BASE_URL in your .env file")
        return 1

    print(f"   [OK] OSRM Base URL: {settings.osrm_base_url}")
    print(f"   [OK] OSRM Profile: {settings.osrm_profile}")
    print()

    print("2. Testing OSRM health check...")
    if not check_health():
        print("   [ERROR] OSRM service is not responding")
        return 1
    print("   [OK] OSRM service is healthy and accessible!")
    print()

    print("3. Requesting a route across Abidjan (Plateau -> Cocody)...")
    client = OSRMClient()
    try:
        result = client.route(Coordinate(5.3207, -4.0167), Coordinate(5.3602, -3.9934))
    except RoutingServiceError as e:
        print(f"   [ERROR] Route request failed: {e}")
        return 1
    print(f"   [OK] {len(result.coordinates)} points, {result.distance_meters / 1000:.1f} km, "
          f"{result.duration_seconds / 60:.0f} min")
    print()
    print("=" * 60)
    print("[SUCCESS] OSRM connection is working")
    print("=" * 60)
    return 0


if __name__ == "__main__":
    sys.exit(main())
