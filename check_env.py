#!/usr/bin/env python3
"""Helper script to check and create .env file for the route optimizer service."""

from pathlib import Path
import os

ENV_TEMPLATE = """# Supabase Configuration (required to load a driver's pending deliveries)
# Get these from: https://supabase.com/dashboard -> Your Project -> Settings -> API
COURIER_SUPABASE_URL=https://your-project-id.supabase.co
COURIER_SUPABASE_KEY=your-anon-or-service-key-here
# COURIER_DELIVERIES_TABLE=logitrack_deliveries

# API Configuration
COURIER_API_PREFIX=/api
# COURIER_FRONTEND_ALLOWED_ORIGINS - JSON array or comma-separated list

# Route estimates
# COURIER_ROUTE_AVERAGE_SPEED_KMH=30
# COURIER_DEFAULT_STOP_DURATION_MIN=5
# COURIER_VEHICLE_SPEEDS_KMH=moto:25,tricycle:20,voiture:20,velo:12

# OSRM Routing (defaults to the public demo server)
COURIER_OSRM_BASE_URL=https://router.project-osrm.org

# Persisted route outputs
COURIER_DATA_ROOT=./data
"""


def _mask(value: str) -> str:
    return value[:20] + "..." + value[-10:] if len(value) > 30 else value


def main():
    project_root = Path(__file__).parent
    env_file = project_root / ".env"

    print("=" * 60)
    print("Route Optimizer Environment Checker")
    print("=" * 60)
    print()

    if not env_file.exists():
        print(f"[MISSING] .env file NOT found at: {env_file}")
        with open(env_file, "w", encoding="utf-8") as f:
            f.write(ENV_TEMPLATE)
        print(f"[CREATED] Template .env file at: {env_file}")
        print("Please edit .env and add your Supabase credentials.")
        return

    print(f"[OK] Found .env file at: {env_file}")
    print("-" * 60)
    with open(env_file, "r", encoding="utf-8") as f:
        for line in f.read().split("\n"):
            if line.startswith("COURIER_SUPABASE_KEY=") and "=" in line:
                name, value = line.split("=", 1)
                print(f"{name}={_mask(value.strip())}")
            else:
                print(line)
    print("-" * 60)
    print()

    for name in ("COURIER_SUPABASE_URL", "COURIER_SUPABASE_KEY"):
        value = os.getenv(name)
        print(f"[{'OK' if value else '--'}] {name} {'set in environment' if value else 'not set in environment'}")
    print()

    print("Testing config loading...")
    try:
        import sys
        sys.path.insert(0, str(project_root / "src"))
        from courier_routing.config import settings

        print(f"  Supabase configured: {bool(settings.supabase_url and settings.supabase_key)}")
        print(f"  OSRM base URL: {settings.osrm_base_url}")
        print(f"  Route speed: {settings.route_average_speed_kmh} km/h")
        print(f"  Vehicle speeds: {settings.vehicle_speeds_kmh}")
        print(f"  Data root: {settings.data_root}")
    except Exception as e:
        print(f"[ERROR] Error loading config: {e}")
        print("Make sure you're running this from the project root directory")


if __name__ == "__main__":
    main()
