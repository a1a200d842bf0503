"""Application configuration and settings management."""

import json
from pathlib import Path
from typing import Annotated, Any, Literal, Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, NoDecode, SettingsConfigDict


class Settings(BaseSettings):
    """Runtime configuration loaded from environment variables or defaults."""

    model_config = SettingsConfigDict(
        env_prefix="COURIER_",
        case_sensitive=False,
        env_file=".env",
        env_file_encoding="utf-8",
    )

    app_name: str = "Courier Route Optimizer API"
    api_prefix: str = "/api"
    data_root: Path = Field(default=Path("data"), description="Root directory for persisted route outputs.")

    # Route optimization
    route_average_speed_kmh: float = Field(
        default=30.0,
        gt=0.0,
        description="Average urban speed used to turn optimized route distances into durations.",
    )
    default_stop_duration_min: float = Field(
        default=5.0,
        ge=0.0,
        description="Dwell time counted for stops that carry no estimated duration.",
    )

    # Point-to-point navigation estimates
    vehicle_speeds_kmh: Annotated[dict[str, float], NoDecode] = Field(
        default_factory=lambda: {"moto": 25.0, "tricycle": 20.0, "voiture": 20.0, "velo": 12.0},
        description="Average speed per vehicle type, accounting for city traffic.",
    )
    default_vehicle_speed_kmh: float = Field(default=20.0, gt=0.0)
    default_vehicle_type: str = "moto"

    # OSRM road routing
    osrm_base_url: Optional[str] = Field(
        default="https://router.project-osrm.org",
        description="Base URL for the OSRM routing service (e.g., http://localhost:5000).",
    )
    osrm_profile: Literal["driving", "driving-hgv", "cycling", "foot"] = Field(
        default="driving",
        description="OSRM profile to use when computing road routes.",
    )
    osrm_max_retries: int = Field(default=3, ge=0)
    osrm_backoff_seconds: float = Field(default=1.0, ge=0.0)
    osrm_timeout_seconds: float = Field(default=10.0, gt=0.0)
    fallback_speed_kmh: float = Field(
        default=25.0,
        gt=0.0,
        description="Speed assumed for straight-line routes when OSRM is unavailable.",
    )
    route_deviation_threshold_m: float = Field(default=150.0, gt=0.0)
    route_refetch_cooldown_seconds: float = Field(default=30.0, ge=0.0)

    frontend_allowed_origins: Annotated[tuple[str, ...], NoDecode] = Field(
        default=(
            "http://localhost:5173",
            "http://127.0.0.1:5173",
            "capacitor://localhost",
        ),
        description="Permitted web origins for browser and mobile clients (CORS).",
    )

    # Supabase configuration
    supabase_url: Optional[str] = Field(
        default=None,
        description="Supabase project URL (e.g., https://xxx.supabase.co).",
    )
    supabase_key: Optional[str] = Field(
        default=None,
        description="Supabase key used for reading driver deliveries.",
    )
    deliveries_table: str = "logitrack_deliveries"

    @field_validator("data_root", mode="before")
    @classmethod
    def _expand_path(cls, value: Any) -> Path:
        path_value = value if isinstance(value, Path) else Path(str(value))
        return path_value.expanduser().resolve()

    @field_validator("frontend_allowed_origins", mode="before")
    @classmethod
    def _parse_str_tuple_from_env(cls, value: Any) -> tuple[str, ...]:
        """Parse string tuple from environment variable (comma-separated or JSON array)."""
        if isinstance(value, tuple):
            return value
        if isinstance(value, list):
            return tuple(str(item) for item in value)
        if isinstance(value, str):
            # Try JSON first
            try:
                parsed = json.loads(value)
                if isinstance(parsed, list):
                    return tuple(str(item) for item in parsed)
            except (json.JSONDecodeError, TypeError):
                pass
            # Try comma-separated
            if "," in value:
                return tuple(item.strip() for item in value.split(",") if item.strip())
            # Single value
            if value.strip():
                return (value.strip(),)
        return tuple()

    @field_validator("vehicle_speeds_kmh", mode="before")
    @classmethod
    def _parse_speed_table(cls, value: Any) -> dict[str, float]:
        """Accept a JSON object or ``type:speed`` pairs separated by commas."""
        if isinstance(value, dict):
            return {str(key).lower(): float(speed) for key, speed in value.items()}
        if isinstance(value, str):
            try:
                parsed = json.loads(value)
                if isinstance(parsed, dict):
                    return {str(key).lower(): float(speed) for key, speed in parsed.items()}
            except (json.JSONDecodeError, TypeError, ValueError):
                pass
            table: dict[str, float] = {}
            for item in value.split(","):
                if ":" not in item:
                    continue
                name, speed = item.split(":", 1)
                table[name.strip().lower()] = float(speed.strip())
            return table
        return value

    def speed_for_vehicle(self, vehicle_type: str | None) -> float:
        if not vehicle_type:
            return self.default_vehicle_speed_kmh
        return self.vehicle_speeds_kmh.get(vehicle_type.lower(), self.default_vehicle_speed_kmh)


settings = Settings()
