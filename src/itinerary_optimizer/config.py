"""Application configuration and settings management."""

from typing import Any

import json
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Runtime configuration loaded from environment variables or defaults."""

    model_config = SettingsConfigDict(
        env_prefix="ITINOPT_",
        case_sensitive=False,
        env_file=".env",
        env_file_encoding="utf-8",
    )

    app_name: str = "Itinerary Optimizer API"
    api_prefix: str = "/api"
    log_level: str = Field(default="INFO", description="Root log level used by the server entry point.")
    max_waypoints: int = Field(
        default=200,
        ge=2,
        description="Largest waypoint list accepted by a single optimize request.",
    )
    two_opt_max_sweeps: int = Field(
        default=1000,
        ge=1,
        description="Upper bound on full 2-opt sweeps per route segment.",
    )
    two_opt_time_limit_seconds: float = Field(
        default=5.0,
        ge=0.0,
        description="Wall-clock budget for 2-opt refinement per segment (0 disables the limit).",
    )
    default_day_start_minutes: int = Field(default=9 * 60, ge=0, le=23 * 60 + 59)
    default_day_end_minutes: int = Field(default=20 * 60, ge=0, le=24 * 60)
    default_visit_minutes: int = Field(default=60, ge=5)
    frontend_allowed_origins: tuple[str, ...] = Field(
        default=(
            "http://localhost:3000",
            "http://127.0.0.1:3000",
        ),
        description="Permitted web origins for browser clients (CORS).",
    )

    @field_validator("frontend_allowed_origins", mode="before")
    @classmethod
    def _parse_str_tuple_from_env(cls, value: Any) -> tuple[str, ...]:
        """Parse string tuple from environment variable (comma-separated or JSON array)."""
        if isinstance(value, tuple):
            return value
        if isinstance(value, list):
            return tuple(str(item) for item in value)
        if isinstance(value, str):
            try:
                parsed = json.loads(value)
                if isinstance(parsed, list):
                    return tuple(str(item) for item in parsed)
            except (json.JSONDecodeError, TypeError):
                pass
            if "," in value:
                return tuple(item.strip() for item in value.split(",") if item.strip())
            if value.strip():
                return (value.strip(),)
        return tuple()


settings = Settings()
