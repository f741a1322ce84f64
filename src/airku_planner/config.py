"""Application configuration and settings management."""

from typing import Any, Literal

import json
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Runtime configuration loaded from environment variables or defaults."""

    model_config = SettingsConfigDict(
        env_prefix="AIRKU_",
        case_sensitive=False,
        env_file=".env",
        env_file_encoding="utf-8",
    )

    app_name: str = "AIRKU Delivery Planner API"
    api_prefix: str = "/api"
    depot_latitude: float = Field(
        default=-7.8664161,
        ge=-90.0,
        le=90.0,
        description="Latitude of the depot every trip starts from and returns to.",
    )
    depot_longitude: float = Field(
        default=110.1486773,
        ge=-180.0,
        le=180.0,
        description="Longitude of the depot every trip starts from and returns to.",
    )
    default_vehicle_type: str = Field(
        default="L300",
        description="Vehicle profile used when a capacity request does not name one.",
    )
    high_utilization_threshold: float = Field(
        default=80.0,
        ge=0.0,
        le=100.0,
        description="Utilization percentage above which a larger vehicle is recommended.",
    )
    validate_coordinates: bool = Field(
        default=True,
        description="Reject NaN/infinite coordinates before building routes.",
    )
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"
    frontend_allowed_origins: tuple[str, ...] = Field(
        default=(
            "http://localhost:5173",
            "http://127.0.0.1:5173",
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
