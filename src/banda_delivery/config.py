"""Application configuration and settings management."""

from pathlib import Path
from typing import Any, Callable, Optional

import json
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


def _tuple_from_env(value: Any, convert: Callable[[Any], Any]) -> tuple:
    """Build a tuple from a tuple, list, JSON array string or comma-separated string."""
    if isinstance(value, tuple):
        return tuple(convert(item) for item in value)
    if isinstance(value, list):
        return tuple(convert(item) for item in value)
    if isinstance(value, str):
        try:
            parsed = json.loads(value)
        except json.JSONDecodeError:
            parsed = None
        if isinstance(parsed, list):
            return tuple(convert(item) for item in parsed)
        return tuple(convert(item.strip()) for item in value.split(",") if item.strip())
    return tuple()


class Settings(BaseSettings):
    """Runtime configuration loaded from environment variables or defaults."""

    model_config = SettingsConfigDict(
        env_prefix="BANDA_",
        case_sensitive=False,
        env_file=".env",
        env_file_encoding="utf-8",
    )

    app_name: str = "Banda Delivery Engine API"
    api_prefix: str = "/api"
    timezone: str = Field(
        default="Africa/Nairobi",
        description="IANA timezone used as the local clock for slot validation.",
    )
    providers_file: Optional[Path] = Field(
        default=None,
        description="JSON file replacing the builtin provider and zone catalogue.",
    )

    separate_fee_per_seller: int = Field(default=200, ge=0)
    route_overlap_radius_km: float = Field(default=5.0, ge=0.0)
    route_overlap_saving: int = Field(default=150, ge=0)

    business_open: str = Field(default="08:00", pattern=r"^\d{2}:\d{2}$")
    business_close: str = Field(default="20:00", pattern=r"^\d{2}:\d{2}$")
    business_days: tuple[int, ...] = Field(
        default=(1, 2, 3, 4, 5, 6),
        description="Delivery days, 0=Sunday through 6=Saturday.",
    )

    slot_buffer_minutes: int = Field(default=30, ge=0)
    iso_business_start_hour: int = Field(default=6, ge=0, le=24)
    iso_business_end_hour: int = Field(default=22, ge=0, le=24)
    max_days_ahead: int = Field(default=14, ge=0)

    frontend_allowed_origins: tuple[str, ...] = Field(
        default=(
            "http://localhost:8081",
            "http://127.0.0.1:8081",
            "http://localhost:19006",
        ),
        description="Permitted web origins for browser clients (CORS).",
    )

    @field_validator("providers_file", mode="before")
    @classmethod
    def _expand_path(cls, value: Any) -> Optional[Path]:
        if value is None or value == "":
            return None
        path_value = value if isinstance(value, Path) else Path(str(value))
        return path_value.expanduser().resolve()

    @field_validator("frontend_allowed_origins", mode="before")
    @classmethod
    def _parse_origins_from_env(cls, value: Any) -> tuple[str, ...]:
        return _tuple_from_env(value, str)

    @field_validator("business_days", mode="before")
    @classmethod
    def _parse_days_from_env(cls, value: Any) -> tuple[int, ...]:
        return _tuple_from_env(value, int)

    @field_validator("business_days")
    @classmethod
    def _check_days(cls, value: tuple[int, ...]) -> tuple[int, ...]:
        for day in value:
            if day < 0 or day > 6:
                raise ValueError("business_days entries must be between 0 (Sunday) and 6 (Saturday)")
        return value


settings = Settings()
