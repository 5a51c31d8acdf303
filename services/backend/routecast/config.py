"""Application configuration driven by environment variables."""

from functools import lru_cache
from typing import Iterable

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_UPSTREAM_URL = "https://scrmobiletest.azurewebsites.net/api"


class Settings(BaseSettings):
    """Runtime configuration sourced from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        case_sensitive=False,
        enable_decoding=False,
        extra="ignore",
    )

    routing_base_url: str = DEFAULT_UPSTREAM_URL
    weather_base_url: str = DEFAULT_UPSTREAM_URL
    routing_timeout_s: float = 10.0
    weather_timeout_s: float = 5.0
    weather_max_workers: int | None = Field(default=None, ge=1)
    route_api_token: str | None = None
    cors_origins: list[str] = Field(default_factory=list)
    log_level: str = "INFO"
    log_color: bool = True

    @field_validator("routing_base_url", "weather_base_url")
    @classmethod
    def _strip_trailing_slash(cls, value: str) -> str:
        return value.rstrip("/")

    @field_validator("weather_max_workers", "route_api_token", mode="before")
    @classmethod
    def _blank_as_none(cls, value: object) -> object:
        if isinstance(value, str) and not value.strip():
            return None
        return value

    @field_validator("cors_origins", mode="before")
    @classmethod
    def _split_origins(cls, value: str | Iterable[str] | None) -> list[str]:
        if value is None or value == "":
            return []
        if isinstance(value, str):
            return [origin.strip() for origin in value.split(",") if origin.strip()]
        return [origin.strip() for origin in value if origin.strip()]


@lru_cache()
def get_settings() -> Settings:
    """Cached settings instance."""
    return Settings()
