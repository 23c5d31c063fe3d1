"""Application configuration."""

import os

from pydantic_settings import BaseSettings, SettingsConfigDict

_ENVIRONMENT = os.getenv("ENVIRONMENT", "local")


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    supabase_url: str
    supabase_service_key: str
    jwt_secret: str
    maps_api_key: str
    host: str = "0.0.0.0"  # noqa: S104
    port: int = 5000
    token_issuer: str = "api.placez"
    token_audience: str = "api.placez"
    token_ttl_minutes: int = 60
    geocoding_base_url: str = "https://maps.googleapis.com/maps/api/geocode/json"
    upload_dir: str = "uploads/images"
    frontend_build_dir: str = "build"
    cors_allowed_origins: str = "*"
    session_secret: str | None = None
    cookie_secure: bool = False
    environment: str = _ENVIRONMENT

    model_config = SettingsConfigDict(
        env_file=(f".env.{_ENVIRONMENT}", ".env"),
        extra="ignore",
    )


def parse_allowed_origins(raw: str | None) -> list[str]:
    """Parse CORS origins from env."""
    if raw is None:
        return ["*"]
    cleaned = raw.strip()
    if cleaned in {"", "*"}:
        return ["*"]
    origins = [chunk.strip() for chunk in cleaned.split(",") if chunk.strip()]
    return origins or ["*"]
