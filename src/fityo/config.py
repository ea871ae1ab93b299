"""Application configuration."""

import os
from pathlib import Path
from typing import Literal
from uuid import UUID

from pydantic_settings import BaseSettings, SettingsConfigDict

_ENVIRONMENT = os.getenv("ENVIRONMENT", "local")

LOCAL_USER_ID = UUID("00000000-0000-0000-0000-000000000001")


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    storage_backend: Literal["supabase", "local"] = "supabase"
    supabase_url: str | None = None
    supabase_service_key: str | None = None
    local_state_path: Path = Path("fityo-state.json")
    local_user_id: UUID = LOCAL_USER_ID
    local_access_token: str | None = None
    timezone: str = "UTC"
    environment: str = _ENVIRONMENT

    model_config = SettingsConfigDict(
        env_prefix="FITYO_",
        env_file=(f".env.{_ENVIRONMENT}", ".env"),
        extra="ignore",
    )


def require_supabase_credentials(settings: Settings) -> tuple[str, str]:
    """Return the Supabase URL and key, failing fast when either is unset."""
    if not settings.supabase_url or not settings.supabase_service_key:
        raise ValueError(
            "FITYO_SUPABASE_URL and FITYO_SUPABASE_SERVICE_KEY are required "
            "for the supabase storage backend"
        )
    return settings.supabase_url, settings.supabase_service_key
