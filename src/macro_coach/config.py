"""Application configuration."""

import os

from pydantic_settings import BaseSettings, SettingsConfigDict

from macro_coach.domain.policy import DEFAULT_POLICY, CoachingPolicy

_ENVIRONMENT = os.getenv("ENVIRONMENT", "local")


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    supabase_url: str
    supabase_service_key: str
    service_token: str
    reapply_floor_on_check_in: bool = False
    log_level: str = "INFO"
    environment: str = _ENVIRONMENT

    model_config = SettingsConfigDict(
        env_file=(f".env.{_ENVIRONMENT}", ".env"),
        extra="ignore",
    )


def build_policy(settings: Settings) -> CoachingPolicy:
    """Return the coaching policy selected by settings."""
    return DEFAULT_POLICY.with_overrides(
        reapply_floor_on_check_in=settings.reapply_floor_on_check_in
    )
