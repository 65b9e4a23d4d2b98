"""Saanify automation settings."""

from __future__ import annotations

from pydantic import AliasChoices, Field
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    database_url: str = "sqlite:///./saanify.db"
    api_host: str = "0.0.0.0"
    api_port: int = 8020
    log_level: str = "INFO"
    supabase_url: str | None = Field(
        default=None,
        validation_alias=AliasChoices("SAANIFY_SUPABASE_URL", "SUPABASE_URL"),
    )
    supabase_service_role_key: str | None = Field(
        default=None,
        validation_alias=AliasChoices(
            "SAANIFY_SUPABASE_SERVICE_ROLE_KEY",
            "SUPABASE_SERVICE_ROLE_KEY",
        ),
    )
    backup_bucket: str = "backups"
    log_table: str = "automation_logs"
    log_retention_days: int = 30
    ai_log_window: int = 100
    history_window: int = 100

    class Config:
        env_file = ".env"
        env_prefix = "SAANIFY_"
        extra = "ignore"
        populate_by_name = True


settings = Settings()
