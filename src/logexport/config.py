"""Configuration via pydantic-settings — 12-factor app style."""
from __future__ import annotations

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """logexport configuration — loaded from env vars / .env file."""

    model_config = SettingsConfigDict(env_prefix="LOGEXPORT_", env_file=".env")

    default_log_name: str = Field(default="Security", description="Log queried when --log-name is omitted")
    csv_encoding: str = Field(default="utf-8", description="Encoding of the exported CSV file")
    timestamp_format: str = Field(default="%Y-%m-%d %H:%M:%S", description="strftime format for TimeGenerated")
    log_level: str = Field(default="WARNING", description="Root log level when --verbose is not given")
    read_batch_limit: int = Field(default=0, description="Max event-log read batches per host (0 = unlimited)")


settings = Settings()
