from __future__ import annotations

from pydantic_settings import BaseSettings, SettingsConfigDict


class DemoSettings(BaseSettings):
    model_config = SettingsConfigDict(extra="forbid")

    database_url: str
    log_level: str = "info"
    admin_token: str = "dev-admin"

    host: str = "0.0.0.0"
    port: int = 8000

    # Startup reset-and-reseed
    seed_on_startup: bool = True
    seed_value: int | None = None

    otel_enabled: bool = False


SETTINGS = DemoSettings()
