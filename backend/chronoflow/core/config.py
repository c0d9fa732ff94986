"""Application configuration managed via environment variables."""
from functools import lru_cache

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    app_name: str = "ChronoFlow Backend"
    debug: bool = False
    log_level: str = "INFO"
    timezone: str = "UTC"
    streak_lookback_days: int = 365
    streak_history_days: int = 3650
    seed_default_activities: bool = True
    allow_past_slot_edits: bool = False
    store_provider: str = "memory"
    opik_enabled: bool = False
    opik_api_key: str | None = None
    opik_project: str = "chronoflow"


@lru_cache
def get_settings() -> Settings:
    """Return a cached Settings instance."""
    return Settings()


settings = get_settings()
