from functools import lru_cache
from typing import Optional

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    # App
    app_env: str = "dev"
    log_level: str = "INFO"
    site_url: str = "http://localhost:8000"

    # Infra
    redis_url: str = "redis://redis:6379/0"

    # Security / policies
    token_secret: Optional[str] = None
    default_duration_minutes: int = 360
    admin_code: str = ""
    admin_cookie_name: str = "admin_code"

    # Quota
    max_credits: int = 5
    turn_debounce_seconds: float = 1.2
    quota_key_prefix: str = "ltr-quota:"

    # Chat widget
    widget_theme: str = "dark"

    model_config = SettingsConfigDict(
        env_file=".env",
        env_prefix="",
        case_sensitive=False,
        extra="ignore",
    )


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings()
