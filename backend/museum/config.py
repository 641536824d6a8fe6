"""Application Configuration — environment-driven settings via pydantic-settings.

Invariants:
    - get_settings() is cached (lru_cache) — single instance per process
    - list_stop_timeout_ms is never negative

Design Decisions:
    - pydantic-settings over raw os.environ: validation, type coercion, .env file support
    - Defaults provided for all settings: works out-of-the-box against the public catalog
"""

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict
from functools import lru_cache


class Settings(BaseSettings):
    """Application settings from environment variables."""

    model_config = SettingsConfigDict(env_file=".env", case_sensitive=False)

    # Catalog
    museum_api_url: str = (
        "https://raw.githubusercontent.com/Kotlin/KMP-App-Template/main/list.json"
    )
    http_timeout_seconds: float = 30.0
    prefetch_on_startup: bool = True

    # View state: keep-alive window after the last list subscriber leaves
    list_stop_timeout_ms: int = 5000

    @field_validator("list_stop_timeout_ms")
    @classmethod
    def non_negative_timeout(cls, v: int) -> int:
        if v < 0:
            raise ValueError("list_stop_timeout_ms must be >= 0")
        return v

    # API
    cors_origins: list[str] = ["http://localhost:5173"]

    # Observability
    log_level: str = "INFO"
    log_format: str = "json"


@lru_cache
def get_settings() -> Settings:
    return Settings()
