"""Application Configuration — environment-driven settings via pydantic-settings.

Invariants:
    - The database URL comes from the environment or .env, never from code paths
    - get_settings() is cached (lru_cache) — single instance per process
"""

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict
from functools import lru_cache


class Settings(BaseSettings):
    """Application settings from environment variables."""

    model_config = SettingsConfigDict(env_file=".env", case_sensitive=False)

    # Database
    database_url: str = (
        "postgresql+asyncpg://employees:employees@db:5432/employees"
    )

    @field_validator("database_url", mode="before")
    @classmethod
    def convert_postgres_url(cls, v: str) -> str:
        """asyncpg needs postgresql+asyncpg:// rather than postgresql://."""
        if isinstance(v, str) and v.startswith("postgresql://"):
            return v.replace("postgresql://", "postgresql+asyncpg://", 1)
        return v

    database_pool_size: int = 20
    database_max_overflow: int = 10
    database_echo: bool = False

    # API
    app_version: str = "1.0.0"
    api_prefix: str = ""
    cors_origins: list[str] = ["http://localhost:3000"]

    @field_validator("api_prefix")
    @classmethod
    def normalize_prefix(cls, v: str) -> str:
        v = v.strip().rstrip("/")
        if v and not v.startswith("/"):
            v = "/" + v
        return v

    # Observability
    log_level: str = "INFO"
    log_format: str = "json"


@lru_cache
def get_settings() -> Settings:
    return Settings()
