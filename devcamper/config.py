"""Application Configuration — environment-driven settings via pydantic-settings.

Invariants:
    - All secrets come from environment variables (never hardcoded in production)
    - get_settings() is cached (lru_cache) — single instance per process
    - list_default_limit <= list_max_limit

Design Decisions:
    - pydantic-settings over raw os.environ: validation, type coercion, .env file support
    - Listing limits live here, not in the pipeline: operators tune them per deployment
"""

from functools import lru_cache

from pydantic import field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings from environment variables."""

    model_config = SettingsConfigDict(env_file=".env", case_sensitive=False)

    # Database
    database_url: str = (
        "postgresql+asyncpg://devcamper:devcamper@db:5432/devcamper"
    )

    @field_validator("database_url", mode="before")
    @classmethod
    def convert_postgres_url(cls, v: str) -> str:
        """Hosted Postgres hands out postgresql:// but asyncpg needs postgresql+asyncpg://."""
        if isinstance(v, str) and v.startswith("postgresql://"):
            return v.replace("postgresql://", "postgresql+asyncpg://", 1)
        return v

    database_pool_size: int = 20
    database_max_overflow: int = 10

    # Authentication (tokens are issued elsewhere, only verified here)
    jwt_secret: str = "change-me"
    jwt_algorithm: str = "HS256"

    # Listing
    list_default_limit: int = 25
    list_max_limit: int = 100

    @model_validator(mode="after")
    def check_list_limits(self):
        if self.list_default_limit < 1 or self.list_max_limit < 1:
            raise ValueError("list limits must be positive")
        if self.list_default_limit > self.list_max_limit:
            raise ValueError("list_default_limit cannot exceed list_max_limit")
        return self

    # API
    app_name: str = "devcamper-api"
    app_version: str = "1.0.0"
    cors_origins: list[str] = ["http://localhost:3000"]

    # Observability
    log_level: str = "INFO"
    log_format: str = "json"


@lru_cache
def get_settings() -> Settings:
    return Settings()
