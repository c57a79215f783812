"""Application Configuration — environment-driven settings via pydantic-settings.

Invariants:
    - All secrets come from environment variables (never hardcoded in deployments)
    - get_settings() is cached (lru_cache) — single instance per process
    - JWT settings are opaque here: passed through to the user-data service

Design Decisions:
    - pydantic-settings over raw os.environ: validation, type coercion, .env file support (ADR: developer UX)
    - Defaults provided for all non-secret settings: works out-of-the-box for local dev
    - database_url optional: no database means settings writes are not persisted
"""

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict
from functools import lru_cache

_ASYNC_DRIVERS: tuple[tuple[str, str], ...] = (
    ("postgresql://", "postgresql+asyncpg://"),
    ("postgres://", "postgresql+asyncpg://"),
    ("mysql://", "mysql+aiomysql://"),
)


class Settings(BaseSettings):
    """Application settings from environment variables."""

    model_config = SettingsConfigDict(env_file=".env", case_sensitive=False)

    # JWT (consumed by the user-data service)
    jwt_secret: str = "change-me"
    jwt_expires_in: str = "7d"

    # Registration
    default_team_id: int = 1

    # Preferences database
    database_url: str | None = None

    @field_validator("database_url", mode="before")
    @classmethod
    def convert_database_url(cls, v: str | None) -> str | None:
        """Hosting providers hand out sync URLs; the store needs async drivers."""
        if isinstance(v, str):
            for prefix, replacement in _ASYNC_DRIVERS:
                if v.startswith(prefix):
                    return v.replace(prefix, replacement, 1)
        return v or None

    database_pool_size: int = 20
    database_max_overflow: int = 10
    preferences_table: str | None = None

    # Wiring
    user_service_factory: str | None = None

    # API
    cors_origins: list[str] = ["http://localhost:5173"]

    # Observability
    log_level: str = "INFO"
    log_format: str = "json"


@lru_cache
def get_settings() -> Settings:
    return Settings()
