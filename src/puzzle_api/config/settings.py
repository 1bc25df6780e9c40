from __future__ import annotations

from functools import lru_cache
from urllib.parse import quote
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from pydantic import computed_field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    app_name: str = "Puzzle Leagues API"
    app_env: str = "development"
    app_debug: bool = False
    app_host: str = "127.0.0.1"
    app_port: int = 3001
    app_log_level: str = "INFO"
    app_log_json: bool = True
    app_log_requests: bool = True
    app_docs_enabled: bool = True
    app_cors_origins: list[str] = []
    app_cors_allow_credentials: bool = True
    app_cors_allow_methods: list[str] = ["*"]
    app_cors_allow_headers: list[str] = ["*"]

    # Calendar used to resolve "today" for scores and leaderboards.
    app_timezone: str = "UTC"

    # If set, this value has priority over component-based database settings.
    database_url: str = ""

    db_host: str = "localhost"
    db_port: int = 5432
    db_name: str = "puzzle_leagues"
    db_user: str = "postgres"
    db_password: str = ""

    # SQLAlchemy/asyncpg runtime tuning
    db_echo: bool = False
    db_pool_size: int = 10
    db_max_overflow: int = 10
    db_pool_timeout_s: int = 30
    db_pool_recycle_s: int = 1800

    @field_validator("app_timezone")
    @classmethod
    def validate_timezone(cls, value: str) -> str:
        try:
            ZoneInfo(value)
        except (ZoneInfoNotFoundError, ValueError) as exc:
            raise ValueError(f"Unknown timezone: {value}") from exc
        return value

    @computed_field
    @property
    def sqlalchemy_database_url(self) -> str:
        if self.database_url.strip():
            return self.database_url
        return (
            f"postgresql+asyncpg://{quote(self.db_user, safe='')}:{quote(self.db_password, safe='')}"
            f"@{self.db_host}:{self.db_port}/{self.db_name}"
        )

    @computed_field
    @property
    def docs_url(self) -> str | None:
        return "/docs" if self.app_docs_enabled else None

    @computed_field
    @property
    def redoc_url(self) -> str | None:
        return "/redoc" if self.app_docs_enabled else None


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings()
