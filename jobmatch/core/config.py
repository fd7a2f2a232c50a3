"""
Configuration module - loads all env vars using pydantic-settings.
This is the SINGLE SOURCE OF TRUTH for all config values.
"""

from functools import lru_cache
from fastapi import Request
from typing import List, Optional
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    # PostgreSQL
    postgres_host: str = "localhost"
    postgres_port: int = 5432
    postgres_user: str = "jobmatch_user"
    postgres_password: str = "password"
    postgres_db: str = "jobmatch_db"

    # Full SQLAlchemy URL; wins over the postgres_* fields when set
    database_url: Optional[str] = None

    # Connection pool
    db_pool_size: int = 5
    db_max_overflow: int = 10
    db_echo: bool = False
    db_create_schema: bool = False

    # Token verification (off until an identity provider is wired in)
    auth_enabled: bool = False
    jwt_secret_key: str = "change-this-secret"
    jwt_algorithm: str = "HS256"

    # Logging
    log_level: str = "INFO"
    log_json: bool = False

    # App
    debug: bool = True
    expose_errors: bool = True
    cors_origins: List[str] = ["*"]

    @property
    def sqlalchemy_url(self) -> str:
        """Construct the database connection URL"""
        if self.database_url:
            return self.database_url
        return (
            f"postgresql://{self.postgres_user}:{self.postgres_password}"
            f"@{self.postgres_host}:{self.postgres_port}/{self.postgres_db}"
        )

    # Pydantic v2 config
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8"
    )


@lru_cache()
def get_settings() -> Settings:
    return Settings()


def settings_from_request(request: Request) -> Settings:
    """Dependency - the Settings the running app was built with."""
    return request.app.state.settings
