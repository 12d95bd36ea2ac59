"""
Configuration module - loads all env vars using pydantic-settings.
This is the SINGLE SOURCE OF TRUTH for all config values.
"""

from functools import lru_cache
from typing import Optional
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    # PostgreSQL
    postgres_host: str = "localhost"
    postgres_port: int = 5432
    postgres_user: str = "jobly_user"
    postgres_password: str = "password"
    postgres_db: str = "jobly"

    # Full URL override (e.g. "sqlite://" for local runs and tests)
    database_url: Optional[str] = None

    # JWT Auth
    jwt_secret_key: str = "change-this-secret"
    jwt_algorithm: str = "HS256"
    jwt_expire_minutes: int = 1440  # 0 = tokens never expire

    # Password hashing
    bcrypt_work_factor: int = 12

    # App
    log_level: str = "INFO"
    debug: bool = False

    @property
    def sqlalchemy_url(self) -> str:
        """Connection URL: explicit override, else built from the postgres_* fields."""
        if self.database_url:
            return self.database_url
        return (
            f"postgresql://{self.postgres_user}:{self.postgres_password}"
            f"@{self.postgres_host}:{self.postgres_port}/{self.postgres_db}"
        )

    # Pydantic v2 config
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="JOBLY_",
    )


@lru_cache()
def get_settings() -> Settings:
    return Settings()
