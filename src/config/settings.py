"""
Application settings - pydantic-settings configuration.

This module defines application configuration using pydantic-settings
for environment variable loading with validation and defaults.
"""

from functools import lru_cache

from psycopg.conninfo import make_conninfo
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings with environment variable support."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
    )

    # Database configuration
    db_host: str = "localhost"
    db_port: int = 5432
    db_user: str = "root"
    db_password: str = ""
    db_name: str = "church_db"
    pool_min_size: int = 1  # Minimum connections in pool
    pool_max_size: int = 10  # Maximum connections in pool
    acquire_timeout_seconds: float = 5.0  # Wait for a pooled connection
    statement_timeout_ms: int = 5000  # Server-side limit per statement

    # HTTP server
    host: str = "0.0.0.0"
    port: int = 5000
    log_level: str = "INFO"

    # Email notifications (SMTP is used only when both credentials are set)
    email_user: str | None = None
    email_password: str | None = None
    smtp_host: str = "smtp.gmail.com"
    smtp_port: int = 587
    email_timeout_seconds: float = 10.0
    staff_email: str | None = None

    @property
    def conninfo(self) -> str:
        """libpq connection string assembled from the db_* fields."""
        return make_conninfo(
            host=self.db_host,
            port=self.db_port,
            user=self.db_user,
            password=self.db_password,
            dbname=self.db_name,
        )

    @property
    def email_configured(self) -> bool:
        return bool(self.email_user and self.email_password)


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
