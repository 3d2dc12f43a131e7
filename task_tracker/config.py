"""
Configuration for the Task Tracker
Settings are read from the environment and an optional .env file
"""
from typing import Optional

from pydantic_settings import BaseSettings, SettingsConfigDict

from .utils.errors import ConfigurationError


DEFAULT_DATABASE_URL = "sqlite:///./data/tasks.db"


class Settings(BaseSettings):
    """Application settings"""
    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    environment: str = "development"
    database_url: Optional[str] = None
    db_timeout_seconds: float = 10.0
    sql_echo: bool = False
    log_level: str = "INFO"
    streak_window_days: int = 365

    @property
    def is_production(self) -> bool:
        return self.environment.strip().lower() == "production"

    def resolve_database_url(self) -> str:
        """
        Return the database URL to connect to.

        Development falls back to a local SQLite file; production requires
        DATABASE_URL to be set explicitly.

        Raises:
            ConfigurationError: If running in production without DATABASE_URL
        """
        if self.database_url:
            return self.database_url

        if self.is_production:
            raise ConfigurationError(
                "DATABASE_URL is not set. A database URL is required when ENVIRONMENT=production."
            )

        return DEFAULT_DATABASE_URL


settings = Settings()

__all__ = ["Settings", "settings", "DEFAULT_DATABASE_URL"]
