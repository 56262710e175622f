"""Application configuration via environment variables."""

from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="ANIMELO_",
        env_file=".env",
        env_file_encoding="utf-8",
    )

    # Database
    db_path: Path = Field(
        default=Path.home() / ".config" / "animelo" / "animes.db",
        description="Path to SQLite rating store",
    )

    # Catalog
    eligible_status: str = Field(
        default="Completed",
        description="MyAnimeList status an entry needs to take part in comparisons",
    )

    # Logging
    log_level: str = Field(
        default="INFO",
        description="Log level for the CLI: DEBUG, INFO, WARNING or ERROR",
    )


def get_settings() -> Settings:
    """Get application settings."""
    return Settings()
