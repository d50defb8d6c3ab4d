"""Application configuration using Pydantic Settings."""

from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
    )

    # App settings
    app_name: str = "Partner Status API"
    debug: bool = False

    # Database
    database_url: str = "sqlite+aiosqlite:///./partner_status.db"

    # Password hashing
    bcrypt_rounds: int = Field(default=12, ge=4, le=31)

    # Profile pictures are stored inline (data URI or URL)
    profile_picture_max_length: int = Field(default=2_000_000, ge=1)

    # Live channel
    live_path: str = "/ws"

    def validate_runtime_config(self) -> list[str]:
        """Validate runtime configuration and return warnings."""
        warnings = []

        if self.database_url.startswith("sqlite") and not self.debug:
            warnings.append(
                "DATABASE_URL points at SQLite - use PostgreSQL for concurrent production traffic"
            )

        # Warn about debug mode in production
        if self.debug:
            warnings.append("DEBUG mode is enabled - should be disabled in production")

        return warnings


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
