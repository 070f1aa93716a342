"""Application configuration."""

from functools import lru_cache
from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

PACKAGE_SEED_DIR = Path(__file__).resolve().parent.parent / "seed"


class Settings(BaseSettings):
    """Application settings."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # App
    APP_NAME: str = "Roadmap Tracker"
    APP_VERSION: str = "0.1.0"
    DEBUG: bool = False
    ENV: str = "development"

    # Server
    HOST: str = "127.0.0.1"
    PORT: int = 8000
    CORS_ORIGINS: list[str] = ["*"]

    # Storage
    DATA_DIR: Path = Path("./data")
    SEED_DIR: Path | None = None
    BACKUP_RETENTION: int = Field(default=7, ge=1)

    # Uploads
    UPLOADS_DIR: Path = Path("./uploads")
    UPLOADS_URL: str = "/uploads"
    MAX_UPLOAD_SIZE: int = 10 * 1024 * 1024

    @property
    def seed_dir(self) -> Path:
        """Seed templates directory, falling back to the bundled seeds."""
        return self.SEED_DIR or PACKAGE_SEED_DIR

    @property
    def is_development(self) -> bool:
        """Check if running in development mode."""
        return self.ENV == "development"

    @property
    def is_production(self) -> bool:
        """Check if running in production mode."""
        return self.ENV == "production"


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
