# =============================================================================
# collegeconnect/config.py - Application Settings
# =============================================================================
# This module loads configuration from environment variables using pydantic-settings.
# It provides a single Settings class with all configuration values.
#
# Usage:
#   from collegeconnect.config import settings
#   print(settings.MONGO_URI)
#
# Environment variables are loaded from:
# 1. System environment variables
# 2. .env file in project root (if exists)
# =============================================================================

from functools import lru_cache
from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.

    Every value has a default so the server can start (and report a
    disconnected database) even with an empty environment.
    """

    # -------------------------------------------------------------------------
    # MongoDB Configuration
    # -------------------------------------------------------------------------

    MONGO_URI: str | None = Field(
        default=None,
        description="MongoDB connection string (mongodb:// or mongodb+srv://)"
    )

    MONGO_DB_NAME: str = Field(
        default="collegeconnect",
        description="Database used when MONGO_URI does not name one"
    )

    MONGO_SERVER_SELECTION_TIMEOUT_MS: int = Field(
        default=30000,
        ge=1,
        description="How long the driver waits to find a usable server"
    )

    MONGO_SOCKET_TIMEOUT_MS: int = Field(
        default=45000,
        ge=1,
        description="Idle socket timeout for database connections"
    )

    # -------------------------------------------------------------------------
    # Server Settings
    # -------------------------------------------------------------------------

    NODE_ENV: str = Field(
        default="development",
        description="Deployment environment (development, test, production)"
    )

    HOST: str = Field(
        default="0.0.0.0",
        description="Host to bind the server to"
    )

    PORT: int = Field(
        default=5005,
        ge=1,
        le=65535,
        description="Port for the server"
    )

    LOG_LEVEL: str = Field(
        default="INFO",
        description="Root log level"
    )

    # -------------------------------------------------------------------------
    # Cross-Origin Settings
    # -------------------------------------------------------------------------

    # Comma-separated string that gets parsed
    CORS_ORIGINS: str = Field(
        default=(
            "https://collegeconnect-frontend-y1w5.onrender.com,"
            "http://localhost:3000,"
            "http://localhost:5173"
        ),
        description="Allowed CORS origins for the HTTP API (comma-separated)"
    )

    SOCKETIO_CORS_ORIGINS: str = Field(
        default="*",
        description="Allowed origins for realtime connections ('*' or comma-separated)"
    )

    # -------------------------------------------------------------------------
    # Request Handling
    # -------------------------------------------------------------------------

    PUBLIC_DIR: Path = Field(
        default=Path("public"),
        description="Root directory for static assets and uploads"
    )

    BODY_LIMIT_BYTES: int = Field(
        default=100 * 1024,
        ge=1,
        description="Maximum accepted JSON / form body size"
    )

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_ignore_empty=True,
        case_sensitive=True,
        extra="ignore",
    )

    # -------------------------------------------------------------------------
    # Computed Properties
    # -------------------------------------------------------------------------

    @property
    def cors_origins_list(self) -> list[str]:
        """
        Parse CORS_ORIGINS string into a list.

        Example: "http://localhost:3000, https://myapp.com" -> ["http://localhost:3000", "https://myapp.com"]
        """
        return [origin.strip() for origin in self.CORS_ORIGINS.split(",") if origin.strip()]

    @property
    def socketio_cors_origins_list(self) -> str | list[str]:
        """Realtime origins in the form python-socketio expects."""
        if self.SOCKETIO_CORS_ORIGINS.strip() == "*":
            return "*"
        return [origin.strip() for origin in self.SOCKETIO_CORS_ORIGINS.split(",") if origin.strip()]

    @property
    def is_production(self) -> bool:
        """Check if running in production mode."""
        return self.NODE_ENV == "production"

    @property
    def expose_error_details(self) -> bool:
        """Whether error responses may carry the raw exception message."""
        return not self.is_production

    @property
    def static_mounts(self) -> list[tuple[str, Path]]:
        """
        Static mount points in priority order.

        The general uploads mount is checked before the profile and cover
        mounts; all three are checked after the public root.
        """
        uploads = self.PUBLIC_DIR / "uploads"
        return [
            ("/", self.PUBLIC_DIR),
            ("/uploads", uploads),
            ("/uploads/profile", uploads / "profile"),
            ("/uploads/cover", uploads / "cover"),
        ]


@lru_cache
def get_settings() -> Settings:
    """
    Get cached Settings instance.

    Returns:
        Settings: The application settings instance
    """
    return Settings()


# Global settings instance for easy importing
settings = get_settings()
