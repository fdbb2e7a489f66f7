"""Application configuration."""

from functools import lru_cache
from typing import Literal

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

# 10 MiB, same limit as the JSON body parser in front of the API
DEFAULT_MAX_BODY_BYTES = 10 * 1024 * 1024


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Application
    app_name: str = "Employee REST API"
    app_version: str = "1.0.0"
    environment: Literal["development", "test", "staging", "production"] = "development"

    # Server
    host: str = "0.0.0.0"
    port: int = Field(default=3000, ge=1, le=65535)
    shutdown_timeout_seconds: int = Field(default=30, gt=0)

    # Record store (json-server compatible document store)
    record_store_url: str = "http://localhost:3001"
    record_store_timeout_seconds: float = Field(default=10.0, gt=0)
    record_store_connect_timeout_seconds: float = Field(default=5.0, gt=0)

    # Request limits
    request_timeout_seconds: float = Field(default=30.0, gt=0)
    max_body_bytes: int = Field(default=DEFAULT_MAX_BODY_BYTES, gt=0)

    # CORS settings
    cors_origins: str = "*"  # Comma-separated list

    # Logging
    log_level: str = "INFO"

    @field_validator("record_store_url")
    @classmethod
    def validate_record_store_url(cls, v: str) -> str:
        """Require an http(s) URL and drop any trailing slash."""
        if not v.startswith(("http://", "https://")):
            raise ValueError("RECORD_STORE_URL must start with 'http://' or 'https://'")
        return v.rstrip("/")

    @field_validator("log_level")
    @classmethod
    def normalize_log_level(cls, v: str) -> str:
        """Upper-case the log level name."""
        return v.upper()

    @property
    def is_development(self) -> bool:
        """True when running in development mode."""
        return self.environment == "development"

    @property
    def cors_origins_list(self) -> list[str]:
        """Get CORS origins as a list."""
        return [origin.strip() for origin in self.cors_origins.split(",") if origin.strip()]


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
