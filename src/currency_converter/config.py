"""Centralized configuration management using pydantic-settings.

Configuration is loaded from environment variables with sensible defaults.
All settings can be overridden via environment variables or a .env file.
"""

from enum import Enum
from functools import lru_cache
from pathlib import Path
from typing import Literal

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Environment(str, Enum):
    """Application environment."""

    DEVELOPMENT = "development"
    TESTING = "testing"
    STAGING = "staging"
    PRODUCTION = "production"


class LogLevel(str, Enum):
    """Log level options."""

    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"


class Settings(BaseSettings):
    """Application settings loaded from environment variables.

    Override via environment variables (prefixed with CC_) or .env file.

    Examples:
        CC_EXCHANGE_API_BASE_URL=https://api.exchangerate-api.com/v4/latest
        CC_RATE_CACHE_TTL_SECONDS=60
        CC_LOG_LEVEL=DEBUG
        CC_ENVIRONMENT=production
    """

    model_config = SettingsConfigDict(
        env_prefix="CC_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Application
    app_name: str = "Currency Converter"
    app_version: str = "0.1.0"
    environment: Environment = Environment.DEVELOPMENT
    debug: bool = Field(default=False, description="Enable debug mode")

    # Logging
    log_level: LogLevel = LogLevel.INFO
    log_format: Literal["json", "console"] = Field(
        default="console",
        description="Log output format: 'json' for production, 'console' for development",
    )
    log_file: Path | None = Field(default=None, description="Optional log file path")

    # API Server
    # Binds to all interfaces by default; put a TLS-terminating proxy in front
    # of it outside containerized deployments.
    api_host: str = "0.0.0.0"
    api_port: int = 3000
    api_reload: bool = Field(
        default=False, description="Enable auto-reload (development only)"
    )

    # Web UI
    ui_port: int = 8080
    ui_api_url: str = Field(
        default="http://localhost:3000",
        description="Base URL of the API server used by the web UI",
    )
    ui_storage_secret: str = Field(
        default="currency-converter",
        description="Secret signing the browser storage that keeps UI preferences",
    )

    # Upstream exchange-rate provider
    exchange_api_base_url: str = "https://api.exchangerate-api.com/v4/latest"
    exchange_api_timeout: float = Field(default=5.0, gt=0)
    rate_cache_ttl_seconds: float = Field(default=300.0, ge=0)

    # Conversion log
    conversion_log_path: Path = Field(
        default=Path("logs") / "conversions.json",
        description="JSON file holding the most recent conversions",
    )
    conversion_log_max_entries: int = Field(default=100, ge=1)

    # Rate limiting for the form endpoint
    rate_limit_max_requests: int = Field(default=10, ge=1)
    rate_limit_window_seconds: int = Field(default=60, ge=1)

    # Conversion controller timing (seconds)
    debounce_delay: float = Field(default=0.3, ge=0)
    paste_delay: float = Field(default=0.01, ge=0)
    initial_conversion_delay: float = Field(default=1.0, ge=0)

    @field_validator("debug", mode="before")
    @classmethod
    def set_debug_from_environment(cls, v: bool, info) -> bool:
        """Auto-enable debug in development environment."""
        if info.data.get("environment") == Environment.DEVELOPMENT:
            return True
        return v

    @field_validator("log_format", mode="before")
    @classmethod
    def set_log_format_from_environment(cls, v: str, info) -> str:
        """Default to JSON logging in production."""
        if v is None:
            env = info.data.get("environment")
            if env == Environment.PRODUCTION:
                return "json"
        return v or "console"

    @property
    def is_production(self) -> bool:
        """Check if running in production environment."""
        return self.environment == Environment.PRODUCTION

    @property
    def is_development(self) -> bool:
        """Check if running in development environment."""
        return self.environment == Environment.DEVELOPMENT

    @property
    def is_testing(self) -> bool:
        """Check if running in testing environment."""
        return self.environment == Environment.TESTING


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance.

    Call get_settings.cache_clear() to reload settings.

    Returns:
        Configured Settings instance.
    """
    return Settings()
