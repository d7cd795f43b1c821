"""
Configuration management for Posture Sentinel.

Uses Pydantic Settings for environment variable validation and type safety.
"""

from typing import List, Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings


class MetricsConfig(BaseSettings):
    """KPI computation configuration."""

    empty_ratio_value: float = Field(
        default=0.0,
        ge=0.0,
        le=100.0,
        description="Value reported for a ratio whose population is empty",
    )
    empty_duration_value: float = Field(
        default=0.0,
        ge=0.0,
        description="Hours reported for an average duration over no events",
    )
    obsolete_os_markers: List[str] = Field(
        default_factory=lambda: ["Windows 7", "Server 2012"],
        description="Operating system name fragments marking end-of-support systems",
    )

    @field_validator("obsolete_os_markers")
    @classmethod
    def validate_markers(cls, v: List[str]) -> List[str]:
        """Reject empty markers, they would match every operating system."""
        if any(not marker for marker in v):
            raise ValueError("Obsolete OS markers must be non-empty strings")
        return v

    class Config:
        env_prefix = "POSTURE_METRICS_"


class SourceConfig(BaseSettings):
    """Raw dataset source configuration."""

    data_dir: str = Field(
        default="./data",
        description="Directory holding dataset files (json, yaml, csv, txt)",
    )
    base_url: Optional[str] = Field(
        default=None,
        description="Base URL of an HTTP dataset API (overrides data_dir when set)",
    )
    timeout: float = Field(
        default=10.0,
        gt=0,
        description="HTTP request timeout in seconds",
    )

    class Config:
        env_prefix = "POSTURE_SOURCE_"


class ServiceConfig(BaseSettings):
    """Aggregation service and API configuration."""

    interval_minutes: int = Field(
        default=60,
        ge=1,
        description="How often the service recomputes the snapshot (minutes)",
    )
    api_host: str = Field(
        default="0.0.0.0",
        description="HTTP API bind address",
    )
    api_port: int = Field(
        default=8000,
        description="HTTP API port",
    )

    class Config:
        env_prefix = "POSTURE_SERVICE_"


class AppConfig(BaseSettings):
    """Main application configuration."""

    log_level: str = Field(
        default="INFO",
        description="Logging level (DEBUG, INFO, WARNING, ERROR)",
    )

    # Nested configurations
    metrics: MetricsConfig = Field(default_factory=MetricsConfig)
    source: SourceConfig = Field(default_factory=SourceConfig)
    service: ServiceConfig = Field(default_factory=ServiceConfig)

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Validate log level."""
        valid_levels = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
        v = v.upper()
        if v not in valid_levels:
            raise ValueError(f"Log level must be one of: {valid_levels}")
        return v

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"
        case_sensitive = False


# Global config instance
_config: Optional[AppConfig] = None


def get_config() -> AppConfig:
    """
    Get the global configuration instance.

    Lazily loads configuration on first access.

    Returns:
        AppConfig: The global configuration instance
    """
    global _config
    if _config is None:
        _config = AppConfig(
            metrics=MetricsConfig(),
            source=SourceConfig(),
            service=ServiceConfig(),
        )
    return _config


def reload_config() -> AppConfig:
    """
    Reload configuration from environment variables.

    Useful for testing or when environment changes.

    Returns:
        AppConfig: The reloaded configuration instance
    """
    global _config
    _config = None
    return get_config()
