"""
StashIt — Configuration Schemas

Typed configuration models using Pydantic for validation and type safety.
All configuration comes from environment variables and is validated on load.
"""

from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator


class Environment(str, Enum):
    """Runtime environment."""

    DEVELOPMENT = "development"
    STAGING = "staging"
    PRODUCTION = "production"
    TEST = "test"


class AdapterBackend(str, Enum):
    """Supported storage adapters."""

    MEMORY = "memory"
    REDIS = "redis"  # Requires the redis extra


class LogLevel(str, Enum):
    """Log levels."""

    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"


class LogFormat(str, Enum):
    """Log output formats."""

    JSON = "json"
    TEXT = "text"


class AdapterConfig(BaseModel):
    """Storage adapter configuration."""

    backend: AdapterBackend = Field(default=AdapterBackend.MEMORY, description="Adapter to use")
    namespace: str | None = Field(default=None, description="Key namespace/prefix")

    # Redis-specific settings (only used when backend=redis)
    redis_url: str | None = Field(default=None, description="Redis connection URL")
    redis_max_connections: int = Field(default=10, ge=1, description="Redis connection pool size")
    redis_socket_timeout: int = Field(default=5, ge=1, description="Redis socket timeout in seconds")

    @field_validator("redis_url")
    @classmethod
    def validate_redis_url(cls, v: str | None, info: Any) -> str | None:
        """Ensure redis_url is provided when backend is redis."""
        backend = info.data.get("backend")
        if backend == AdapterBackend.REDIS and not v:
            raise ValueError("redis_url is required when adapter backend is 'redis'")
        return v


class LoggingConfig(BaseModel):
    """Logging configuration."""

    level: LogLevel = Field(default=LogLevel.INFO, description="Logging level")
    format: LogFormat = Field(default=LogFormat.JSON, description="Log output format")


class StashItConfig(BaseModel):
    """Root configuration for StashIt."""

    environment: Environment = Field(default=Environment.DEVELOPMENT, description="Runtime environment")

    adapter: AdapterConfig = Field(default_factory=AdapterConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)

    model_config = ConfigDict(use_enum_values=True, validate_assignment=True)
