"""
StashIt — Configuration Loader

Loads and validates configuration from environment variables and .env files.
Provides a singleton configuration instance for the process.
"""

import logging
import os
from pathlib import Path

from dotenv import load_dotenv
from pydantic import ValidationError

from ..errors import ConfigurationError
from .schemas import StashItConfig

logger = logging.getLogger(__name__)

_config_instance: StashItConfig | None = None


def load_config(
    env_file: str | None = None,
    reload: bool = False,
) -> StashItConfig:
    """
    Load configuration from environment variables and .env file.

    Args:
        env_file: Path to .env file (default: .env in the working directory)
        reload: Force reload even if config already loaded

    Returns:
        Validated StashItConfig instance

    Raises:
        ConfigurationError: If configuration is invalid
    """
    global _config_instance

    if _config_instance is not None and not reload:
        return _config_instance

    env_path = Path(env_file) if env_file else Path.cwd() / ".env"

    if env_path.exists():
        logger.info(f"Loading environment from {env_path}")
        load_dotenv(env_path, override=True)
    else:
        logger.debug("No .env file found, using environment variables only")

    # Auto-detect adapter: Redis if REDIS_URL is set, else memory
    redis_url = os.getenv("REDIS_URL")
    adapter_backend = "redis" if redis_url else "memory"

    config_dict = {
        "environment": os.getenv("ENVIRONMENT", "development"),
        "adapter": {
            "backend": os.getenv("CACHE_ADAPTER", adapter_backend),
            "namespace": os.getenv("CACHE_NAMESPACE") or None,
            "redis_url": redis_url,
            "redis_max_connections": os.getenv("REDIS_MAX_CONNECTIONS", "10"),
            "redis_socket_timeout": os.getenv("REDIS_SOCKET_TIMEOUT", "5"),
        },
        "logging": {
            "level": os.getenv("LOG_LEVEL", "INFO").upper(),
            "format": os.getenv("LOG_FORMAT", "json").lower(),
        },
    }

    try:
        _config_instance = StashItConfig(**config_dict)  # type: ignore[arg-type]
    except ValidationError as e:
        logger.error(
            f"Configuration validation failed: {e}",
            extra={"validation_errors": e.errors(), "config_dict_keys": list(config_dict.keys())},
        )
        raise ConfigurationError(
            "Configuration validation failed. Check your environment variables.",
            details={"validation_errors": e.errors()},
        ) from e

    logger.info(
        f"Configuration loaded (environment: {_config_instance.environment})",
        extra={"environment": _config_instance.environment, "adapter": _config_instance.adapter.backend},
    )
    return _config_instance


def get_config() -> StashItConfig:
    """
    Get the current configuration instance, loading it on first access.

    Returns:
        Current StashItConfig instance
    """
    if _config_instance is None:
        return load_config()

    return _config_instance


def reload_config(env_file: str | None = None) -> StashItConfig:
    """
    Force reload configuration.

    Args:
        env_file: Optional path to .env file

    Returns:
        Reloaded StashItConfig instance
    """
    return load_config(env_file=env_file, reload=True)
