"""
StashIt — Configuration Module

Provides typed configuration loading and validation.
"""

from .loader import get_config, load_config, reload_config
from .schemas import (
    AdapterBackend,
    AdapterConfig,
    Environment,
    LogFormat,
    LoggingConfig,
    LogLevel,
    StashItConfig,
)

__all__ = [
    # Loader functions
    "load_config",
    "get_config",
    "reload_config",
    # Main config
    "StashItConfig",
    # Enums
    "Environment",
    "AdapterBackend",
    "LogLevel",
    "LogFormat",
    # Config sections
    "AdapterConfig",
    "LoggingConfig",
]
