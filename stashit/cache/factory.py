"""
StashIt — Cache Factory

Canonical way to obtain cache instances.

Key points:
- create_cache(adapter) wraps any object satisfying the adapter contract
- Without an adapter, one is built from configuration
  (CACHE_ADAPTER=memory|redis, auto-detected from REDIS_URL)
- Named registry for long-lived instances (get_cache / close_all_caches)

Examples:
    from stashit.cache import create_cache
    from stashit.cache.adapters import MemoryAdapter

    cache = create_cache(MemoryAdapter())
    await cache.set_item("key", "value")

    # Or explicitly supply an AdapterConfig (e.g., for tests)
    from stashit.config import AdapterBackend, AdapterConfig
    cfg = AdapterConfig(backend=AdapterBackend.MEMORY, namespace="test")
    cache = create_cache(create_adapter(cfg))
"""

from __future__ import annotations

import logging
from typing import Any

from ..config import AdapterBackend, AdapterConfig, get_config
from ..errors import ConfigurationError
from .adapters.memory import MemoryAdapter
from .cache import Cache
from .hooks import resolve

logger = logging.getLogger(__name__)

# Global cache instances registry
_cache_instances: dict[str, Cache] = {}


def _create_redis_adapter(config: AdapterConfig) -> Any:
    """Internal helper to construct a redis adapter with lazy import."""
    if not config.redis_url:
        raise ConfigurationError(
            "REDIS_URL must be set when CACHE_ADAPTER=redis",
            details={"env": "REDIS_URL", "backend": "redis"},
        )

    # Lazy import to avoid hard dependency when memory adapter is used
    try:
        from .adapters.redis import RedisAdapter
    except ImportError as e:
        logger.error(
            "Redis adapter selected but redis client is not installed",
            extra={"package": "redis>=5.0.0", "error": str(e)},
        )
        raise ConfigurationError(
            "Redis adapter selected but redis client is unavailable. Install with: pip install 'stashit[redis]'",
            details={"package": "redis>=5.0.0", "error": str(e), "backend": "redis"},
        ) from e

    return RedisAdapter(
        redis_url=config.redis_url,
        namespace=config.namespace or "stashit",
        max_connections=config.redis_max_connections,
        socket_timeout=config.redis_socket_timeout,
    )


def create_adapter(config: AdapterConfig | None = None) -> Any:
    """
    Create a storage adapter based on configuration.

    Args:
        config: Adapter configuration (uses global config if not provided)

    Returns:
        Adapter instance

    Raises:
        ConfigurationError: If the backend is unknown or unavailable
    """
    if config is None:
        config = get_config().adapter

    logger.info(
        "Creating adapter with backend: %s",
        config.backend,
        extra={"backend": str(config.backend), "namespace": config.namespace},
    )

    if config.backend == AdapterBackend.MEMORY:
        return MemoryAdapter(namespace=config.namespace)
    if config.backend == AdapterBackend.REDIS:
        return _create_redis_adapter(config)

    raise ConfigurationError(
        f"Unknown adapter backend: {config.backend}",
        details={"backend": str(config.backend), "supported": ["memory", "redis"]},
    )


def create_cache(adapter: Any = None) -> Cache:
    """
    Create a cache around an adapter.

    Args:
        adapter: Object satisfying the adapter contract; built from
            configuration when omitted

    Returns:
        Frozen Cache with an empty hook table

    Raises:
        ValidationError: If the adapter lacks a required callable
        ConfigurationError: If no adapter is given and configuration is invalid
    """
    if adapter is None:
        adapter = create_adapter()

    return Cache(adapter)


def get_cache(name: str = "default") -> Cache:
    """
    Get a named cache instance, creating it from configuration on first use.

    Args:
        name: Cache instance name

    Returns:
        Cache instance
    """
    if name not in _cache_instances:
        logger.debug("Cache instance '%s' not found, creating new instance", name)
        _cache_instances[name] = create_cache()

    return _cache_instances[name]


def register_cache(name: str, cache: Cache) -> Cache:
    """
    Store a cache (e.g. one returned by register_plugins) under name.

    Returns:
        The registered cache
    """
    _cache_instances[name] = cache
    logger.debug("Registered cache instance '%s'", name, extra={"cache_name": name})
    return cache


async def close_all_caches() -> None:
    """
    Close the adapters of all registered caches and clear the registry.

    Adapters without a close() method are skipped.
    """
    if not _cache_instances:
        logger.debug("No cache instances to close")
        return

    logger.info("Closing %d cache instance(s)...", len(_cache_instances))

    closed: set[int] = set()
    for name, cache in list(_cache_instances.items()):
        close = getattr(cache.adapter, "close", None)
        # Caches derived via register_plugins share their adapter
        if close is None or id(cache.adapter) in closed:
            continue
        closed.add(id(cache.adapter))
        try:
            await resolve(close())
            logger.info("Closed cache instance: %s", name)
        except Exception as e:
            logger.error(
                "Error closing cache instance '%s': %s",
                name,
                e,
                extra={"cache_name": name, "error": str(e)},
                exc_info=True,
            )

    _cache_instances.clear()
    logger.info("All cache instances closed")


def reset_cache_factory() -> None:
    """
    Clear all instance references without closing them.

    Warning: Only use this in testing contexts.
    """
    count = len(_cache_instances)
    _cache_instances.clear()
    logger.debug("Reset cache factory, cleared %d instance reference(s)", count)


def list_cache_instances() -> list[str]:
    """List all registered cache instance names."""
    return list(_cache_instances.keys())
