"""
StashIt — Cache Module

Hook-aware cache façade over pluggable storage adapters.

- cache.py: Cache façade (pre/post hooks around every operation)
- hooks.py: Ordered asynchronous hook emitter
- plugins.py: Plugin registrar (hooks + extension methods)
- interface.py: Adapter contract
- item.py: Item model and validation
- factory.py: Cache creation and named registry
- adapters/: Adapter implementations (memory in core, redis optional)

Usage:
    from stashit.cache import create_cache
    from stashit.cache.adapters import MemoryAdapter

    cache = create_cache(MemoryAdapter())
    await cache.set_item("key", "value")
    item = await cache.get_item("key")
"""

from .cache import Cache
from .factory import (
    close_all_caches,
    create_adapter,
    create_cache,
    get_cache,
    list_cache_instances,
    register_cache,
    reset_cache_factory,
)
from .hooks import Hook, Operation, emit
from .interface import REQUIRED_METHODS, CacheAdapter, validate_adapter
from .item import Item, create_item, validate_extra
from .plugins import Plugin, register_plugins

__all__ = [
    # Factory functions
    "create_cache",
    "create_adapter",
    "get_cache",
    "register_cache",
    "close_all_caches",
    "list_cache_instances",
    "reset_cache_factory",
    # Façade
    "Cache",
    # Hooks and plugins
    "Hook",
    "Operation",
    "emit",
    "Plugin",
    "register_plugins",
    # Adapter contract
    "CacheAdapter",
    "REQUIRED_METHODS",
    "validate_adapter",
    # Items
    "Item",
    "create_item",
    "validate_extra",
]
