"""
StashIt — Storage-Agnostic Cache

A cache façade over pluggable storage adapters, with ordered asynchronous
pre/post hooks around every operation and plugins that add hooks and
extension methods.
"""

__version__ = "1.0.0"

from .cache import (
    Cache,
    CacheAdapter,
    Item,
    Operation,
    create_cache,
    create_item,
    emit,
    register_plugins,
)
from .errors import StashItError, ValidationError

__all__ = [
    "Cache",
    "CacheAdapter",
    "Item",
    "Operation",
    "create_cache",
    "create_item",
    "emit",
    "register_plugins",
    "StashItError",
    "ValidationError",
]
