"""
StashIt — Adapter Interface

Defines the capability set a storage backend must expose to be wrapped
by a cache. Subclassing CacheAdapter is optional: any object providing
the required callables is accepted, and validate_adapter() checks that
at the point where the adapter is injected.

Every method may return its value directly or an awaitable.
"""

from abc import ABC, abstractmethod
from collections.abc import Awaitable
from typing import Any

from ..errors import ValidationError
from .item import Extra, Item, Key, Ttl

REQUIRED_METHODS: tuple[str, ...] = (
    "build_key",
    "get_item",
    "get_extra",
    "set_item",
    "add_extra",
    "set_extra",
    "has_item",
    "remove_item",
)

_NON_OBJECT_TYPES = (str, bytes, bytearray, int, float, complex, bool, list, tuple, set, frozenset, dict)


class CacheAdapter(ABC):
    """
    Abstract base class for storage adapters.

    Implementations should never interpret keys beyond build_key(), and
    should return None for missing items/extras.
    """

    @abstractmethod
    def build_key(self, key: Key) -> Key | Awaitable[Key]:
        """
        Turn a caller key into a storage key.

        Args:
            key: Caller-supplied key

        Returns:
            Storage key (e.g. namespaced)
        """
        pass

    @abstractmethod
    def get_item(self, key: Key) -> Item | None | Awaitable[Item | None]:
        """
        Retrieve an item.

        Args:
            key: Storage key (already built)

        Returns:
            Item if stored, None otherwise
        """
        pass

    @abstractmethod
    def get_extra(self, key: Key) -> Extra | None | Awaitable[Extra | None]:
        """Retrieve only the extra metadata of an item, None if absent."""
        pass

    @abstractmethod
    def set_item(self, key: Key, value: Any, extra: Extra | None = None, ttl: Ttl = None) -> Item | Awaitable[Item]:
        """
        Store an item, replacing any existing one.

        Args:
            key: Storage key (already built)
            value: Value to store
            extra: Metadata mapping
            ttl: Optional expiry; only passed by the cache when set

        Returns:
            The stored Item
        """
        pass

    @abstractmethod
    def add_extra(self, key: Key, extra: Extra) -> Extra | Awaitable[Extra]:
        """Merge extra into the item's existing extra and return the result."""
        pass

    @abstractmethod
    def set_extra(self, key: Key, extra: Extra) -> Extra | Awaitable[Extra]:
        """Replace the item's extra and return it."""
        pass

    @abstractmethod
    def has_item(self, key: Key) -> bool | Awaitable[bool]:
        """Check whether an item is stored under key."""
        pass

    @abstractmethod
    def remove_item(self, key: Key) -> bool | Awaitable[bool]:
        """
        Remove an item.

        Returns:
            True if the item existed and was removed, False otherwise
        """
        pass


def validate_adapter(adapter: Any, required_methods: tuple[str, ...] = REQUIRED_METHODS) -> None:
    """
    Check that adapter exposes every required capability as a callable.

    Raises:
        ValidationError: If adapter is not an object, lacks a method, or
            a method is not callable
    """
    if adapter is None or isinstance(adapter, type) or isinstance(adapter, _NON_OBJECT_TYPES):
        raise ValidationError("'adapter' must be an object.", details={"type": type(adapter).__name__})

    missing = [name for name in required_methods if not hasattr(adapter, name)]
    if missing:
        raise ValidationError(
            "Not all required methods are present in adapter.",
            details={"missing": missing},
        )

    not_callable = [name for name in required_methods if not callable(getattr(adapter, name))]
    if not_callable:
        raise ValidationError(
            "Not all required methods are functions.",
            details={"not_callable": not_callable},
        )
