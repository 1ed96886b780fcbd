"""
StashIt — Memory Adapter

In-memory adapter keyed by built key. Suitable for single-process use and
tests. ttl is stored with the item but never enforced.
"""

import asyncio
import logging
from typing import Any

from ..interface import CacheAdapter
from ..item import UNSET, Extra, Item, Key, create_item

logger = logging.getLogger(__name__)


class MemoryAdapter(CacheAdapter):
    """
    Dict-backed adapter.

    Features:
    - Optional key namespace ("<namespace>.<key>")
    - Shallow-merge (add_extra) and replace (set_extra) of metadata
    - Operation counters exposed through get_stats()
    """

    def __init__(self, namespace: str | None = None):
        """
        Initialize memory adapter.

        Args:
            namespace: Key prefix; keys are used verbatim when None or empty
        """
        self.namespace = namespace or None

        self._items: dict[Key, Item] = {}

        # Stats
        self._hits = 0
        self._misses = 0
        self._sets = 0
        self._removals = 0

        self._lock = asyncio.Lock()

    def build_key(self, key: Key) -> Key:
        """Create the storage key."""
        if self.namespace is None:
            return key
        return f"{self.namespace}.{key}"

    async def get_item(self, key: Key) -> Item | None:
        """Retrieve an item, None if absent."""
        async with self._lock:
            item = self._items.get(key)

            if item is None:
                self._misses += 1
                return None

            self._hits += 1
            return item

    async def get_extra(self, key: Key) -> Extra | None:
        """Retrieve an item's extra, None if absent."""
        async with self._lock:
            item = self._items.get(key)
            return None if item is None else item.extra

    async def set_item(self, key: Key, value: Any, extra: Any = UNSET, ttl: Any = None) -> Item:
        """Store an item (validated through create_item)."""
        item = create_item(key, value, extra, ttl)

        async with self._lock:
            self._items[key] = item
            self._sets += 1

        return item

    async def add_extra(self, key: Key, extra: Extra) -> Extra | None:
        """Merge extra into the stored item's extra."""
        async with self._lock:
            item = self._items.get(key)
            if item is None:
                return None

            merged = {**item.extra, **extra}
            self._items[key] = item.model_copy(update={"extra": merged})
            return merged

    async def set_extra(self, key: Key, extra: Extra) -> Extra | None:
        """Replace the stored item's extra."""
        async with self._lock:
            item = self._items.get(key)
            if item is None:
                return None

            self._items[key] = item.model_copy(update={"extra": dict(extra)})
            return extra

    async def has_item(self, key: Key) -> bool:
        """Check if an item is stored."""
        async with self._lock:
            return key in self._items

    async def remove_item(self, key: Key) -> bool:
        """Remove an item; True if it existed."""
        async with self._lock:
            if key not in self._items:
                return False

            del self._items[key]
            self._removals += 1
            return True

    async def clear(self) -> int:
        """Remove all items and return how many there were."""
        async with self._lock:
            size = len(self._items)
            self._items.clear()
            logger.info(
                f"Cleared {size} items from memory adapter",
                extra={"namespace": self.namespace, "cleared": size},
            )
            return size

    async def get_stats(self) -> dict[str, Any]:
        """Get adapter statistics."""
        async with self._lock:
            total_requests = self._hits + self._misses
            hit_rate = (self._hits / total_requests * 100) if total_requests > 0 else 0.0

            return {
                "backend": "memory",
                "size": len(self._items),
                "hits": self._hits,
                "misses": self._misses,
                "hit_rate": round(hit_rate, 2),
                "sets": self._sets,
                "removals": self._removals,
                "namespace": self.namespace,
            }

    async def close(self) -> None:
        """Release resources (nothing to release in-process)."""
        logger.debug(f"Memory adapter closed for namespace '{self.namespace}'")
