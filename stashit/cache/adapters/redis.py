"""
StashIt — Redis Adapter

Asynchronous Redis adapter:
- Items stored as JSON documents {"key", "value", "extra", "ttl"}
- Namespace prefixing for safe multi-tenant usage
- Integer ttl passed through as Redis EX seconds

Requires: redis>=5.0 with asyncio support

Example:
    adapter = RedisAdapter(redis_url="redis://localhost:6379", namespace="stashit")
    cache = create_cache(adapter)
    await cache.set_item("greeting", {"msg": "hello"})
"""

from __future__ import annotations

import json
import logging
from datetime import datetime
from typing import Any

from ...errors import CacheOperationError
from ..interface import CacheAdapter
from ..item import UNSET, Extra, Item, Key, create_item

logger = logging.getLogger(__name__)

try:
    # redis-py asyncio client (v4+)
    from redis.asyncio import Redis
except ImportError as e:  # pragma: no cover
    raise ImportError(
        "Redis async client is required but not installed. "
        "Install with: pip install 'redis>=5.0.0' or pip install 'stashit[redis]'."
    ) from e


class RedisAdapter(CacheAdapter):
    """
    Redis adapter with JSON serialization.

    Notes:
    - Built keys are "<namespace>:<key>".
    - datetime ttl values are serialized as ISO strings and not applied as expiry.
    - Failures are logged and re-raised as CacheOperationError.
    """

    def __init__(
        self,
        redis_url: str,
        namespace: str = "stashit",
        max_connections: int = 10,
        socket_timeout: int = 5,
    ) -> None:
        """
        Initialize Redis adapter.

        Args:
            redis_url: Connection URL, e.g. redis://localhost:6379/0 or rediss:// for TLS
            namespace: Prefix for all keys
            max_connections: Connection pool size
            socket_timeout: Socket timeout in seconds
        """
        if not redis_url:
            raise ValueError("redis_url is required")

        self.namespace = namespace.strip() or "stashit"
        self._hits = 0
        self._misses = 0
        self._sets = 0
        self._removals = 0

        # Lazy connection; connects on first command
        self._client = Redis.from_url(  # type: ignore[call-overload]
            url=redis_url,
            decode_responses=True,
            max_connections=max_connections,
            socket_timeout=socket_timeout,
        )

    # ------------ Helpers ------------

    @staticmethod
    def _to_json(item: Item) -> str:
        """Serialize an item to a JSON string."""
        data = item.model_dump()
        if isinstance(data["ttl"], datetime):
            data["ttl"] = data["ttl"].isoformat()
        return json.dumps(data, ensure_ascii=False, separators=(",", ":"))

    @staticmethod
    def _from_json(data: str | bytes | None) -> Item | None:
        """Deserialize a JSON document into an Item. Returns None if data is None."""
        if data is None:
            return None
        if isinstance(data, bytes):
            data = data.decode("utf-8")
        return Item(**json.loads(data))

    @staticmethod
    def _expiry(ttl: Any) -> int | None:
        """Redis EX seconds for integer ttl values, None otherwise."""
        if isinstance(ttl, int | float) and not isinstance(ttl, bool):
            return int(ttl)
        return None

    def _fail(self, operation: str, key: Key | None, error: Exception) -> CacheOperationError:
        logger.error(
            f"Redis {operation} failed for key '{key}': {error}",
            extra={"operation": operation, "key": key, "namespace": self.namespace, "error": str(error)},
            exc_info=True,
        )
        return CacheOperationError(operation, "redis", details={"key": key, "error": str(error)})

    async def _load(self, key: Key, operation: str) -> Item | None:
        try:
            raw = await self._client.get(key)
        except Exception as e:
            raise self._fail(operation, key, e) from e
        return self._from_json(raw)

    async def _store(self, item: Item, operation: str, keep_ttl: bool = False) -> None:
        try:
            if keep_ttl:
                await self._client.set(name=item.key, value=self._to_json(item), keepttl=True)
            else:
                await self._client.set(name=item.key, value=self._to_json(item), ex=self._expiry(item.ttl))
        except Exception as e:
            raise self._fail(operation, item.key, e) from e

    # ------------ Adapter contract ------------

    def build_key(self, key: Key) -> Key:
        """Create namespaced key."""
        return f"{self.namespace}:{key}"

    async def get_item(self, key: Key) -> Item | None:
        item = await self._load(key, "get_item")
        if item is None:
            self._misses += 1
        else:
            self._hits += 1
        return item

    async def get_extra(self, key: Key) -> Extra | None:
        item = await self._load(key, "get_extra")
        return None if item is None else item.extra

    async def set_item(self, key: Key, value: Any, extra: Any = UNSET, ttl: Any = None) -> Item:
        item = create_item(key, value, extra, ttl)
        await self._store(item, "set_item")
        self._sets += 1
        return item

    async def add_extra(self, key: Key, extra: Extra) -> Extra | None:
        item = await self._load(key, "add_extra")
        if item is None:
            return None

        merged = {**item.extra, **extra}
        await self._store(item.model_copy(update={"extra": merged}), "add_extra", keep_ttl=True)
        return merged

    async def set_extra(self, key: Key, extra: Extra) -> Extra | None:
        item = await self._load(key, "set_extra")
        if item is None:
            return None

        await self._store(item.model_copy(update={"extra": dict(extra)}), "set_extra", keep_ttl=True)
        return extra

    async def has_item(self, key: Key) -> bool:
        try:
            return bool(await self._client.exists(key))
        except Exception as e:
            raise self._fail("has_item", key, e) from e

    async def remove_item(self, key: Key) -> bool:
        try:
            removed = await self._client.delete(key)
        except Exception as e:
            raise self._fail("remove_item", key, e) from e

        if removed:
            self._removals += 1
        return bool(removed)

    # ------------ Lifecycle ------------

    async def clear(self) -> int:
        """
        Remove every item under the namespace.

        Implementation: SCAN match "<namespace>:*" and DEL in batches.
        """
        pattern = f"{self.namespace}:*"
        cursor = 0
        total_removed = 0

        try:
            while True:
                cursor, keys = await self._client.scan(cursor=cursor, match=pattern, count=1000)
                if keys:
                    total_removed += await self._client.delete(*keys)
                if cursor == 0:
                    break
        except Exception as e:
            raise self._fail("clear", None, e) from e

        self._removals += total_removed
        logger.info(f"Cleared {total_removed} keys from namespace '{self.namespace}'")
        return total_removed

    async def get_stats(self) -> dict[str, Any]:
        """Return adapter statistics and connectivity."""
        total_requests = self._hits + self._misses
        stats: dict[str, Any] = {
            "backend": "redis",
            "namespace": self.namespace,
            "hits": self._hits,
            "misses": self._misses,
            "hit_rate": round((self._hits / total_requests) * 100, 2) if total_requests else 0.0,
            "sets": self._sets,
            "removals": self._removals,
            "connected": False,
        }

        try:
            stats["connected"] = bool(await self._client.ping())
        except Exception as e:
            logger.warning(f"Redis ping failed: {e}", extra={"error": str(e)})

        return stats

    async def close(self) -> None:
        """Close the Redis client and release resources."""
        try:
            await self._client.aclose()
            logger.info(f"Closed Redis adapter for namespace '{self.namespace}'")
        finally:
            await self._client.connection_pool.disconnect()
