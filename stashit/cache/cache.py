"""
StashIt — Cache Façade

Wraps a storage adapter. Every public operation:

1. emits pre<Op> with the raw inputs and cacheInstance,
2. picks up the (possibly rewritten) inputs and cacheInstance,
3. builds the storage key through the hooked build_key,
4. calls the adapter,
5. emits post<Op> over the adapter's result,
6. returns the corresponding field of the post bag.

clear() takes no key and skips step 3; it needs an adapter with clear().

A hook may swap cacheInstance in the pre bag; nested calls (build_key,
has_item) and the post bag then use the substituted instance.

Instances are frozen once constructed: attributes cannot be reassigned
and deleting one is silently ignored. The hook table itself still accepts
new hooks through add_hook()/add_hooks().
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable, Mapping
from types import MappingProxyType
from typing import Any

from ..errors import CacheError, ValidationError
from .hooks import Handler, Hook, Operation, emit, resolve, validate_hook
from .interface import validate_adapter
from .item import UNSET, Extra, Item, Key, Ttl, validate_extra
from .plugins import Plugin, register_plugins

logger = logging.getLogger(__name__)


class Cache:
    """
    Hook-aware cache over a pluggable adapter.

    Use create_cache() rather than instantiating directly.
    """

    def __init__(
        self,
        adapter: Any,
        hooks: dict[str, list[Handler]] | None = None,
        extensions: Mapping[str, Callable[..., Any]] | None = None,
    ):
        validate_adapter(adapter)

        self._adapter = adapter
        self._hooks: dict[str, list[Handler]] = hooks if hooks is not None else {}
        self._extensions: dict[str, Callable[..., Any]] = dict(extensions or {})
        self._frozen = True

    # ------------ Immutability ------------

    def __setattr__(self, name: str, value: Any) -> None:
        if self.__dict__.get("_frozen", False):
            raise AttributeError(f"Cannot assign '{name}' on a frozen cache instance")
        super().__setattr__(name, value)

    def __delattr__(self, name: str) -> None:
        if self.__dict__.get("_frozen", False):
            logger.debug("Ignored attempt to delete '%s' from a frozen cache instance", name)
            return
        super().__delattr__(name)

    def __getattr__(self, name: str) -> Any:
        # Only reached when regular lookup fails: resolve plugin extensions.
        extensions = self.__dict__.get("_extensions", {})
        if name in extensions:
            return extensions[name]
        raise AttributeError(f"'{type(self).__name__}' object has no attribute '{name}'")

    def __dir__(self) -> Iterable[str]:
        return sorted(set(super().__dir__()) | set(self._extensions))

    def __repr__(self) -> str:
        return f"Cache(adapter={type(self._adapter).__name__}, extensions={sorted(self._extensions)})"

    def own_property_names(self) -> set[str]:
        """Every name regular lookup resolves (class and instance attributes) plus extensions."""
        return set(dir(type(self))) | set(self.__dict__) | set(self._extensions)

    @property
    def adapter(self) -> Any:
        return self._adapter

    @property
    def extensions(self) -> Mapping[str, Callable[..., Any]]:
        return MappingProxyType(self._extensions)

    # ------------ Hooks ------------

    def add_hook(self, hook: Hook) -> None:
        """
        Append a handler to the ordered list for its event.

        Raises:
            ValidationError: If the hook is malformed
        """
        validate_hook(hook)
        self._hooks.setdefault(hook["event"], []).append(hook["handler"])

    def add_hooks(self, hooks: list[Hook]) -> None:
        """Add several hooks, in order."""
        if not isinstance(hooks, list | tuple):
            raise ValidationError("Hooks need to be passed as an array.", details={"type": type(hooks).__name__})

        for hook in hooks:
            self.add_hook(hook)

    def get_hooks(self) -> dict[str, list[Handler]]:
        """Return a snapshot of the hook table."""
        return {event: list(handlers) for event, handlers in self._hooks.items()}

    def register_plugins(self, plugins: list[Plugin]) -> Cache:
        """Return a new frozen cache extended by plugins; this one is left untouched."""
        return register_plugins(self, plugins)

    def derive(self, extensions: Mapping[str, Callable[..., Any]] | None = None) -> Cache:
        """
        Build a sibling instance over the same adapter.

        The sibling gets its own copy of the hook table; extensions default
        to this instance's.
        """
        return type(self)(
            self._adapter,
            hooks=self.clone_hooks(),
            extensions=self._extensions if extensions is None else extensions,
        )

    def clone_hooks(self) -> dict[str, list[Handler]]:
        """Copy the hook table so appending to it never touches this instance."""
        return {event: list(handlers) for event, handlers in self._hooks.items()}

    # ------------ Operations ------------

    async def build_key(self, key: Key) -> Key:
        pre = await emit(Operation.BUILD_KEY.pre_event, {"cacheInstance": self, "key": key})
        built_key = await resolve(self._adapter.build_key(pre["key"]))
        post = await emit(
            Operation.BUILD_KEY.post_event,
            {"cacheInstance": pre["cacheInstance"], "key": built_key},
        )

        return post["key"]

    async def get_item(self, key: Key) -> Item | None:
        pre = await emit(Operation.GET_ITEM.pre_event, {"cacheInstance": self, "key": key})
        cache_instance = pre["cacheInstance"]
        item = await resolve(self._adapter.get_item(await cache_instance.build_key(pre["key"])))
        post = await emit(
            Operation.GET_ITEM.post_event,
            {"cacheInstance": cache_instance, "key": pre["key"], "item": item},
        )

        return post["item"]

    async def get_extra(self, key: Key) -> Extra | None:
        pre = await emit(Operation.GET_EXTRA.pre_event, {"cacheInstance": self, "key": key})
        cache_instance = pre["cacheInstance"]
        extra = await resolve(self._adapter.get_extra(await cache_instance.build_key(pre["key"])))
        post = await emit(
            Operation.GET_EXTRA.post_event,
            {"cacheInstance": cache_instance, "key": pre["key"], "extra": extra},
        )

        return post["extra"]

    async def set_item(self, key: Key, value: Any, extra: Any = UNSET, ttl: Ttl = None) -> Item:
        """
        Store an item.

        Args:
            key: Item key
            value: Value to store
            extra: Metadata mapping (empty when omitted)
            ttl: Optional expiry, forwarded to the adapter only when set

        Returns:
            Item as returned by the adapter and post hooks
        """
        if extra is UNSET:
            extra = {}

        pre = await emit(
            Operation.SET_ITEM.pre_event,
            {"cacheInstance": self, "key": key, "value": value, "extra": extra, "ttl": ttl},
        )
        cache_instance = pre["cacheInstance"]
        built_key = await cache_instance.build_key(pre["key"])
        if pre["ttl"] is None:
            item = await resolve(self._adapter.set_item(built_key, pre["value"], pre["extra"]))
        else:
            item = await resolve(self._adapter.set_item(built_key, pre["value"], pre["extra"], pre["ttl"]))
        post = await emit(
            Operation.SET_ITEM.post_event,
            {
                "cacheInstance": cache_instance,
                "key": pre["key"],
                "value": pre["value"],
                "extra": pre["extra"],
                "ttl": pre["ttl"],
                "item": item,
            },
        )

        return post["item"]

    async def add_extra(self, key: Key, extra: Extra) -> Extra | None:
        """Merge extra into an existing item's extra; None when the item is absent."""
        return await self._change_extra(Operation.ADD_EXTRA, self._adapter.add_extra, key, extra)

    async def set_extra(self, key: Key, extra: Extra) -> Extra | None:
        """Replace an existing item's extra; None when the item is absent."""
        return await self._change_extra(Operation.SET_EXTRA, self._adapter.set_extra, key, extra)

    async def _change_extra(
        self,
        operation: Operation,
        adapter_method: Callable[[Key, Extra], Any],
        key: Key,
        extra: Any,
    ) -> Extra | None:
        pre = await emit(operation.pre_event, {"cacheInstance": self, "key": key, "extra": extra})
        cache_instance = pre["cacheInstance"]

        # Validated after pre hooks, before the adapter and post hooks.
        validate_extra(pre["extra"])

        result = None
        if await cache_instance.has_item(pre["key"]):
            built_key = await cache_instance.build_key(pre["key"])
            result = await resolve(adapter_method(built_key, pre["extra"]))
        else:
            logger.debug(
                "Skipped %s: no item stored under '%s'",
                operation.value,
                pre["key"],
                extra={"operation": operation.value, "key": pre["key"]},
            )

        post = await emit(
            operation.post_event,
            {"cacheInstance": cache_instance, "key": pre["key"], "extra": result},
        )

        return post["extra"]

    async def has_item(self, key: Key) -> bool:
        pre = await emit(Operation.HAS_ITEM.pre_event, {"cacheInstance": self, "key": key})
        cache_instance = pre["cacheInstance"]
        result = await resolve(self._adapter.has_item(await cache_instance.build_key(pre["key"])))
        post = await emit(
            Operation.HAS_ITEM.post_event,
            {"cacheInstance": cache_instance, "key": pre["key"], "result": result},
        )

        return post["result"]

    async def remove_item(self, key: Key) -> bool:
        pre = await emit(Operation.REMOVE_ITEM.pre_event, {"cacheInstance": self, "key": key})
        cache_instance = pre["cacheInstance"]
        result = await resolve(self._adapter.remove_item(await cache_instance.build_key(pre["key"])))
        post = await emit(
            Operation.REMOVE_ITEM.post_event,
            {"cacheInstance": cache_instance, "key": pre["key"], "result": result},
        )

        return post["result"]

    async def clear(self) -> int:
        """
        Remove every item the adapter holds.

        Returns:
            Number of removed items (as reported by the adapter and post hooks)

        Raises:
            CacheError: If the adapter has no clear() method
        """
        if not callable(getattr(self._adapter, "clear", None)):
            raise CacheError(
                "Adapter does not support 'clear'.",
                details={"adapter": type(self._adapter).__name__},
            )

        pre = await emit(Operation.CLEAR.pre_event, {"cacheInstance": self})
        result = await resolve(self._adapter.clear())
        post = await emit(Operation.CLEAR.post_event, {"cacheInstance": pre["cacheInstance"], "result": result})

        return post["result"]
