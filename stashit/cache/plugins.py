"""
StashIt — Plugin Registrar

Extends a cache with plugins. A plugin contributes hooks, extension
methods, or both:

    {
        "hooks": [{"event": "postGetItem", "handler": count_hits}],
        "createExtensions": lambda ctx: {"get_stats": ...},
    }

register_plugins() never mutates the instance it is given. Extensions are
overlaid onto fresh copies, the hook table is cloned before plugin hooks
are appended, and the result is a new frozen instance.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import TYPE_CHECKING, Any, TypedDict

from ..errors import ValidationError
from .hooks import Hook, emit

if TYPE_CHECKING:
    from .cache import Cache

logger = logging.getLogger(__name__)

ExtensionsFactory = Callable[[dict[str, Any]], dict[str, Callable[..., Any]]]

Plugin = TypedDict(
    "Plugin",
    {"hooks": list[Hook], "createExtensions": ExtensionsFactory},
    total=False,
)


def validate_plugins(plugins: Any) -> None:
    """
    Validate the plugin list shape.

    Raises:
        ValidationError: If plugins is not a list, or a plugin carries
            neither hooks nor createExtensions
    """
    if not isinstance(plugins, list | tuple):
        raise ValidationError("'plugins' need to be passed as an array.", details={"type": type(plugins).__name__})

    for index, plugin in enumerate(plugins):
        if not isinstance(plugin, dict) or ("hooks" not in plugin and "createExtensions" not in plugin):
            raise ValidationError(
                "Plugin must contain hooks or createExtensions method or both.",
                details={"index": index},
            )


def add_extensions(cache_instance: Cache, create_extensions: Any) -> Cache:
    """
    Overlay the extensions created by a plugin onto a copy of cache_instance.

    Raises:
        ValidationError: If create_extensions is not callable, returns a
            non-mapping, or an extension name is already taken
    """
    if not callable(create_extensions):
        raise ValidationError("'createExtensions' must be a function.")

    extensions = create_extensions({"cacheInstance": cache_instance, "emit": emit})
    if not isinstance(extensions, dict):
        raise ValidationError("'createExtensions' must return an object.", details={"type": type(extensions).__name__})

    taken = cache_instance.own_property_names()
    for name, method in extensions.items():
        if name in taken:
            raise ValidationError(f"Extension '{name}' already exists.", details={"extension": name})
        if not callable(method):
            raise ValidationError(f"Extension '{name}' must be a function.", details={"extension": name})

    return cache_instance.derive(extensions={**cache_instance.extensions, **extensions})


def register_plugins(cache_instance: Cache, plugins: list[Plugin]) -> Cache:
    """
    Build a new cache instance from cache_instance extended by plugins.

    Plugins are processed left to right: extensions first (each plugin sees
    the extensions of the ones before it), then every plugin's hooks are
    appended to a cloned hook table.

    Args:
        cache_instance: Cache to extend (left untouched)
        plugins: List of plugin mappings

    Returns:
        New frozen Cache
    """
    validate_plugins(plugins)

    extended = cache_instance
    for plugin in plugins:
        if "createExtensions" in plugin:
            extended = add_extensions(extended, plugin["createExtensions"])

    result = extended.derive()
    for plugin in plugins:
        if "hooks" in plugin:
            result.add_hooks(plugin["hooks"])

    logger.debug(
        "Registered %d plugin(s)",
        len(plugins),
        extra={"plugin_count": len(plugins), "extensions": sorted(result.extensions)},
    )

    return result
