"""
StashIt — Bundled Plugins

Usage:
    from stashit.plugins import create_logging_plugin, create_stats_plugin

    cache = create_cache(MemoryAdapter()).register_plugins(
        [create_logging_plugin(), create_stats_plugin()]
    )
    cache.get_stats()
"""

from .logging_plugin import create_logging_plugin
from .stats import OperationStats, create_stats_plugin

__all__ = [
    "create_logging_plugin",
    "create_stats_plugin",
    "OperationStats",
]
