"""
StashIt — Stats Plugin

Counts hits, misses, sets and removals through post hooks and exposes
them as get_stats() / reset_stats() extensions on the cache.
"""

from typing import Any

from ..cache.hooks import Args, Operation
from ..cache.plugins import Plugin


class OperationStats:
    """Operation counters fed by hook handlers."""

    def __init__(self) -> None:
        self.reset()

    def reset(self) -> None:
        self.hits = 0
        self.misses = 0
        self.sets = 0
        self.removals = 0

    def on_get_item(self, args: Args) -> Args:
        if args.get("item") is None:
            self.misses += 1
        else:
            self.hits += 1
        return args

    def on_set_item(self, args: Args) -> Args:
        self.sets += 1
        return args

    def on_remove_item(self, args: Args) -> Args:
        if args.get("result"):
            self.removals += 1
        return args

    def snapshot(self) -> dict[str, Any]:
        total_requests = self.hits + self.misses
        hit_rate = (self.hits / total_requests * 100) if total_requests > 0 else 0.0

        return {
            "hits": self.hits,
            "misses": self.misses,
            "hit_rate": round(hit_rate, 2),
            "sets": self.sets,
            "removals": self.removals,
        }


def create_stats_plugin(stats: OperationStats | None = None) -> Plugin:
    """
    Build a plugin counting cache operations.

    Args:
        stats: Counter object to feed (a fresh one by default)

    Returns:
        Plugin with hooks and get_stats/reset_stats extensions
    """
    counters = stats or OperationStats()

    def create_extensions(context: dict[str, Any]) -> dict[str, Any]:
        return {
            "get_stats": counters.snapshot,
            "reset_stats": counters.reset,
        }

    return {
        "hooks": [
            {"event": Operation.GET_ITEM.post_event, "handler": counters.on_get_item},
            {"event": Operation.SET_ITEM.post_event, "handler": counters.on_set_item},
            {"event": Operation.REMOVE_ITEM.post_event, "handler": counters.on_remove_item},
        ],
        "createExtensions": create_extensions,
    }
