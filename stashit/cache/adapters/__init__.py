"""
StashIt — Storage Adapters

Exports available adapter implementations.

Redis adapter is lazy-loaded via factory.py to avoid a hard dependency.
"""

from .memory import MemoryAdapter

__all__ = [
    "MemoryAdapter",
]
