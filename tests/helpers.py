"""
StashIt — Test Helpers

Shared constants and adapter builders used across the test suite.
"""

import socket
from typing import Any
from unittest.mock import MagicMock

import pytest

from stashit.cache.adapters import MemoryAdapter
from stashit.cache.interface import REQUIRED_METHODS

NAMESPACE = "namespace"
FOO_KEY = "foo"
FOO_VALUE = "fooValue"
FOO_EXTRA = {"foo": "extra"}
BAR_KEY = "bar"
BAR_VALUE = "barValue"
NONEXISTENT_KEY = "nonexistent"

NON_OBJECT_VALUES: list[Any] = ["string", 0, 1.5, True, False, None, [], ["a"], (), lambda: None]


def built(key: str) -> str:
    """Storage key the spy adapter builds for key."""
    return f"{NAMESPACE}.{key}"


def is_redis_available() -> bool:
    """Check if Redis server is available for testing."""
    try:
        sock = socket.socket(socket.AF_INET, socket.SOCK_STREAM)
        sock.settimeout(1)
        result = sock.connect_ex(("localhost", 6379))
        sock.close()
        return result == 0
    except OSError:
        return False


# Skip marker for Redis tests
redis_available = pytest.mark.skipif(not is_redis_available(), reason="Redis server not available")


def make_spy_adapter(namespace: str = NAMESPACE) -> MemoryAdapter:
    """
    Memory adapter whose contract methods are wrapped in mocks.

    The real behavior is kept; calls can be asserted on
    (adapter.has_item.assert_called_once_with(...)).
    """
    adapter = MemoryAdapter(namespace=namespace)
    for name in REQUIRED_METHODS:
        setattr(adapter, name, MagicMock(wraps=getattr(adapter, name)))
    return adapter
