"""
StashIt — Test Configuration and Shared Fixtures

Provides pytest configuration and shared fixtures for unit and integration tests.
"""

import os
from collections.abc import Generator

import pytest

from stashit.cache import Cache, create_cache
from stashit.cache.adapters import MemoryAdapter
from stashit.cache.interface import REQUIRED_METHODS
from tests.helpers import FOO_KEY, FOO_VALUE, built, make_spy_adapter

# Set test environment
os.environ["ENVIRONMENT"] = "test"
os.environ["LOG_LEVEL"] = "DEBUG"


@pytest.fixture
async def spy_adapter() -> MemoryAdapter:
    """Spy adapter pre-populated with the foo item (call history cleared)."""
    adapter = make_spy_adapter()
    await adapter.set_item(built(FOO_KEY), FOO_VALUE)
    for name in REQUIRED_METHODS:
        getattr(adapter, name).reset_mock()
    return adapter


@pytest.fixture
def cache(spy_adapter: MemoryAdapter) -> Cache:
    """Cache over the spy adapter with an empty hook table."""
    return create_cache(spy_adapter)


@pytest.fixture
def test_redis_url() -> str:
    """Get Redis URL for testing (database 15 for isolation)."""
    return os.environ.get("TEST_REDIS_URL", "redis://localhost:6379/15")


@pytest.fixture
def mock_env_memory(monkeypatch: pytest.MonkeyPatch) -> None:
    """Set environment variables for the memory adapter."""
    monkeypatch.delenv("REDIS_URL", raising=False)
    monkeypatch.setenv("CACHE_ADAPTER", "memory")
    monkeypatch.setenv("CACHE_NAMESPACE", "test")


@pytest.fixture(autouse=True)
def reset_state() -> Generator[None, None, None]:
    """Reset the cache registry and loaded config after each test."""
    yield
    from stashit.cache.factory import reset_cache_factory
    from stashit.config import loader

    reset_cache_factory()
    loader._config_instance = None
