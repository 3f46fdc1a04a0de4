"""Pytest configuration and fixtures for neo-caches tests."""

import pytest
from dataclasses import dataclass
from unittest.mock import MagicMock

from neo_caches.application.services.typed_cache_adapter import TypedCacheAdapter
from neo_caches.infrastructure.key_providers.namespaced_region_key_provider import NamespacedRegionKeyProvider
from neo_caches.infrastructure.stores.memory_object_store import MemoryObjectStore
from neo_caches.infrastructure.stores.namespaced_region_decorator import NamespacedRegionDecorator


@dataclass(frozen=True)
class Person:
    """Sample cached value."""

    first_name: str
    last_name: str


@dataclass(frozen=True)
class PersonKey:
    """Sample typed cache key."""

    person_id: int

    def render(self) -> str:
        return f"person|{self.person_id}"


class FakeClock:
    """Manually advanced clock for expiration tests."""

    def __init__(self, now: float = 1_700_000_000.0):
        self.now = now

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@pytest.fixture
def fake_clock():
    """Fake clock starting at a fixed epoch time."""
    return FakeClock()


@pytest.fixture
def memory_store(fake_clock):
    """Memory object store driven by the fake clock."""
    return MemoryObjectStore(name="test-memory", max_entries=100, clock=fake_clock)


@pytest.fixture
def key_provider():
    """Fresh region key provider."""
    return NamespacedRegionKeyProvider()


@pytest.fixture
def region_store(memory_store, key_provider):
    """Region-aware store over the memory store."""
    return NamespacedRegionDecorator(memory_store, key_provider)


@pytest.fixture
def person_cache(memory_store):
    """Typed adapter caching Person values."""
    return TypedCacheAdapter(memory_store, value_type=Person)


@pytest.fixture
def sample_person():
    """Sample person value."""
    return Person("Ada", "Lovelace")


@pytest.fixture
def mock_redis_client():
    """Mock synchronous redis client."""
    client = MagicMock()
    client.get.return_value = None
    client.set.return_value = True
    client.getdel.return_value = None
    client.exists.return_value = 0
    client.mget.return_value = []
    client.scan_iter.return_value = iter([])
    return client
