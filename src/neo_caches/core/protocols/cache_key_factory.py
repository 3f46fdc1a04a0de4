"""Cache key factory protocol."""

from typing import Any

from typing_extensions import Protocol, runtime_checkable

from .cache_key import CacheKey


@runtime_checkable
class CacheKeyFactory(Protocol):
    """Creates cache keys from an ordered list of objects."""

    def create_key(self, *objects: Any) -> CacheKey:
        """Create a cache key aggregating the given objects in order."""
        ...
