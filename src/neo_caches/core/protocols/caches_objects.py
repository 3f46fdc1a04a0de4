"""Typed object cache protocol.

ONLY consumer contract - the strongly typed cache facade used by
application code.
"""

from typing import Callable, Iterable, List, Optional, Tuple, TypeVar

from typing_extensions import Protocol, runtime_checkable

from .cache_key import CacheKey
from ..value_objects.keyed_cache_item import KeyedCacheItem

K = TypeVar("K", bound=CacheKey)
V = TypeVar("V")


@runtime_checkable
class CachesObjects(Protocol[K, V]):
    """Typed cache of values of type V keyed by CacheKey objects of type K."""

    def add(self, key: K, value: V) -> None:
        """Store value, raising CacheConflict if the key is present."""
        ...

    def try_add(self, key: K, value: V) -> bool:
        """Store value if absent; returns whether it was stored."""
        ...

    def add_or_replace(self, key: K, value: V) -> None:
        """Store value unconditionally."""
        ...

    def contains(self, key: K) -> bool:
        """Check whether an entry exists for key."""
        ...

    def get(self, key: K) -> V:
        """Get the value, raising CacheItemNotFound if absent."""
        ...

    def try_get(self, key: K) -> Tuple[bool, Optional[V]]:
        """Get (True, value) if present, otherwise (False, None)."""
        ...

    def get_or_default(self, key: K, default: Optional[V] = None) -> Optional[V]:
        """Get the value, or default if absent."""
        ...

    def remove(self, key: K) -> bool:
        """Remove the entry; returns whether anything was removed."""
        ...

    def get_many(self, keys: Iterable[K]) -> List[KeyedCacheItem[K, V]]:
        """Best-effort batch get. Absent or mistyped entries are omitted."""
        ...

    def get_or_add(self, key: K, factory: Callable[[K], V]) -> V:
        """Get the value, creating and storing it with factory on a miss."""
        ...
