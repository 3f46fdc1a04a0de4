"""Object store protocol.

ONLY storage contract - the minimal string-keyed store that the typed
cache adapter and region decorator delegate to.
"""

from typing import Any, Dict, Iterable, Iterator, Optional, Tuple

from typing_extensions import Protocol, runtime_checkable

from ..value_objects.cache_item import CacheItem
from ..value_objects.cache_policy import CachePolicy


@runtime_checkable
class ObjectStore(Protocol):
    """String-keyed object store.

    Implementations must be safe for concurrent single-key calls. They give
    no guarantees across calls: there is no compute-if-absent primitive.
    None is never a stored value; it always means "no entry".

    Every keyed operation accepts an optional region. Stores without native
    region support raise UnsupportedCacheOperation for a non-None region.
    """

    @property
    def name(self) -> str:
        """Store name for diagnostics."""
        ...

    @property
    def supports_regions(self) -> bool:
        """Whether non-None regions are understood natively."""
        ...

    def get(self, key: str, region: Optional[str] = None) -> Optional[Any]:
        """Get the value stored under key, None if absent."""
        ...

    def get_cache_item(self, key: str, region: Optional[str] = None) -> Optional[CacheItem]:
        """Get the stored entry as a CacheItem, None if absent."""
        ...

    def add(
        self,
        key: str,
        value: Any,
        policy: Optional[CachePolicy] = None,
        region: Optional[str] = None,
    ) -> bool:
        """Store value only if key is absent.

        Returns False if an entry already exists.
        """
        ...

    def add_or_get_existing(
        self,
        key: str,
        value: Any,
        policy: Optional[CachePolicy] = None,
        region: Optional[str] = None,
    ) -> Optional[Any]:
        """Store value if absent, otherwise return the existing value.

        Returns None when this call stored the value.
        """
        ...

    def set(
        self,
        key: str,
        value: Any,
        policy: Optional[CachePolicy] = None,
        region: Optional[str] = None,
    ) -> None:
        """Store value unconditionally."""
        ...

    def set_item(self, item: CacheItem, policy: Optional[CachePolicy] = None) -> None:
        """Store a CacheItem unconditionally."""
        ...

    def remove(self, key: str, region: Optional[str] = None) -> Optional[Any]:
        """Remove the entry, returning the removed value or None."""
        ...

    def contains(self, key: str, region: Optional[str] = None) -> bool:
        """Check whether an entry exists."""
        ...

    def get_many(self, keys: Iterable[str], region: Optional[str] = None) -> Dict[str, Any]:
        """Get the values of every present key. Absent keys are left out."""
        ...

    def get_count(self, region: Optional[str] = None) -> int:
        """Get the number of stored entries."""
        ...

    def __iter__(self) -> Iterator[Tuple[str, Any]]:
        """Iterate over (key, value) pairs."""
        ...

    def __getitem__(self, key: str) -> Optional[Any]:
        """Indexer shortcut for get() without a region."""
        ...

    def __setitem__(self, key: str, value: Any) -> None:
        """Indexer shortcut for set() without a region."""
        ...
