"""Namespaced region decorator.

ONLY region emulation - wraps a flat ObjectStore and exposes regions by
rewriting every (key, region) pair through a RegionKeyProvider.

Following maximum separation architecture - one file = one purpose.
"""

from typing import Any, Dict, Iterable, Iterator, Optional, Tuple

from ...core.exceptions.invalid_cache_argument import InvalidCacheArgument
from ...core.exceptions.unsupported_cache_operation import UnsupportedCacheOperation
from ...core.protocols.object_store import ObjectStore
from ...core.protocols.region_key_provider import RegionKeyProvider
from ...core.value_objects.cache_item import CacheItem
from ...core.value_objects.cache_policy import CachePolicy
from ..key_providers.namespaced_region_key_provider import NamespacedRegionKeyProvider


class NamespacedRegionDecorator:
    """Region-aware ObjectStore over a store with a single key space.

    Every keyed operation is delegated as
    ``wrapped.op(provider.get_cache_key(key, region), region=None)``.

    Operations that cannot be answered correctly for a simulated region are
    rejected with UnsupportedCacheOperation instead of returning a wrong
    answer: counting a named region, enumerating, and the indexer shortcuts
    that bypass the region parameter.
    """

    def __init__(self, wrapped: ObjectStore, key_provider: Optional[RegionKeyProvider] = None):
        """Initialize region decorator.

        Args:
            wrapped: The flat store to delegate to
            key_provider: Region key provider; a new NamespacedRegionKeyProvider
                if omitted. It must live as long as the stored entries do.
        """
        if wrapped is None:
            raise InvalidCacheArgument.none_value("wrapped")

        self._wrapped = wrapped
        self._key_provider = key_provider or NamespacedRegionKeyProvider()

    @property
    def name(self) -> str:
        return self._wrapped.name

    @property
    def supports_regions(self) -> bool:
        return True

    @property
    def wrapped(self) -> ObjectStore:
        return self._wrapped

    @property
    def key_provider(self) -> RegionKeyProvider:
        return self._key_provider

    def get(self, key: str, region: Optional[str] = None) -> Optional[Any]:
        return self._wrapped.get(self._get_key(key, region))

    def get_cache_item(self, key: str, region: Optional[str] = None) -> Optional[CacheItem]:
        """Get the entry, reported under the caller's key and region."""
        item = self._wrapped.get_cache_item(self._get_key(key, region))
        if item is None:
            return None
        return CacheItem(key, item.value, region)

    def add(
        self,
        key: str,
        value: Any,
        policy: Optional[CachePolicy] = None,
        region: Optional[str] = None,
    ) -> bool:
        return self._wrapped.add(self._get_key(key, region), value, policy)

    def add_or_get_existing(
        self,
        key: str,
        value: Any,
        policy: Optional[CachePolicy] = None,
        region: Optional[str] = None,
    ) -> Optional[Any]:
        return self._wrapped.add_or_get_existing(self._get_key(key, region), value, policy)

    def set(
        self,
        key: str,
        value: Any,
        policy: Optional[CachePolicy] = None,
        region: Optional[str] = None,
    ) -> None:
        self._wrapped.set(self._get_key(key, region), value, policy)

    def set_item(self, item: CacheItem, policy: Optional[CachePolicy] = None) -> None:
        self._wrapped.set_item(self._get_item(item), policy)

    def remove(self, key: str, region: Optional[str] = None) -> Optional[Any]:
        return self._wrapped.remove(self._get_key(key, region))

    def contains(self, key: str, region: Optional[str] = None) -> bool:
        return self._wrapped.contains(self._get_key(key, region))

    def get_many(self, keys: Iterable[str], region: Optional[str] = None) -> Dict[str, Any]:
        """Get many values, keyed by the caller's original keys."""
        if keys is None:
            raise InvalidCacheArgument.none_value("keys")

        original_keys = {self._get_key(key, region): key for key in keys}
        values = self._wrapped.get_many(list(original_keys))

        return {
            original_keys[namespaced_key]: value
            for namespaced_key, value in values.items()
            if namespaced_key in original_keys
        }

    def get_count(self, region: Optional[str] = None) -> int:
        """Count all entries of the wrapped store. Named regions are rejected."""
        if region is not None:
            raise UnsupportedCacheOperation(
                "get_count",
                "counting is not supported with a non-None region",
                store_name=self.name,
            )
        return self._wrapped.get_count()

    def __iter__(self) -> Iterator[Tuple[str, Any]]:
        raise UnsupportedCacheOperation(
            "Enumeration",
            "namespaced keys cannot be mapped back to their regions",
            store_name=self.name,
        )

    def __getitem__(self, key: str) -> Optional[Any]:
        raise UnsupportedCacheOperation.indexer(self.name)

    def __setitem__(self, key: str, value: Any) -> None:
        raise UnsupportedCacheOperation.indexer(self.name)

    def _get_key(self, key: str, region: Optional[str]) -> str:
        return self._key_provider.get_cache_key(key, region)

    def _get_item(self, item: CacheItem) -> CacheItem:
        return CacheItem(self._get_key(item.key, item.region), item.value)

    def __repr__(self) -> str:
        return f"NamespacedRegionDecorator(wrapped={self._wrapped!r})"


def create_region_decorator(
    wrapped: ObjectStore,
    key_provider: Optional[RegionKeyProvider] = None,
) -> NamespacedRegionDecorator:
    """Create region decorator.

    Args:
        wrapped: Flat store to wrap
        key_provider: Optional region key provider to reuse

    Returns:
        Region-aware store
    """
    return NamespacedRegionDecorator(wrapped, key_provider)
