"""Neo-Caches - typed caching facade over pluggable object stores.

Provides typed keys, region namespacing over flat key spaces and a
get-or-add operation that creates each value at most once per key under
concurrent callers.
"""

from .__version__ import __version__

from .core.exceptions import (
    NeoCachesError,
    InvalidCacheArgument,
    CacheConflict,
    CacheItemNotFound,
    CacheTypeMismatch,
    UnsupportedCacheOperation,
    CacheSerializationError,
    CacheDeserializationError,
)

from .core.value_objects import (
    AggregatingKey,
    CachePolicy,
    CacheItem,
    KeyedCacheItem,
)

from .core.protocols import (
    CacheKey,
    CacheKeyFactory,
    RegionKeyProvider,
    ObjectStore,
    CachesObjects,
)

from .application import (
    TypedCacheAdapter,
    create_typed_cache_adapter,
    AggregatingKeyFactory,
    create_cache_key_factory,
)

from .infrastructure import (
    NamespacedRegionKeyProvider,
    create_region_key_provider,
    NamespacedRegionDecorator,
    create_region_decorator,
    MemoryObjectStore,
    create_memory_object_store,
    RedisObjectStore,
    create_redis_object_store,
    PickleCacheSerializer,
)

from .config import CacheSettings, get_cache_settings, setup_logging

__all__ = [
    "__version__",

    # Exceptions
    "NeoCachesError",
    "InvalidCacheArgument",
    "CacheConflict",
    "CacheItemNotFound",
    "CacheTypeMismatch",
    "UnsupportedCacheOperation",
    "CacheSerializationError",
    "CacheDeserializationError",

    # Value Objects
    "AggregatingKey",
    "CachePolicy",
    "CacheItem",
    "KeyedCacheItem",

    # Protocols
    "CacheKey",
    "CacheKeyFactory",
    "RegionKeyProvider",
    "ObjectStore",
    "CachesObjects",

    # Services
    "TypedCacheAdapter",
    "create_typed_cache_adapter",
    "AggregatingKeyFactory",
    "create_cache_key_factory",

    # Infrastructure
    "NamespacedRegionKeyProvider",
    "create_region_key_provider",
    "NamespacedRegionDecorator",
    "create_region_decorator",
    "MemoryObjectStore",
    "create_memory_object_store",
    "RedisObjectStore",
    "create_redis_object_store",
    "PickleCacheSerializer",

    # Configuration
    "CacheSettings",
    "get_cache_settings",
    "setup_logging",
]
