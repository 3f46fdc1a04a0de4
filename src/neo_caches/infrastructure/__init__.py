"""Cache infrastructure layer.

Concrete stores, region namespacing and serializers.
"""

from .key_providers import *
from .serializers import *
from .stores import *

__all__ = [
    # Key providers
    "NamespacedRegionKeyProvider",
    "create_region_key_provider",

    # Serializers
    "PickleCacheSerializer",
    "PickleSerializerStats",

    # Stores
    "MemoryObjectStore",
    "MemoryStoreEntry",
    "create_memory_object_store",
    "RedisObjectStore",
    "create_redis_object_store",
    "NamespacedRegionDecorator",
    "create_region_decorator",
]
