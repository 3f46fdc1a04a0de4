"""Object store implementations and decorators."""

from .memory_object_store import MemoryObjectStore, MemoryStoreEntry, create_memory_object_store
from .redis_object_store import RedisObjectStore, create_redis_object_store
from .namespaced_region_decorator import NamespacedRegionDecorator, create_region_decorator

__all__ = [
    "MemoryObjectStore",
    "MemoryStoreEntry",
    "create_memory_object_store",
    "RedisObjectStore",
    "create_redis_object_store",
    "NamespacedRegionDecorator",
    "create_region_decorator",
]
