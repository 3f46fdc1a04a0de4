"""Cache protocol interfaces.

Core contracts following maximum separation - one protocol per file.
"""

from .cache_key import CacheKey
from .cache_key_factory import CacheKeyFactory
from .region_key_provider import RegionKeyProvider
from .object_store import ObjectStore
from .caches_objects import CachesObjects

__all__ = [
    "CacheKey",
    "CacheKeyFactory",
    "RegionKeyProvider",
    "ObjectStore",
    "CachesObjects",
]
