"""Cache core domain layer.

Clean core containing only value objects, exceptions and shared
contracts. No storage logic or external dependencies.
"""

from .exceptions import *
from .value_objects import *
from .protocols import *

__all__ = [
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
]
