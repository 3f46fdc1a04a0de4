"""Cache domain exceptions.

One exception per file following maximum separation architecture.
"""

from .base import NeoCachesError
from .invalid_cache_argument import InvalidCacheArgument
from .cache_conflict import CacheConflict
from .cache_item_not_found import CacheItemNotFound
from .cache_type_mismatch import CacheTypeMismatch
from .unsupported_cache_operation import UnsupportedCacheOperation
from .serialization_error import CacheSerializationError, CacheDeserializationError

__all__ = [
    "NeoCachesError",
    "InvalidCacheArgument",
    "CacheConflict",
    "CacheItemNotFound",
    "CacheTypeMismatch",
    "UnsupportedCacheOperation",
    "CacheSerializationError",
    "CacheDeserializationError",
]
