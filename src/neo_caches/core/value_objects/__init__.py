"""Cache value objects.

Immutable values following maximum separation - one value object per file.
"""

from .aggregating_key import AggregatingKey
from .cache_policy import CachePolicy
from .cache_item import CacheItem
from .keyed_cache_item import KeyedCacheItem

__all__ = [
    "AggregatingKey",
    "CachePolicy",
    "CacheItem",
    "KeyedCacheItem",
]
