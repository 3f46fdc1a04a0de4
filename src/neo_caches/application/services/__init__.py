"""Cache application services."""

from .typed_cache_adapter import TypedCacheAdapter, create_typed_cache_adapter
from .cache_key_factory import AggregatingKeyFactory, create_cache_key_factory

__all__ = [
    "TypedCacheAdapter",
    "create_typed_cache_adapter",
    "AggregatingKeyFactory",
    "create_cache_key_factory",
]
