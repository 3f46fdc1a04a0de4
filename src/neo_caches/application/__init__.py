"""Cache application layer.

Typed caching facade and key construction services built on the core
contracts.
"""

from .services import *

__all__ = [
    "TypedCacheAdapter",
    "create_typed_cache_adapter",
    "AggregatingKeyFactory",
    "create_cache_key_factory",
]
