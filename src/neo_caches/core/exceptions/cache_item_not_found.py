"""Cache item not found exception."""

from .base import NeoCachesError


class CacheItemNotFound(NeoCachesError, LookupError):
    """get() was called for a key with no entry. Use try_get() to avoid it."""

    def __init__(self, cache_key: str):
        self.cache_key = cache_key
        super().__init__(
            f"Cannot get an item with the key '{cache_key}' because no such item exists in the cache",
            error_code="CACHE_ITEM_NOT_FOUND",
            details={"cache_key": cache_key},
        )
