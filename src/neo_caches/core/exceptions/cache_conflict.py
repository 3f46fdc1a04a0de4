"""Cache conflict exception.

ONLY add conflicts - raised when add() finds an entry already stored
under the derived key.
"""

from .base import NeoCachesError


class CacheConflict(NeoCachesError):
    """An entry already exists for the key.

    Callers that consider this a benign race should use try_add() or
    add_or_replace() instead.
    """

    def __init__(self, cache_key: str):
        self.cache_key = cache_key
        super().__init__(
            f"Cannot add to the cache because an item already exists with the key '{cache_key}'",
            error_code="CACHE_CONFLICT",
            details={"cache_key": cache_key},
        )
