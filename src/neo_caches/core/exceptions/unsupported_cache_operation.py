"""Unsupported cache operation exception.

ONLY structural misuse - raised by stores and decorators for operations
they cannot perform correctly, e.g. counting a simulated region.
"""

from typing import Optional

from .base import NeoCachesError


class UnsupportedCacheOperation(NeoCachesError, NotImplementedError):
    """The store cannot perform this operation. Not a transient condition."""

    def __init__(self, operation: str, reason: str, store_name: Optional[str] = None):
        self.operation = operation
        self.reason = reason
        self.store_name = store_name
        super().__init__(
            f"{operation} is not supported: {reason}",
            error_code="CACHE_OPERATION_UNSUPPORTED",
            details={"operation": operation, "store": store_name},
        )

    @classmethod
    def regions(cls, operation: str, store_name: Optional[str] = None) -> "UnsupportedCacheOperation":
        """Create exception for a store without native region support."""
        return cls(
            operation,
            "this store does not support regions; wrap it in a NamespacedRegionDecorator",
            store_name=store_name,
        )

    @classmethod
    def indexer(cls, store_name: Optional[str] = None) -> "UnsupportedCacheOperation":
        """Create exception for indexer-style access that bypasses regions."""
        return cls(
            "Get & set via indexer",
            "use get() or set() methods instead",
            store_name=store_name,
        )
