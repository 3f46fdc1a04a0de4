"""Serialization error exceptions.

ONLY serializer failures - raised when a cache value cannot be converted
to or from bytes for an out-of-process store.
"""

from typing import Any, Dict, Optional

from .base import NeoCachesError


class CacheSerializationError(NeoCachesError):
    """Cache value could not be serialized to bytes."""

    def __init__(
        self,
        message: str,
        value: Any = None,
        serializer_type: Optional[str] = None,
        original_error: Optional[Exception] = None,
    ):
        self.value = value
        self.serializer_type = serializer_type
        self.original_error = original_error
        details: Dict[str, Any] = {"serializer_type": serializer_type}
        if value is not None:
            details["value_type"] = type(value).__name__
        if original_error is not None:
            details["original_error"] = {
                "type": type(original_error).__name__,
                "message": str(original_error),
            }
        super().__init__(message, error_code="CACHE_SERIALIZATION_ERROR", details=details)


class CacheDeserializationError(NeoCachesError):
    """Stored bytes could not be turned back into a value."""

    def __init__(
        self,
        message: str,
        data: Optional[bytes] = None,
        serializer_type: Optional[str] = None,
        original_error: Optional[Exception] = None,
    ):
        self.data = data
        self.serializer_type = serializer_type
        self.original_error = original_error
        details: Dict[str, Any] = {
            "serializer_type": serializer_type,
            "data_length": len(data) if data is not None else None,
        }
        if original_error is not None:
            details["original_error"] = {
                "type": type(original_error).__name__,
                "message": str(original_error),
            }
        super().__init__(message, error_code="CACHE_DESERIALIZATION_ERROR", details=details)
