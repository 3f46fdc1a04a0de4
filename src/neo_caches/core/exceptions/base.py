"""Base exceptions for neo-caches.

All exceptions raised by the library inherit from NeoCachesError and carry
an error code and structured details for logging and API responses.
"""

from typing import Any, Dict, Optional


class NeoCachesError(Exception):
    """Base exception for all neo-caches errors."""

    def __init__(
        self,
        message: str,
        error_code: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
        *args,
        **kwargs
    ):
        super().__init__(message, *args, **kwargs)
        self.message = message
        self.error_code = error_code or self.__class__.__name__
        self.details = details or {}

    def to_dict(self) -> Dict[str, Any]:
        """Convert exception to dictionary for serialization."""
        return {
            "error_type": self.__class__.__name__,
            "error_code": self.error_code,
            "message": self.message,
            "details": self.details,
        }
