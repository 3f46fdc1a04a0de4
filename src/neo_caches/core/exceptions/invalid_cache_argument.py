"""Invalid cache argument exception.

ONLY argument errors - raised for caller bugs such as a None key, a key
that renders None, or a None prefix/separator. Never retried.
"""

from typing import Optional

from .base import NeoCachesError


class InvalidCacheArgument(NeoCachesError, ValueError):
    """A cache operation received an argument it cannot work with."""

    def __init__(self, argument: str, reason: str, error_code: Optional[str] = None):
        """Initialize invalid argument error.

        Args:
            argument: Name of the offending argument
            reason: Human-readable reason
            error_code: Optional machine-readable error code
        """
        self.argument = argument
        self.reason = reason
        super().__init__(
            f"Invalid argument '{argument}': {reason}",
            error_code=error_code or "CACHE_ARGUMENT_INVALID",
            details={"argument": argument},
        )

    @classmethod
    def none_value(cls, argument: str) -> "InvalidCacheArgument":
        """Create exception for an argument that must not be None."""
        return cls(argument, "must not be None", error_code="CACHE_ARGUMENT_NONE")

    @classmethod
    def none_rendered_key(cls, key: object) -> "InvalidCacheArgument":
        """Create exception for a key object whose render() returned None."""
        return cls(
            "key",
            f"render() of {type(key).__name__} must not return None",
            error_code="CACHE_KEY_RENDERED_NONE",
        )
