"""Cache type mismatch exception.

ONLY payload type errors - raised when a stored payload is not an instance
of the value type an adapter expects. Indicates that one key space is being
shared by adapters with incompatible value types.
"""

from typing import Any, Tuple, Union

from .base import NeoCachesError


def _type_names(expected: Union[type, Tuple[type, ...]]) -> str:
    if isinstance(expected, tuple):
        return " | ".join(t.__name__ for t in expected)
    return expected.__name__


class CacheTypeMismatch(NeoCachesError, TypeError):
    """Stored payload is not convertible to the expected value type."""

    def __init__(self, cache_key: str, expected: Union[type, Tuple[type, ...]], payload: Any):
        self.cache_key = cache_key
        self.expected = expected
        self.actual = type(payload)
        super().__init__(
            f"Item stored with the key '{cache_key}' is a {self.actual.__name__}, "
            f"expected {_type_names(expected)}",
            error_code="CACHE_TYPE_MISMATCH",
            details={
                "cache_key": cache_key,
                "expected_type": _type_names(expected),
                "actual_type": self.actual.__name__,
            },
        )
