"""Cache key protocol.

ONLY key rendering contract - any value that can deterministically render
itself as a string cache key.
"""

from typing_extensions import Protocol, runtime_checkable


@runtime_checkable
class CacheKey(Protocol):
    """Capability of rendering a string cache key.

    Values considered equal must render equal strings; unequal values should
    render unequal strings with very low collision probability.
    """

    def render(self) -> str:
        """Get the string cache key for this value."""
        ...
