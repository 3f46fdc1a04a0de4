"""Region key provider protocol.

ONLY region namespacing contract - maps a (key, region) pair onto a single
key for a store with one flat key space.
"""

from typing import Optional

from typing_extensions import Protocol, runtime_checkable


@runtime_checkable
class RegionKeyProvider(Protocol):
    """Namespaces keys by region for stores that lack native regions."""

    def get_cache_key(self, key: str, region: Optional[str] = None) -> str:
        """Get the flat-store key for a key within a region.

        The result must be deterministic for the same key, region and
        provider instance.
        """
        ...
