"""Region key provider implementations."""

from .namespaced_region_key_provider import NamespacedRegionKeyProvider, create_region_key_provider

__all__ = [
    "NamespacedRegionKeyProvider",
    "create_region_key_provider",
]
