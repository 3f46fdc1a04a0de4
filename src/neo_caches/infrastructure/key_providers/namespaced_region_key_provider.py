"""Namespaced region key provider.

ONLY region namespacing - maps (key, region) pairs onto flat-store keys
using an unpredictable token per region.

Following maximum separation architecture - one file = one purpose.
"""

import logging
import threading
from typing import Dict, Mapping, Optional
from uuid import uuid4

from ...core.exceptions.invalid_cache_argument import InvalidCacheArgument

logger = logging.getLogger(__name__)


def _new_token() -> str:
    return str(uuid4())


class NamespacedRegionKeyProvider:
    """Region key provider backed by random per-region tokens.

    Each region name is bound to a random token the first time it is used.
    The token, not the region name, is what separates key spaces: someone who
    knows a plain key and region name cannot predict the flat-store key, so
    cannot craft a colliding entry. Keys for the None region use their own
    token.

    Bindings are append-only for the life of the instance. Keep the same
    instance for as long as the store it namespaces; a new instance mints new
    tokens, leaving previously stored entries unreachable. To survive a
    restart, rebuild from region_tokens and null_region_token, trading
    unpredictability for continuity.
    """

    def __init__(
        self,
        region_tokens: Optional[Mapping[str, str]] = None,
        null_region_token: Optional[str] = None,
    ):
        """Initialize key provider.

        Args:
            region_tokens: Existing region name to token bindings to reuse
            null_region_token: Existing token for the None region to reuse
        """
        self._region_tokens: Dict[str, str] = dict(region_tokens) if region_tokens else {}
        self._null_region_token = null_region_token if null_region_token is not None else _new_token()
        self._lock = threading.Lock()

    @property
    def region_tokens(self) -> Dict[str, str]:
        """Snapshot of the region name to token bindings."""
        with self._lock:
            return dict(self._region_tokens)

    @property
    def null_region_token(self) -> str:
        return self._null_region_token

    def get_cache_key(self, key: str, region: Optional[str] = None) -> str:
        """Get the flat-store key for key within region."""
        if key is None:
            raise InvalidCacheArgument.none_value("key")

        region_text = "<null>" if region is None else repr(region)
        return (
            f"[NamespacedRegionKeyProvider(Region {region_text}, "
            f"Key '{self._get_region_token(region)}')] {key}"
        )

    def _get_region_token(self, region: Optional[str]) -> str:
        if region is None:
            return self._null_region_token

        token = self._region_tokens.get(region)
        if token is not None:
            return token

        with self._lock:
            token = self._region_tokens.get(region)
            if token is None:
                token = self._region_tokens[region] = _new_token()
                logger.debug(f"Bound new namespace token for cache region {region!r}")
            return token


def create_region_key_provider(settings=None) -> NamespacedRegionKeyProvider:
    """Create region key provider from settings.

    Args:
        settings: Optional CacheSettings carrying persisted region tokens

    Returns:
        Configured region key provider
    """
    if settings is None:
        return NamespacedRegionKeyProvider()
    return NamespacedRegionKeyProvider(
        region_tokens=settings.region_tokens,
        null_region_token=settings.null_region_token,
    )
