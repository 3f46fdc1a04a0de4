"""Memory object store.

ONLY in-memory implementation - thread-safe ObjectStore for development,
testing and single-process deployments.

Following maximum separation architecture - one file = one purpose.
"""

import logging
import threading
import time
from collections import OrderedDict
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, Iterable, Iterator, List, Optional, Tuple

from ...core.exceptions.invalid_cache_argument import InvalidCacheArgument
from ...core.exceptions.unsupported_cache_operation import UnsupportedCacheOperation
from ...core.value_objects.cache_item import CacheItem
from ...core.value_objects.cache_policy import CachePolicy

logger = logging.getLogger(__name__)


@dataclass
class MemoryStoreEntry:
    """Stored value with expiration and access metadata."""

    value: Any
    policy: CachePolicy
    created_at: float
    expires_at: Optional[float] = None
    access_count: int = 0
    last_accessed: float = field(default=0.0)

    def is_expired(self, now: float) -> bool:
        if self.expires_at is None:
            return False
        return now >= self.expires_at

    def touch(self, now: float) -> None:
        """Record access, renewing a sliding expiration."""
        self.access_count += 1
        self.last_accessed = now
        if self.policy.sliding_expiration is not None:
            self.expires_at = now + self.policy.sliding_expiration.total_seconds()


class MemoryObjectStore:
    """Memory-based object store.

    Features:
    - Thread-safe storage guarded by a single re-entrant lock
    - Absolute and sliding expiration from CachePolicy
    - LRU eviction once max_entries is reached
    - Statistics for monitoring

    Regions are not supported natively; wrap the store in a
    NamespacedRegionDecorator to use them.
    """

    def __init__(
        self,
        name: str = "memory",
        max_entries: int = 10000,
        clock: Callable[[], float] = time.time,
    ):
        """Initialize memory object store.

        Args:
            name: Store name for diagnostics
            max_entries: Maximum number of entries before LRU eviction
            clock: Source of the current time in epoch seconds
        """
        if max_entries <= 0:
            raise InvalidCacheArgument("max_entries", "must be positive")

        self._name = name
        self._max_entries = max_entries
        self._clock = clock
        self._cache: "OrderedDict[str, MemoryStoreEntry]" = OrderedDict()
        self._lock = threading.RLock()
        self._stats = {
            "hits": 0,
            "misses": 0,
            "sets": 0,
            "deletes": 0,
            "evictions": 0,
            "expired_cleanups": 0,
        }

    @property
    def name(self) -> str:
        return self._name

    @property
    def supports_regions(self) -> bool:
        return False

    @property
    def max_entries(self) -> int:
        return self._max_entries

    def get(self, key: str, region: Optional[str] = None) -> Optional[Any]:
        self._check_key(key, "get", region)
        with self._lock:
            entry = self._get_live(key)
            return entry.value if entry is not None else None

    def get_cache_item(self, key: str, region: Optional[str] = None) -> Optional[CacheItem]:
        self._check_key(key, "get_cache_item", region)
        with self._lock:
            entry = self._get_live(key)
            return CacheItem(key, entry.value) if entry is not None else None

    def add(
        self,
        key: str,
        value: Any,
        policy: Optional[CachePolicy] = None,
        region: Optional[str] = None,
    ) -> bool:
        return self.add_or_get_existing(key, value, policy, region) is None

    def add_or_get_existing(
        self,
        key: str,
        value: Any,
        policy: Optional[CachePolicy] = None,
        region: Optional[str] = None,
    ) -> Optional[Any]:
        self._check_key(key, "add", region)
        self._check_value(value)
        with self._lock:
            existing = self._get_live(key)
            if existing is not None:
                return existing.value
            self._insert(key, value, policy)
            return None

    def set(
        self,
        key: str,
        value: Any,
        policy: Optional[CachePolicy] = None,
        region: Optional[str] = None,
    ) -> None:
        self._check_key(key, "set", region)
        self._check_value(value)
        with self._lock:
            self._insert(key, value, policy)

    def set_item(self, item: CacheItem, policy: Optional[CachePolicy] = None) -> None:
        if item is None:
            raise InvalidCacheArgument.none_value("item")
        self.set(item.key, item.value, policy, item.region)

    def remove(self, key: str, region: Optional[str] = None) -> Optional[Any]:
        self._check_key(key, "remove", region)
        with self._lock:
            entry = self._cache.pop(key, None)
            if entry is None:
                return None
            if entry.is_expired(self._clock()):
                self._stats["expired_cleanups"] += 1
                return None
            self._stats["deletes"] += 1
            return entry.value

    def contains(self, key: str, region: Optional[str] = None) -> bool:
        self._check_key(key, "contains", region)
        with self._lock:
            entry = self._cache.get(key)
            return entry is not None and not entry.is_expired(self._clock())

    def get_many(self, keys: Iterable[str], region: Optional[str] = None) -> Dict[str, Any]:
        self._check_region("get_many", region)
        if keys is None:
            raise InvalidCacheArgument.none_value("keys")

        results: Dict[str, Any] = {}
        with self._lock:
            for key in keys:
                entry = self._get_live(key)
                if entry is not None:
                    results[key] = entry.value
        return results

    def get_count(self, region: Optional[str] = None) -> int:
        self._check_region("get_count", region)
        with self._lock:
            self._cleanup_expired()
            return len(self._cache)

    def __iter__(self) -> Iterator[Tuple[str, Any]]:
        # Snapshot so callers never hold the lock while iterating
        with self._lock:
            self._cleanup_expired()
            items: List[Tuple[str, Any]] = [(key, entry.value) for key, entry in self._cache.items()]
        return iter(items)

    def __getitem__(self, key: str) -> Optional[Any]:
        return self.get(key)

    def __setitem__(self, key: str, value: Any) -> None:
        self.set(key, value)

    def clear(self) -> None:
        """Remove every entry."""
        with self._lock:
            count = len(self._cache)
            self._cache.clear()
            self._stats["deletes"] += count

    def cleanup_expired(self) -> int:
        """Remove expired entries; returns how many were removed."""
        with self._lock:
            return self._cleanup_expired()

    def get_stats(self) -> Dict[str, Any]:
        """Get store statistics."""
        with self._lock:
            self._cleanup_expired()
            total_requests = self._stats["hits"] + self._stats["misses"]
            hit_rate = (self._stats["hits"] / total_requests * 100) if total_requests > 0 else 0.0

            return {
                **self._stats,
                "implementation": "memory",
                "name": self._name,
                "total_keys": len(self._cache),
                "max_entries": self._max_entries,
                "hit_rate_percent": hit_rate,
                "total_requests": total_requests,
            }

    def _get_live(self, key: str) -> Optional[MemoryStoreEntry]:
        """Get a non-expired entry, updating access tracking. Lock must be held."""
        entry = self._cache.get(key)
        if entry is None:
            self._stats["misses"] += 1
            return None

        now = self._clock()
        if entry.is_expired(now):
            del self._cache[key]
            self._stats["expired_cleanups"] += 1
            self._stats["misses"] += 1
            return None

        entry.touch(now)
        self._cache.move_to_end(key)
        self._stats["hits"] += 1
        return entry

    def _insert(self, key: str, value: Any, policy: Optional[CachePolicy]) -> None:
        """Store an entry, evicting if at capacity. Lock must be held."""
        policy = policy or CachePolicy.never_expire()
        now = self._clock()

        if key in self._cache:
            del self._cache[key]
        elif len(self._cache) >= self._max_entries:
            self._cleanup_expired()
            while len(self._cache) >= self._max_entries:
                evicted_key, _ = self._cache.popitem(last=False)
                self._stats["evictions"] += 1
                logger.debug(f"Evicted least recently used entry '{evicted_key}' from store '{self._name}'")

        self._cache[key] = MemoryStoreEntry(
            value=value,
            policy=policy,
            created_at=now,
            expires_at=self._initial_expiry(policy, now),
            last_accessed=now,
        )
        self._stats["sets"] += 1

    @staticmethod
    def _initial_expiry(policy: CachePolicy, now: float) -> Optional[float]:
        if policy.absolute_expiration is not None:
            return policy.absolute_expiration.timestamp()
        if policy.sliding_expiration is not None:
            return now + policy.sliding_expiration.total_seconds()
        return None

    def _cleanup_expired(self) -> int:
        now = self._clock()
        expired_keys = [key for key, entry in self._cache.items() if entry.is_expired(now)]
        for key in expired_keys:
            del self._cache[key]
        if expired_keys:
            self._stats["expired_cleanups"] += len(expired_keys)
        return len(expired_keys)

    def _check_key(self, key: str, operation: str, region: Optional[str]) -> None:
        if key is None:
            raise InvalidCacheArgument.none_value("key")
        self._check_region(operation, region)

    def _check_region(self, operation: str, region: Optional[str]) -> None:
        if region is not None:
            raise UnsupportedCacheOperation.regions(operation, self._name)

    @staticmethod
    def _check_value(value: Any) -> None:
        if value is None:
            raise InvalidCacheArgument("value", "stores cannot hold None; None means absent")

    def __repr__(self) -> str:
        return f"MemoryObjectStore(name={self._name!r}, max_entries={self._max_entries})"


def create_memory_object_store(settings=None, name: str = "memory") -> MemoryObjectStore:
    """Create memory object store.

    Args:
        settings: Optional CacheSettings supplying max entries
        name: Store name for diagnostics

    Returns:
        Configured memory object store
    """
    if settings is None:
        return MemoryObjectStore(name=name)
    return MemoryObjectStore(name=name, max_entries=settings.memory_max_entries)
