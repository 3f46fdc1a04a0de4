"""Typed cache adapter.

ONLY typed facade - converts typed key objects to string keys, stores
values in an ObjectStore and guarantees at-most-once value creation for
get_or_add.

Following maximum separation architecture - one file = one purpose.
"""

import logging
import threading
from contextlib import contextmanager
from typing import Any, Callable, Dict, Generic, Iterable, Iterator, List, Optional, Tuple, Type, TypeVar, Union

from ...core.exceptions.cache_conflict import CacheConflict
from ...core.exceptions.cache_item_not_found import CacheItemNotFound
from ...core.exceptions.cache_type_mismatch import CacheTypeMismatch
from ...core.exceptions.invalid_cache_argument import InvalidCacheArgument
from ...core.protocols.cache_key import CacheKey
from ...core.protocols.object_store import ObjectStore
from ...core.value_objects.cache_policy import CachePolicy
from ...core.value_objects.keyed_cache_item import KeyedCacheItem
from .null_marker import from_stored, to_stored

logger = logging.getLogger(__name__)

K = TypeVar("K", bound=CacheKey)
V = TypeVar("V")

PolicyProvider = Callable[[Any, Any], CachePolicy]


def _never_expire(key: Any, value: Any) -> CachePolicy:
    return CachePolicy.never_expire()


class _KeyLock:
    """Lock for one cache key plus the number of threads holding or awaiting it."""

    __slots__ = ("lock", "users")

    def __init__(self):
        self.lock = threading.Lock()
        self.users = 0


class TypedCacheAdapter(Generic[K, V]):
    """Typed cache facade over an ObjectStore.

    Features:
    - Typed keys rendered through the CacheKey protocol
    - Cached None values kept distinct from missing entries
    - Optional runtime value type checking
    - Per-item expiration policy supplied by a policy provider
    - get_or_add with at most one factory call per key at a time

    Create exactly one adapter per (key type, value type, store) and share
    it. Two adapters over the same store and key space each keep their own
    locks, so get_or_add could then create a value twice.

    Usage:
        users = TypedCacheAdapter(MemoryObjectStore(), value_type=User)
        user = users.get_or_add(UserKey(42), load_user)
    """

    def __init__(
        self,
        store: ObjectStore,
        policy_provider: Optional[PolicyProvider] = None,
        region: Optional[str] = None,
        value_type: Optional[Union[Type[Any], Tuple[Type[Any], ...]]] = None,
    ):
        """Initialize typed cache adapter.

        Args:
            store: Underlying object store
            policy_provider: Callable producing a CachePolicy for (key, value);
                defaults to never expire
            region: Region passed to every store call
            value_type: Class (or tuple of classes) stored values must be
                instances of; None disables the check
        """
        if store is None:
            raise InvalidCacheArgument.none_value("store")

        self._store = store
        self._policy_provider = policy_provider or _never_expire
        self._region = region
        self._value_type = value_type

        self._locks_guard = threading.Lock()
        self._key_locks: Dict[str, _KeyLock] = {}

    @property
    def store(self) -> ObjectStore:
        return self._store

    @property
    def region(self) -> Optional[str]:
        return self._region

    def add(self, key: K, value: V) -> None:
        """Store value, raising CacheConflict if an entry exists."""
        cache_key = self._to_store_key(key)
        if not self._store.add(cache_key, to_stored(value), self._get_policy(key, value), region=self._region):
            raise CacheConflict(cache_key)

    def try_add(self, key: K, value: V) -> bool:
        """Store value if no entry exists; returns whether it was stored."""
        cache_key = self._to_store_key(key)
        return self._store.add(cache_key, to_stored(value), self._get_policy(key, value), region=self._region)

    def add_or_replace(self, key: K, value: V) -> None:
        """Store value, replacing any existing entry."""
        cache_key = self._to_store_key(key)
        self._store.set(cache_key, to_stored(value), self._get_policy(key, value), region=self._region)

    def contains(self, key: K) -> bool:
        cache_key = self._to_store_key(key)
        return self._store.contains(cache_key, region=self._region)

    def get(self, key: K) -> V:
        """Get the cached value.

        Raises:
            CacheItemNotFound: No entry exists for the key
            CacheTypeMismatch: The stored payload is not of the value type
        """
        cache_key = self._to_store_key(key)
        found, value = self._try_get(cache_key)
        if not found:
            raise CacheItemNotFound(cache_key)
        return value

    def try_get(self, key: K) -> Tuple[bool, Optional[V]]:
        """Get (True, value) if an entry exists, otherwise (False, None).

        A cached None yields (True, None).
        """
        cache_key = self._to_store_key(key)
        return self._try_get(cache_key)

    def get_or_default(self, key: K, default: Optional[V] = None) -> Optional[V]:
        """Get the cached value, or default if no entry exists.

        A cached None is returned as None, not as default.
        """
        found, value = self.try_get(key)
        return value if found else default

    def remove(self, key: K) -> bool:
        """Remove the entry; returns True if something was removed."""
        cache_key = self._to_store_key(key)
        return self._store.remove(cache_key, region=self._region) is not None

    def get_many(self, keys: Iterable[K]) -> List[KeyedCacheItem[K, V]]:
        """Best-effort batch get.

        Keys without an entry, or whose payload fails the value type check,
        are left out of the result. Result order is not guaranteed.
        """
        if keys is None:
            raise InvalidCacheArgument.none_value("keys")

        keys_by_cache_key: Dict[str, K] = {}
        for key in keys:
            keys_by_cache_key[self._to_store_key(key)] = key

        if not keys_by_cache_key:
            return []

        stored = self._store.get_many(list(keys_by_cache_key), region=self._region)

        results: List[KeyedCacheItem[K, V]] = []
        for cache_key, payload in stored.items():
            key = keys_by_cache_key.get(cache_key)
            if key is None or payload is None:
                continue
            try:
                value = self._from_payload(cache_key, payload)
            except CacheTypeMismatch as e:
                logger.warning(f"Skipping cache entry in batch get: {e.message}")
                continue
            results.append(KeyedCacheItem(key, value))

        return results

    def get_or_add(self, key: K, factory: Callable[[K], V]) -> V:
        """Get the cached value, creating it with factory on a miss.

        For a given key only one caller at a time runs factory; concurrent
        callers wait and then observe the value it stored. If factory raises,
        nothing is stored and the exception propagates.
        """
        if factory is None:
            raise InvalidCacheArgument.none_value("factory")

        cache_key = self._to_store_key(key)

        found, value = self._try_get(cache_key)
        if found:
            return value

        with self._lock_for(cache_key):
            found, value = self._try_get(cache_key)
            if found:
                return value

            logger.debug(f"Cache miss for '{cache_key}', creating value")
            value = factory(key)

            if self._store.add(cache_key, to_stored(value), self._get_policy(key, value), region=self._region):
                return value

            # A plain add() outside get_or_add won the race; its value stands
            found, existing = self._try_get(cache_key)
            if found:
                logger.debug(f"Concurrent add for '{cache_key}', discarding created value")
                return existing
            return value

    def _try_get(self, cache_key: str) -> Tuple[bool, Optional[V]]:
        payload = self._store.get(cache_key, region=self._region)
        if payload is None:
            return False, None
        return True, self._from_payload(cache_key, payload)

    def _from_payload(self, cache_key: str, payload: Any) -> Optional[V]:
        value = from_stored(payload)
        if value is None or self._value_type is None:
            return value
        if not isinstance(value, self._value_type):
            raise CacheTypeMismatch(cache_key, self._value_type, value)
        return value

    def _to_store_key(self, key: K) -> str:
        if key is None:
            raise InvalidCacheArgument.none_value("key")
        cache_key = key.render()
        if cache_key is None:
            raise InvalidCacheArgument.none_rendered_key(key)
        return cache_key

    def _get_policy(self, key: K, value: Optional[V]) -> CachePolicy:
        return self._policy_provider(key, value)

    @contextmanager
    def _lock_for(self, cache_key: str) -> Iterator[None]:
        with self._locks_guard:
            key_lock = self._key_locks.get(cache_key)
            if key_lock is None:
                key_lock = self._key_locks[cache_key] = _KeyLock()
            key_lock.users += 1

        try:
            with key_lock.lock:
                yield
        finally:
            with self._locks_guard:
                key_lock.users -= 1
                if key_lock.users == 0:
                    del self._key_locks[cache_key]

    def __repr__(self) -> str:
        value_type = getattr(self._value_type, "__name__", self._value_type)
        return (
            f"TypedCacheAdapter(store={getattr(self._store, 'name', self._store)!r}, "
            f"region={self._region!r}, value_type={value_type!r})"
        )


def create_typed_cache_adapter(
    store: ObjectStore,
    policy_provider: Optional[PolicyProvider] = None,
    region: Optional[str] = None,
    value_type: Optional[Union[Type[Any], Tuple[Type[Any], ...]]] = None,
    settings=None,
) -> TypedCacheAdapter:
    """Create typed cache adapter.

    Args:
        store: Underlying object store
        policy_provider: Optional per-item policy provider
        region: Optional region for every store call
        value_type: Optional runtime value type check
        settings: Optional CacheSettings; without a policy_provider every
            write uses settings.default_policy()

    Returns:
        Configured typed cache adapter
    """
    if policy_provider is None and settings is not None:
        # Built per write: an absolute expiry is fixed when the policy is made
        def settings_policy(key: Any, value: Any) -> CachePolicy:
            return settings.default_policy()

        policy_provider = settings_policy

    return TypedCacheAdapter(store, policy_provider=policy_provider, region=region, value_type=value_type)
