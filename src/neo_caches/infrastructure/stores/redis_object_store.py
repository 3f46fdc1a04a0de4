"""Redis object store.

ONLY Redis implementation - ObjectStore over a synchronous redis-py
client, for caches shared by several processes on one Redis server.

Following maximum separation architecture - one file = one purpose.
"""

import logging
import re
from datetime import datetime, timezone
from typing import Any, Dict, Iterable, Iterator, List, Optional, Tuple

import redis

from ...core.exceptions.invalid_cache_argument import InvalidCacheArgument
from ...core.exceptions.unsupported_cache_operation import UnsupportedCacheOperation
from ...core.value_objects.cache_item import CacheItem
from ...core.value_objects.cache_policy import CachePolicy
from ..serializers.pickle_serializer import PickleCacheSerializer

logger = logging.getLogger(__name__)

_GLOB_SPECIAL = re.compile(r"([*?\[\]\\])")


class RedisObjectStore:
    """Redis-backed object store.

    Features:
    - Atomic add via SET NX
    - Absolute expiration via PX
    - Sliding expiration stored with the payload and renewed with PEXPIRE
      on every read
    - Batch reads via MGET
    - Key prefix isolating this store from other Redis users

    The client must return raw bytes (decode_responses=False). Regions are
    not supported natively; wrap the store in a NamespacedRegionDecorator.
    """

    def __init__(
        self,
        client: "redis.Redis",
        key_prefix: str = "neo-caches:",
        serializer: Optional[PickleCacheSerializer] = None,
        name: str = "redis",
    ):
        """Initialize Redis object store.

        Args:
            client: Redis client instance
            key_prefix: Prefix for all Redis keys written by this store
            serializer: Payload serializer; pickle by default
            name: Store name for diagnostics
        """
        if client is None:
            raise InvalidCacheArgument.none_value("client")
        if key_prefix is None:
            raise InvalidCacheArgument.none_value("key_prefix")

        self._client = client
        self._key_prefix = key_prefix
        self._serializer = serializer or PickleCacheSerializer()
        self._name = name

    @classmethod
    def from_url(
        cls,
        url: str,
        key_prefix: str = "neo-caches:",
        socket_timeout: Optional[float] = None,
        **kwargs: Any,
    ) -> "RedisObjectStore":
        """Create store connected to the Redis server at url."""
        client = redis.Redis.from_url(url, socket_timeout=socket_timeout, decode_responses=False)
        return cls(client, key_prefix=key_prefix, **kwargs)

    @property
    def name(self) -> str:
        return self._name

    @property
    def supports_regions(self) -> bool:
        return False

    @property
    def key_prefix(self) -> str:
        return self._key_prefix

    def get(self, key: str, region: Optional[str] = None) -> Optional[Any]:
        self._check_key(key, "get", region)
        redis_key = self._build_redis_key(key)
        return self._load(redis_key, self._client.get(redis_key))

    def get_cache_item(self, key: str, region: Optional[str] = None) -> Optional[CacheItem]:
        value = self.get(key, region)
        return CacheItem(key, value) if value is not None else None

    def add(
        self,
        key: str,
        value: Any,
        policy: Optional[CachePolicy] = None,
        region: Optional[str] = None,
    ) -> bool:
        self._check_key(key, "add", region)
        self._check_value(value)
        return self._write(self._build_redis_key(key), value, policy, only_if_absent=True)

    def add_or_get_existing(
        self,
        key: str,
        value: Any,
        policy: Optional[CachePolicy] = None,
        region: Optional[str] = None,
    ) -> Optional[Any]:
        self._check_key(key, "add", region)
        self._check_value(value)
        redis_key = self._build_redis_key(key)

        # The existing entry may expire or be removed between SET NX and GET
        while True:
            if self._write(redis_key, value, policy, only_if_absent=True):
                return None
            existing = self._load(redis_key, self._client.get(redis_key))
            if existing is not None:
                return existing

    def set(
        self,
        key: str,
        value: Any,
        policy: Optional[CachePolicy] = None,
        region: Optional[str] = None,
    ) -> None:
        self._check_key(key, "set", region)
        self._check_value(value)
        self._write(self._build_redis_key(key), value, policy, only_if_absent=False)

    def set_item(self, item: CacheItem, policy: Optional[CachePolicy] = None) -> None:
        if item is None:
            raise InvalidCacheArgument.none_value("item")
        self.set(item.key, item.value, policy, item.region)

    def remove(self, key: str, region: Optional[str] = None) -> Optional[Any]:
        self._check_key(key, "remove", region)
        data = self._client.getdel(self._build_redis_key(key))
        if data is None:
            return None
        value, _ = self._serializer.deserialize(data)
        return value

    def contains(self, key: str, region: Optional[str] = None) -> bool:
        self._check_key(key, "contains", region)
        return self._client.exists(self._build_redis_key(key)) > 0

    def get_many(self, keys: Iterable[str], region: Optional[str] = None) -> Dict[str, Any]:
        self._check_region("get_many", region)
        if keys is None:
            raise InvalidCacheArgument.none_value("keys")

        key_list: List[str] = list(keys)
        if not key_list:
            return {}

        redis_keys = [self._build_redis_key(key) for key in key_list]
        results: Dict[str, Any] = {}
        for key, redis_key, data in zip(key_list, redis_keys, self._client.mget(redis_keys)):
            value = self._load(redis_key, data)
            if value is not None:
                results[key] = value
        return results

    def get_count(self, region: Optional[str] = None) -> int:
        self._check_region("get_count", region)
        return sum(1 for _ in self._scan_keys())

    def __iter__(self) -> Iterator[Tuple[str, Any]]:
        for redis_key in self._scan_keys():
            data = self._client.get(redis_key)
            if data is None:
                continue
            value, _ = self._serializer.deserialize(data)
            yield self._strip_prefix(redis_key), value

    def __getitem__(self, key: str) -> Optional[Any]:
        return self.get(key)

    def __setitem__(self, key: str, value: Any) -> None:
        self.set(key, value)

    def _write(self, redis_key: str, value: Any, policy: Optional[CachePolicy], only_if_absent: bool) -> bool:
        policy = policy or CachePolicy.never_expire()
        sliding_ms = self._sliding_ms(policy)
        data = self._serializer.serialize((value, sliding_ms))
        result = self._client.set(
            redis_key,
            data,
            px=self._ttl_ms(policy),
            nx=only_if_absent,
        )
        return bool(result)

    def _load(self, redis_key: str, data: Optional[bytes]) -> Optional[Any]:
        if data is None:
            return None
        value, sliding_ms = self._serializer.deserialize(data)
        if sliding_ms:
            self._client.pexpire(redis_key, sliding_ms)
        return value

    @staticmethod
    def _sliding_ms(policy: CachePolicy) -> Optional[int]:
        if policy.sliding_expiration is None:
            return None
        return max(1, int(policy.sliding_expiration.total_seconds() * 1000))

    @staticmethod
    def _ttl_ms(policy: CachePolicy) -> Optional[int]:
        ttl = policy.ttl_seconds(datetime.now(timezone.utc))
        if ttl is None:
            return None
        # PX must be positive; an already-past expiry lives for one millisecond
        return max(1, int(ttl * 1000))

    def _build_redis_key(self, key: str) -> str:
        return f"{self._key_prefix}{key}"

    def _strip_prefix(self, redis_key: Any) -> str:
        if isinstance(redis_key, bytes):
            redis_key = redis_key.decode("utf-8")
        return redis_key[len(self._key_prefix):]

    def _scan_keys(self) -> Iterator[Any]:
        pattern = _GLOB_SPECIAL.sub(r"\\\1", self._key_prefix) + "*"
        return self._client.scan_iter(match=pattern)

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
        return f"RedisObjectStore(name={self._name!r}, key_prefix={self._key_prefix!r})"


def create_redis_object_store(settings, name: str = "redis") -> RedisObjectStore:
    """Create Redis object store from settings.

    Args:
        settings: CacheSettings with redis_url configured
        name: Store name for diagnostics

    Returns:
        Configured Redis object store
    """
    if not settings.redis_url:
        raise InvalidCacheArgument("redis_url", "must be configured to create a Redis store")
    logger.info(f"Creating Redis object store '{name}' with key prefix '{settings.redis_key_prefix}'")
    return RedisObjectStore.from_url(
        settings.redis_url,
        key_prefix=settings.redis_key_prefix,
        socket_timeout=settings.redis_socket_timeout,
        name=name,
    )
