"""Aggregating cache key value object.

ONLY composite keys - builds one cache key from a prefix, a separator and
an ordered list of arbitrary objects.

Following maximum separation architecture - one file = one purpose.
"""

from typing import Any, Sequence, Tuple

from ..exceptions.invalid_cache_argument import InvalidCacheArgument
from ..protocols.cache_key import CacheKey


class AggregatingKey:
    """Cache key aggregated from an ordered sequence of objects.

    The rendered key is ``prefix + separator + separator.join(parts)`` where
    each part is ``"<null>"`` for None, ``obj.render()`` for objects that are
    themselves cache keys, and ``str(obj)`` otherwise. An empty object list
    still renders the trailing separator.

    Equality and hashing are order-sensitive: reordering the objects, or
    appending one (even None), produces a different key.
    Objects compare by type as well as value, so 1, 1.0 and True make
    three distinct keys, matching their distinct renderings.

    Examples:
        >>> AggregatingKey("The prefix", "|", [1, 2, 3]).render()
        'The prefix|1|2|3'
        >>> AggregatingKey.of("user", 42, "profile", separator=":").render()
        'user:42:profile'
    """

    DEFAULT_SEPARATOR = "|"
    NULL_TEXT = "<null>"

    # Rolling hash constants; 13 stands in for None so that it still
    # contributes to the accumulator.
    _HASH_MULTIPLIER = 37
    _HASH_NULL = 13
    _HASH_MASK = (1 << 64) - 1

    __slots__ = ("_prefix", "_separator", "_objects")

    def __init__(
        self,
        prefix: str,
        separator: str = DEFAULT_SEPARATOR,
        objects: Sequence[Any] = (),
    ):
        if prefix is None:
            raise InvalidCacheArgument.none_value("prefix")
        if separator is None:
            raise InvalidCacheArgument.none_value("separator")
        if objects is None:
            raise InvalidCacheArgument.none_value("objects")

        self._prefix = prefix
        self._separator = separator
        self._objects: Tuple[Any, ...] = tuple(objects)

    @classmethod
    def of(cls, prefix: str, *objects: Any, separator: str = DEFAULT_SEPARATOR) -> "AggregatingKey":
        """Create key from positional objects."""
        return cls(prefix, separator, objects)

    @property
    def prefix(self) -> str:
        return self._prefix

    @property
    def separator(self) -> str:
        return self._separator

    @property
    def objects(self) -> Tuple[Any, ...]:
        return self._objects

    def render(self) -> str:
        """Get the aggregated string cache key."""
        parts = self._separator.join(self._render_object(obj) for obj in self._objects)
        return f"{self._prefix}{self._separator}{parts}"

    @classmethod
    def _render_object(cls, obj: Any) -> str:
        if obj is None:
            return cls.NULL_TEXT
        if isinstance(obj, CacheKey):
            return obj.render()
        return str(obj)

    def __eq__(self, other: object) -> bool:
        if other is self:
            return True
        if not isinstance(other, AggregatingKey):
            return NotImplemented
        return (
            self._prefix == other._prefix
            and self._separator == other._separator
            and self._typed_objects() == other._typed_objects()
        )

    def _typed_objects(self) -> Tuple[Tuple[type, Any], ...]:
        # 1, 1.0 and True compare equal in Python but render differently
        return tuple((type(obj), obj) for obj in self._objects)

    def __hash__(self) -> int:
        acc = 0
        for part in (self._prefix, self._separator, *self._objects):
            part_hash = self._HASH_NULL if part is None else self._hash_part(part)
            acc = ((acc * self._HASH_MULTIPLIER) ^ part_hash) & self._HASH_MASK
        return acc

    @classmethod
    def _hash_part(cls, part: Any) -> int:
        try:
            return hash(part)
        except TypeError:
            # Unhashable parts fall back to their rendered text
            return hash(cls._render_object(part))

    def __repr__(self) -> str:
        return f'[AggregatingKey: "{self.render()}"]'
