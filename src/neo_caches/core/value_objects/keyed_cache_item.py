"""Keyed cache item value object."""

from dataclasses import dataclass
from typing import Generic, TypeVar

K = TypeVar("K")
V = TypeVar("V")


@dataclass(frozen=True)
class KeyedCacheItem(Generic[K, V]):
    """A typed key paired with the value cached for it."""

    key: K
    item: V
