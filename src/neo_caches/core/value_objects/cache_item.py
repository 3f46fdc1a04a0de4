"""Cache item value object."""

from dataclasses import dataclass
from typing import Any, Optional


@dataclass(frozen=True)
class CacheItem:
    """A single store-level entry: key, value and optional region."""

    key: str
    value: Any
    region: Optional[str] = None
