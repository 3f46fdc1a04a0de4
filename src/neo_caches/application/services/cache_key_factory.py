"""Aggregating cache key factory.

ONLY key construction - creates AggregatingKey instances sharing one
prefix and separator.
"""

from typing import Any, Optional

from ...config.settings import get_cache_settings
from ...core.exceptions.invalid_cache_argument import InvalidCacheArgument
from ...core.value_objects.aggregating_key import AggregatingKey


class AggregatingKeyFactory:
    """Factory for AggregatingKey instances with a fixed prefix and separator.

    Example:
        >>> users = AggregatingKeyFactory("user")
        >>> users.create_key(42, "profile").render()
        'user|42|profile'
    """

    def __init__(self, prefix: str, separator: str = AggregatingKey.DEFAULT_SEPARATOR):
        if prefix is None:
            raise InvalidCacheArgument.none_value("prefix")
        if separator is None:
            raise InvalidCacheArgument.none_value("separator")
        self.prefix = prefix
        self.separator = separator

    def create_key(self, *objects: Any) -> AggregatingKey:
        """Create a key aggregating objects in order."""
        return AggregatingKey(self.prefix, self.separator, objects)

    def __repr__(self) -> str:
        return f"AggregatingKeyFactory(prefix={self.prefix!r}, separator={self.separator!r})"


def create_cache_key_factory(
    prefix: Optional[str] = None,
    separator: Optional[str] = None,
    settings=None,
) -> AggregatingKeyFactory:
    """Create aggregating key factory.

    Args:
        prefix: Prefix shared by all created keys; settings.key_prefix if omitted
        separator: Separator between prefix and objects; settings.key_separator
            if omitted
        settings: Optional CacheSettings; the global settings are used when
            prefix or separator is omitted and none are given

    Returns:
        Configured key factory
    """
    if prefix is None or separator is None:
        settings = settings or get_cache_settings()
        prefix = settings.key_prefix if prefix is None else prefix
        separator = settings.key_separator if separator is None else separator
    return AggregatingKeyFactory(prefix, separator)
