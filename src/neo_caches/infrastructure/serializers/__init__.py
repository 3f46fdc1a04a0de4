"""Cache value serializers."""

from .pickle_serializer import PickleCacheSerializer, PickleSerializerStats

__all__ = [
    "PickleCacheSerializer",
    "PickleSerializerStats",
]
