"""Pickle cache serializer.

ONLY pickle serialization - converts cache payloads to bytes for
out-of-process stores, with optional gzip compression.

Following maximum separation architecture - one file = one purpose.
"""

import gzip
import pickle
import time
from dataclasses import dataclass
from typing import Any

from ...core.exceptions.serialization_error import CacheDeserializationError, CacheSerializationError


@dataclass
class PickleSerializerStats:
    """Pickle serializer performance statistics."""

    serialization_count: int = 0
    deserialization_count: int = 0
    total_serialization_time: float = 0.0
    total_deserialization_time: float = 0.0
    total_bytes_serialized: int = 0
    compressed_count: int = 0
    error_count: int = 0


class PickleCacheSerializer:
    """Pickle serializer with protocol version control and compression.

    Only use with stores holding trusted data: unpickling runs arbitrary code.
    """

    COMPRESSION_MARKER = b"GZIP:"

    def __init__(
        self,
        protocol: int = pickle.HIGHEST_PROTOCOL,
        use_compression: bool = False,
        compression_level: int = 6,
        compression_threshold: int = 1024,
    ):
        """Initialize pickle serializer.

        Args:
            protocol: Pickle protocol version
            use_compression: Enable gzip compression
            compression_level: Gzip compression level (1-9)
            compression_threshold: Minimum pickled size in bytes to compress
        """
        if protocol < 0 or protocol > pickle.HIGHEST_PROTOCOL:
            protocol = pickle.HIGHEST_PROTOCOL

        self._protocol = protocol
        self._use_compression = use_compression
        self._compression_level = max(1, min(9, compression_level))
        self._compression_threshold = max(0, compression_threshold)
        self._stats = PickleSerializerStats()

    @property
    def stats(self) -> PickleSerializerStats:
        return self._stats

    def serialize(self, value: Any) -> bytes:
        """Serialize value to pickle bytes."""
        start_time = time.time()

        try:
            pickle_bytes = pickle.dumps(value, protocol=self._protocol)
        except (pickle.PickleError, TypeError, AttributeError, ValueError) as e:
            self._stats.error_count += 1
            raise CacheSerializationError(
                f"Pickle serialization failed: {e}",
                value=value,
                serializer_type="pickle",
                original_error=e,
            ) from e

        result_bytes = pickle_bytes
        if self._use_compression and len(pickle_bytes) >= self._compression_threshold:
            compressed = self.COMPRESSION_MARKER + gzip.compress(
                pickle_bytes, compresslevel=self._compression_level
            )
            # Only keep compression if it actually reduces size
            if len(compressed) < len(pickle_bytes):
                result_bytes = compressed
                self._stats.compressed_count += 1

        self._stats.serialization_count += 1
        self._stats.total_serialization_time += time.time() - start_time
        self._stats.total_bytes_serialized += len(result_bytes)
        return result_bytes

    def deserialize(self, data: bytes) -> Any:
        """Deserialize pickle bytes back to a Python object."""
        start_time = time.time()

        try:
            if data.startswith(self.COMPRESSION_MARKER):
                data = gzip.decompress(data[len(self.COMPRESSION_MARKER):])
            result = pickle.loads(data)
        except (pickle.PickleError, EOFError, AttributeError, ImportError,
                IndexError, ValueError, TypeError, OSError) as e:
            self._stats.error_count += 1
            raise CacheDeserializationError(
                f"Pickle deserialization failed: {e}",
                data=data if isinstance(data, bytes) else None,
                serializer_type="pickle",
                original_error=e,
            ) from e

        self._stats.deserialization_count += 1
        self._stats.total_deserialization_time += time.time() - start_time
        return result

    def get_format_name(self) -> str:
        return "pickle"
