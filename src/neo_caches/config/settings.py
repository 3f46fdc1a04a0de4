"""
Cache configuration for neo-caches.

Environment-driven settings for key derivation, region namespacing and the
bundled object stores. Every field can be set through a NEO_CACHES_ prefixed
environment variable or a .env file.
"""
from functools import lru_cache
from typing import Dict, Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from ..core.value_objects.cache_policy import CachePolicy


class CacheSettings(BaseSettings):
    """Global cache settings."""

    model_config = SettingsConfigDict(
        env_prefix="NEO_CACHES_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Key derivation
    key_prefix: str = Field(default="neo", description="Prefix for keys built by AggregatingKeyFactory")
    key_separator: str = Field(default="|", min_length=1, description="Separator between key parts")

    # Region namespacing; leave unset to mint fresh tokens per process
    null_region_token: Optional[str] = Field(default=None, description="Persisted token for the None region")
    region_tokens: Dict[str, str] = Field(default_factory=dict, description="Persisted region name to token bindings")

    # Expiration
    default_ttl_seconds: int = Field(default=0, ge=0, description="Default TTL in seconds, 0 never expires")

    # Memory store
    memory_max_entries: int = Field(default=10000, ge=1, description="Max memory store entries")

    # Redis store
    redis_url: Optional[str] = Field(default=None, description="Redis connection URL")
    redis_key_prefix: str = Field(default="neo-caches:", description="Prefix for Redis keys")
    redis_socket_timeout: Optional[float] = Field(default=None, gt=0, description="Redis socket timeout in seconds")

    @field_validator("redis_url")
    @classmethod
    def validate_redis_url(cls, v: Optional[str]) -> Optional[str]:
        """Validate Redis URL scheme."""
        if v is not None and not v.startswith(("redis://", "rediss://", "unix://")):
            raise ValueError(f"Invalid Redis URL: {v}. Expected redis://, rediss:// or unix://")
        return v

    def default_policy(self) -> CachePolicy:
        """Build the default cache policy from default_ttl_seconds."""
        if self.default_ttl_seconds == 0:
            return CachePolicy.never_expire()
        return CachePolicy.from_seconds(self.default_ttl_seconds)


@lru_cache()
def get_cache_settings() -> CacheSettings:
    """Get cached cache settings instance."""
    return CacheSettings()
