"""Cache policy value object.

ONLY expiration policy - opaque per-item policy handed to the underlying
store. The typed adapter never interprets it.

Following maximum separation architecture - one file = one purpose.
"""

from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Optional


@dataclass(frozen=True)
class CachePolicy:
    """Per-item expiration policy.

    Supports:
    - Never-expire (the default)
    - Absolute expiration at a fixed point in time
    - Sliding expiration renewed on every read

    Absolute and sliding expiration are mutually exclusive.
    """

    absolute_expiration: Optional[datetime] = None
    sliding_expiration: Optional[timedelta] = None

    def __post_init__(self):
        """Validate policy on creation."""
        if self.absolute_expiration is not None and self.sliding_expiration is not None:
            raise ValueError("Absolute and sliding expiration cannot both be set")

        if self.sliding_expiration is not None and self.sliding_expiration <= timedelta(0):
            raise ValueError("Sliding expiration must be positive")

        if self.absolute_expiration is not None and self.absolute_expiration.tzinfo is None:
            # Naive datetimes are taken as UTC
            object.__setattr__(
                self, "absolute_expiration", self.absolute_expiration.replace(tzinfo=timezone.utc)
            )

    @classmethod
    def never_expire(cls) -> "CachePolicy":
        """Create policy that never expires."""
        return cls()

    @classmethod
    def absolute(cls, expires_at: datetime) -> "CachePolicy":
        """Create policy expiring at a fixed time."""
        return cls(absolute_expiration=expires_at)

    @classmethod
    def sliding(cls, window: timedelta) -> "CachePolicy":
        """Create policy expiring after a period without reads."""
        return cls(sliding_expiration=window)

    @classmethod
    def from_seconds(cls, seconds: int, now: Optional[datetime] = None) -> "CachePolicy":
        """Create absolute policy expiring seconds from now."""
        if seconds <= 0:
            raise ValueError("Seconds must be positive")
        now = now or datetime.now(timezone.utc)
        return cls(absolute_expiration=now + timedelta(seconds=seconds))

    def is_never_expire(self) -> bool:
        """Check if policy never expires."""
        return self.absolute_expiration is None and self.sliding_expiration is None

    def is_sliding(self) -> bool:
        return self.sliding_expiration is not None

    def expires_at(self, now: Optional[datetime] = None) -> Optional[datetime]:
        """Get absolute expiry time for an item written or read at now."""
        if self.absolute_expiration is not None:
            return self.absolute_expiration
        if self.sliding_expiration is not None:
            now = now or datetime.now(timezone.utc)
            return now + self.sliding_expiration
        return None

    def ttl_seconds(self, now: Optional[datetime] = None) -> Optional[float]:
        """Get seconds until expiry, None if never expires. Never negative."""
        now = now or datetime.now(timezone.utc)
        expiry = self.expires_at(now)
        if expiry is None:
            return None
        return max(0.0, (expiry - now).total_seconds())

    def __str__(self) -> str:
        if self.absolute_expiration is not None:
            return f"expires at {self.absolute_expiration.isoformat()}"
        if self.sliding_expiration is not None:
            return f"expires {self.sliding_expiration.total_seconds():g}s after last access"
        return "never expires"
