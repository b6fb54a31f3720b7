"""
Memo Cache for ReviewLens
=========================

In-process TTL cache used to memoize the analysis calculators and the
assembled summary.

Features:
- TTL-based expiration against an injectable clock (tests pass a fake one)
- Namespace prefixing for key isolation
- Hit / miss counters
- Content hashing helper for cache key generation

Keys are derived from a fingerprint of the review collection, not from its
identity. Entries are NOT invalidated when a review list is mutated in place:
callers must replace review collections wholesale.

Concurrent writes to the same key are last-write-wins.

Usage:
    cache = MemoCache()
    cache.set("rating:abc123", analysis, ttl_seconds=180)
    result = cache.get("rating:abc123")

    value = cache.get_or_compute("rating:abc123", lambda: compute(), ttl_seconds=180)
"""

import hashlib
import json
import logging
import time
from typing import Any, Callable, Dict, Optional, Tuple

logger = logging.getLogger(__name__)

# Global cache instance (singleton)
_cache_instance: Optional["MemoCache"] = None


class MemoCache:
    """
    Dict-backed cache with per-entry TTL.

    Values are stored as-is (no serialization); cached results must be
    treated as read-only by consumers.
    """

    def __init__(
        self,
        prefix: str = "reviewlens",
        clock: Callable[[], float] = time.monotonic,
        default_ttl_seconds: Optional[int] = None,
    ):
        """
        Initialize the cache.

        Args:
            prefix: Key prefix for namespace isolation.
            clock: Monotonic time source, in seconds.
            default_ttl_seconds: TTL applied when set() is called without one
                (None = no expiry).
        """
        self.prefix = prefix
        self.default_ttl_seconds = default_ttl_seconds
        self._clock = clock
        self._entries: Dict[str, Tuple[Optional[float], Any]] = {}
        self._hits = 0
        self._misses = 0

    def _make_key(self, key: str) -> str:
        """Create prefixed key."""
        return f"{self.prefix}:{key}"

    def _is_expired(self, expires_at: Optional[float]) -> bool:
        return expires_at is not None and self._clock() >= expires_at

    def get(self, key: str) -> Optional[Any]:
        """
        Get value from cache.

        Args:
            key: Cache key

        Returns:
            Cached value or None if not found/expired
        """
        full_key = self._make_key(key)
        entry = self._entries.get(full_key)
        if entry is None:
            self._misses += 1
            return None

        expires_at, value = entry
        if self._is_expired(expires_at):
            del self._entries[full_key]
            self._misses += 1
            return None

        self._hits += 1
        return value

    def set(self, key: str, value: Any, ttl_seconds: Optional[int] = None) -> bool:
        """
        Set value in cache.

        Args:
            key: Cache key
            value: Value to cache
            ttl_seconds: Time to live in seconds (falls back to the default TTL)

        Returns:
            True if successful
        """
        ttl = ttl_seconds if ttl_seconds is not None else self.default_ttl_seconds
        expires_at = self._clock() + ttl if ttl else None
        self._entries[self._make_key(key)] = (expires_at, value)
        return True

    def get_or_compute(
        self,
        key: str,
        compute: Callable[[], Any],
        ttl_seconds: Optional[int] = None,
    ) -> Any:
        """Return the cached value for key, computing and storing it on a miss."""
        value = self.get(key)
        if value is not None:
            logger.debug(f"Cache hit: {key}", extra={"cache_key": key})
            return value

        logger.debug(f"Cache miss: {key}", extra={"cache_key": key})
        value = compute()
        self.set(key, value, ttl_seconds=ttl_seconds)
        return value

    def clear_prefix(self, prefix: str) -> int:
        """
        Clear all keys with given prefix.

        Returns:
            Number of keys deleted
        """
        full_prefix = self._make_key(prefix)
        keys_to_delete = [k for k in self._entries if k.startswith(full_prefix)]
        for k in keys_to_delete:
            del self._entries[k]
        return len(keys_to_delete)

    def clear(self) -> None:
        """Drop every entry and reset the counters."""
        self._entries.clear()
        self._hits = 0
        self._misses = 0

    def purge_expired(self) -> int:
        """Remove expired entries. Returns the number removed."""
        expired = [k for k, (expires_at, _) in self._entries.items() if self._is_expired(expires_at)]
        for k in expired:
            del self._entries[k]
        if expired:
            logger.debug(f"Purged {len(expired)} expired cache entries")
        return len(expired)

    def get_stats(self) -> Dict[str, Any]:
        """Get cache statistics."""
        lookups = self._hits + self._misses
        return {
            "backend": "memory",
            "keys": len(self._entries),
            "hits": self._hits,
            "misses": self._misses,
            "hit_rate": round(self._hits / lookups * 100, 2) if lookups else 0.0,
        }

    # =========================================================================
    # UTILITIES
    # =========================================================================

    @staticmethod
    def compute_hash(*args) -> str:
        """
        Compute SHA256 hash from arguments for cache key generation.

        Args:
            *args: Values to hash (will be JSON serialized)

        Returns:
            16-character hex hash
        """
        data = json.dumps(args, sort_keys=True, default=str)
        return hashlib.sha256(data.encode()).hexdigest()[:16]


def get_cache(force_new: bool = False) -> MemoCache:
    """
    Get singleton cache instance.

    Args:
        force_new: If True, create new instance even if one exists

    Returns:
        MemoCache instance
    """
    global _cache_instance

    if _cache_instance is None or force_new:
        _cache_instance = MemoCache()

    return _cache_instance
