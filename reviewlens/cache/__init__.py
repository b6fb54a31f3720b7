"""
ReviewLens Cache Module
=======================

In-process TTL cache used to memoize analysis results.

Usage:
    from reviewlens.cache import get_cache

    cache = get_cache()
    cache.set("key", {"data": "value"}, ttl_seconds=180)
    result = cache.get("key")
"""

from .memo_cache import MemoCache, get_cache

__all__ = ["MemoCache", "get_cache"]
