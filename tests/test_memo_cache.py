"""
Tests for the MemoCache (TTL, prefixes, stats) with a fake clock.

Usage:
    pytest tests/test_memo_cache.py -v
"""

from reviewlens.cache.memo_cache import MemoCache


class FakeClock:
    """Manually advanced monotonic clock."""

    def __init__(self, start: float = 1000.0):
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float):
        self.now += seconds


class TestMemoCache:

    def setup_method(self):
        self.clock = FakeClock()
        self.cache = MemoCache(clock=self.clock)

    def test_set_and_get(self):
        self.cache.set("rating:abc", {"value": 1}, ttl_seconds=10)
        assert self.cache.get("rating:abc") == {"value": 1}

    def test_entries_expire(self):
        self.cache.set("rating:abc", 1, ttl_seconds=10)
        self.clock.advance(9)
        assert self.cache.get("rating:abc") == 1
        self.clock.advance(1)
        assert self.cache.get("rating:abc") is None

    def test_no_ttl_never_expires(self):
        self.cache.set("forever", 1)
        self.clock.advance(10 ** 9)
        assert self.cache.get("forever") == 1

    def test_default_ttl(self):
        cache = MemoCache(clock=self.clock, default_ttl_seconds=5)
        cache.set("k", 1)
        self.clock.advance(5)
        assert cache.get("k") is None

    def test_get_or_compute_computes_once(self):
        calls = []

        def compute():
            calls.append(1)
            return "result"

        assert self.cache.get_or_compute("k", compute, ttl_seconds=60) == "result"
        assert self.cache.get_or_compute("k", compute, ttl_seconds=60) == "result"
        assert len(calls) == 1

        self.clock.advance(60)
        self.cache.get_or_compute("k", compute, ttl_seconds=60)
        assert len(calls) == 2

    def test_clear_prefix(self):
        self.cache.set("rating:a", 1)
        self.cache.set("rating:b", 2)
        self.cache.set("summary:a", 3)
        assert self.cache.clear_prefix("rating:") == 2
        assert self.cache.get("rating:a") is None
        assert self.cache.get("summary:a") == 3

    def test_prefix_isolates_namespaces(self):
        other = MemoCache(prefix="other", clock=self.clock)
        self.cache.set("k", 1)
        other.set("k", 2)
        assert self.cache.get("k") == 1
        assert other.get("k") == 2

    def test_purge_expired(self):
        self.cache.set("short", 1, ttl_seconds=1)
        self.cache.set("long", 2, ttl_seconds=100)
        self.clock.advance(2)
        assert self.cache.purge_expired() == 1
        assert self.cache.get_stats()["keys"] == 1

    def test_stats(self):
        self.cache.set("k", 1)
        self.cache.get("k")
        self.cache.get("missing")
        stats = self.cache.get_stats()
        assert stats["hits"] == 1
        assert stats["misses"] == 1
        assert stats["hit_rate"] == 50.0

        self.cache.clear()
        assert self.cache.get_stats()["keys"] == 0
        assert self.cache.get_stats()["hits"] == 0

    def test_compute_hash(self):
        first = MemoCache.compute_hash(10, 42, "abc")
        assert first == MemoCache.compute_hash(10, 42, "abc")
        assert first != MemoCache.compute_hash(10, 43, "abc")
        assert len(first) == 16
