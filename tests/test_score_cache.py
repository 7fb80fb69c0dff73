"""
Tests for the revision-keyed score cache.

Tests cover:
- Basic get/set within a revision
- Revision replacement (stale scores unreachable)
- get_or_compute memoization
- Statistics tracking
- Thread safety
"""

import threading

from cockpit.cache import CacheStats, ScoreCache


class TestScoreCacheBasicOperations:
    """Test basic cache operations."""

    def test_set_and_get(self):
        """Test setting and getting a value in the current revision."""
        cache = ScoreCache()
        cache.set("P1", "rev-1", "score")
        assert cache.get("P1", "rev-1") == "score"

    def test_get_nonexistent_person(self):
        """Test a miss returns None."""
        cache = ScoreCache()
        assert cache.get("P1", "rev-1") is None

    def test_get_other_revision_misses(self):
        """Test that a lookup under another revision never sees current entries."""
        cache = ScoreCache()
        cache.set("P1", "rev-1", "score")
        assert cache.get("P1", "rev-2") is None

    def test_len_counts_entries(self):
        """Test __len__ tracks stored scores."""
        cache = ScoreCache()
        cache.set("P1", "rev-1", 1)
        cache.set("P2", "rev-1", 2)
        assert len(cache) == 2

    def test_clear(self):
        """Test clear drops entries and forgets the revision."""
        cache = ScoreCache()
        cache.set("P1", "rev-1", 1)
        cache.clear()
        assert len(cache) == 0
        assert cache.revision is None


class TestRevisionReplacement:
    """Test that a new revision replaces the store wholesale."""

    def test_new_revision_drops_old_entries(self):
        """Test setting under a new revision evicts the previous revision's scores."""
        cache = ScoreCache()
        cache.set("P1", "rev-1", "old")
        cache.set("P2", "rev-2", "new")

        assert cache.revision == "rev-2"
        assert len(cache) == 1
        assert cache.get("P1", "rev-1") is None
        assert cache.get("P1", "rev-2") is None

    def test_same_revision_keeps_entries(self):
        """Test begin_revision with the current revision is a no-op."""
        cache = ScoreCache()
        cache.set("P1", "rev-1", "score")
        cache.begin_revision("rev-1")
        assert cache.get("P1", "rev-1") == "score"
        assert cache.stats().resets == 1

    def test_returning_to_old_revision_recomputes(self):
        """Test that revisiting an earlier revision does not resurrect its scores."""
        cache = ScoreCache()
        cache.set("P1", "rev-1", "first")
        cache.begin_revision("rev-2")
        cache.begin_revision("rev-1")
        assert cache.get("P1", "rev-1") is None
        assert cache.stats().resets == 3


class TestGetOrCompute:
    """Test memoized computation."""

    def test_computes_once_per_revision(self):
        """Test compute runs once and the same object is returned after."""
        cache = ScoreCache()
        calls = []

        def compute():
            calls.append(1)
            return {"score": len(calls)}

        first = cache.get_or_compute("P1", "rev-1", compute)
        second = cache.get_or_compute("P1", "rev-1", compute)

        assert first is second
        assert len(calls) == 1

    def test_recomputes_on_new_revision(self):
        """Test a revision change forces recomputation."""
        cache = ScoreCache()
        first = cache.get_or_compute("P1", "rev-1", lambda: {"v": 1})
        second = cache.get_or_compute("P1", "rev-2", lambda: {"v": 2})

        assert first is not second
        assert second == {"v": 2}


class TestCacheStatistics:
    """Test statistics tracking."""

    def test_stats_initial(self):
        """Test initial statistics."""
        stats = ScoreCache().stats()
        assert stats.hits == 0
        assert stats.misses == 0
        assert stats.size == 0
        assert stats.hit_rate == 0.0
        assert stats.revision is None

    def test_hit_and_miss_tracking(self):
        """Test hits and misses are counted."""
        cache = ScoreCache()
        cache.get_or_compute("P1", "rev-1", lambda: 1)
        cache.get_or_compute("P1", "rev-1", lambda: 1)
        cache.get_or_compute("P1", "rev-1", lambda: 1)

        stats = cache.stats()
        assert stats.misses == 1
        assert stats.hits == 2
        assert stats.hit_rate == 2 / 3
        assert stats.revision == "rev-1"

    def test_stats_to_dict(self):
        """Test converting stats to dict."""
        data = CacheStats(hits=3, misses=1, size=2, hit_rate=0.75, revision="r", resets=1).to_dict()
        assert data == {
            "hits": 3,
            "misses": 1,
            "size": 2,
            "hit_rate": 0.75,
            "revision": "r",
            "resets": 1,
        }


class TestCacheThreadSafety:
    """Test concurrent access."""

    def test_concurrent_get_or_compute(self):
        """Test many threads computing the same key store one value."""
        cache = ScoreCache()
        results = []

        def worker():
            for i in range(50):
                results.append(cache.get_or_compute(f"P{i % 5}", "rev-1", lambda i=i: object()))

        threads = [threading.Thread(target=worker) for _ in range(8)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        assert len(cache) == 5
        assert len({id(r) for r in results}) == 5
