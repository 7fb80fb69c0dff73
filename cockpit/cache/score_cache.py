"""
Revision-keyed memo store for workload scores.

Features:
- Entries keyed by (person_id, revision); no TTL
- Whole store replaced when a new revision is seen, so stale scores are unreachable
- Thread-safe operations with RLock
- Hit/miss statistics tracking
"""

import logging
import threading
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any

logger = logging.getLogger(__name__)


@dataclass
class CacheStats:
    """Cache statistics."""

    hits: int = 0
    misses: int = 0
    size: int = 0
    hit_rate: float = 0.0
    revision: str | None = None
    resets: int = 0

    def to_dict(self) -> dict:
        """Convert to dict."""
        return {
            "hits": self.hits,
            "misses": self.misses,
            "size": self.size,
            "hit_rate": self.hit_rate,
            "revision": self.revision,
            "resets": self.resets,
        }


class ScoreCache:
    """Thread-safe memo of per-person scores, valid for one snapshot revision."""

    def __init__(self):
        self._entries: dict[tuple[str, str], Any] = {}
        self._revision: str | None = None
        self._lock = threading.RLock()
        self._hits = 0
        self._misses = 0
        self._resets = 0

    @property
    def revision(self) -> str | None:
        return self._revision

    def begin_revision(self, revision: str) -> None:
        """
        Make `revision` current.

        Switching to a different revision replaces the store wholesale.
        Calling again with the current revision keeps its entries.
        """
        with self._lock:
            if revision == self._revision:
                return
            if self._entries:
                logger.debug(
                    "Dropping %d cached scores from revision %s", len(self._entries), self._revision
                )
            self._entries = {}
            self._revision = revision
            self._resets += 1

    def get(self, person_id: str, revision: str) -> Any | None:
        """
        Get a cached score.

        Returns None on a miss, including any lookup for a revision other
        than the current one.
        """
        with self._lock:
            value = self._entries.get((person_id, revision))
            if value is None:
                self._misses += 1
                return None
            self._hits += 1
            return value

    def set(self, person_id: str, revision: str, value: Any) -> None:
        """Store a score; a new revision first replaces the store."""
        with self._lock:
            self.begin_revision(revision)
            self._entries[(person_id, revision)] = value

    def get_or_compute(self, person_id: str, revision: str, compute: Callable[[], Any]) -> Any:
        """
        Return the cached score, computing and storing it on a miss.

        Within one revision the same object is returned on every call.
        """
        with self._lock:
            self.begin_revision(revision)
            cached = self.get(person_id, revision)
            if cached is not None:
                return cached
            value = compute()
            self._entries[(person_id, revision)] = value
            return value

    def clear(self) -> None:
        """Drop every entry; the current revision is forgotten too."""
        with self._lock:
            self._entries = {}
            self._revision = None

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)

    def stats(self) -> CacheStats:
        """
        Get cache statistics.

        Returns:
            CacheStats object with hits, misses, size, hit_rate, revision, resets
        """
        with self._lock:
            total_requests = self._hits + self._misses
            hit_rate = self._hits / total_requests if total_requests > 0 else 0.0
            return CacheStats(
                hits=self._hits,
                misses=self._misses,
                size=len(self._entries),
                hit_rate=hit_rate,
                revision=self._revision,
                resets=self._resets,
            )
