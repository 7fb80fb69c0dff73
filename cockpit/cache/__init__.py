"""
In-memory score cache for the workload engine.

Provides:
- ScoreCache: memo keyed by (person_id, revision), replaced on revision change
- CacheStats: hit/miss statistics
"""

from .score_cache import CacheStats, ScoreCache

__all__ = [
    "CacheStats",
    "ScoreCache",
]
