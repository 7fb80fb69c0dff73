"""
WorkloadEngine — revision-scoped scoring over successive snapshots.

The engine owns a ScoreCache and the per-revision indexes. Each call reads
`snapshot.revision`; a new revision replaces the cached scores and indexes
wholesale. Snapshots without a revision marker are scored fresh on every
call, since there is no key that would tell two of them apart.
"""

import logging
import threading

from cockpit.cache import ScoreCache
from cockpit.contracts.schema import Snapshot
from cockpit.observability.logging import RevisionContext
from cockpit.workload.aggregator import SnapshotIndex, WorkloadScore, calculate_workload_score
from cockpit.workload.fairness import FairnessResult, PeerIndex, check_fairness

logger = logging.getLogger(__name__)


class WorkloadEngine:
    """
    Cached workload and fairness scoring.

    Usage:
        engine = WorkloadEngine()
        scores = engine.score_all(snapshot)
        fairness = engine.fairness(snapshot, "GG-AN")
    """

    def __init__(self, cache: ScoreCache | None = None):
        self.cache = cache or ScoreCache()
        self._lock = threading.RLock()
        self._index_revision: str | None = None
        self._index: SnapshotIndex | None = None
        self._peers: PeerIndex | None = None

    def _snapshot_index(self, snapshot: Snapshot) -> SnapshotIndex:
        revision = snapshot.revision
        if not revision:
            return SnapshotIndex.build(snapshot)
        with self._lock:
            if self._index is None or self._index_revision != revision:
                self._index = SnapshotIndex.build(snapshot)
                self._peers = None
                self._index_revision = revision
            return self._index

    def score(self, snapshot: Snapshot, person_id: str) -> WorkloadScore | None:
        """Workload score for one person, or None if they are not in the snapshot."""
        person = snapshot.person(person_id)
        if person is None:
            return None

        revision = snapshot.revision
        with RevisionContext(revision):
            index = self._snapshot_index(snapshot)
            if not revision:
                return calculate_workload_score(person, snapshot, index)
            return self.cache.get_or_compute(
                person_id, revision, lambda: calculate_workload_score(person, snapshot, index)
            )

    def score_all(self, snapshot: Snapshot) -> dict[str, WorkloadScore]:
        """Score the whole roster; repeated calls within a revision reuse cached scores."""
        revision = snapshot.revision
        with RevisionContext(revision):
            if revision:
                self.cache.begin_revision(revision)
            index = self._snapshot_index(snapshot)
            scores: dict[str, WorkloadScore] = {}
            for person in snapshot.people:
                if revision:
                    scores[person.id] = self.cache.get_or_compute(
                        person.id,
                        revision,
                        lambda p=person: calculate_workload_score(p, snapshot, index),
                    )
                else:
                    scores[person.id] = calculate_workload_score(person, snapshot, index)
            logger.debug("Scored %d people (cache size %d)", len(scores), len(self.cache))
            return scores

    def _peer_index(self, snapshot: Snapshot, scores: dict[str, WorkloadScore]) -> PeerIndex:
        if not snapshot.revision:
            return PeerIndex.build(snapshot.people, scores)
        with self._lock:
            self._snapshot_index(snapshot)
            if self._peers is None:
                self._peers = PeerIndex.build(snapshot.people, scores)
            return self._peers

    def fairness(self, snapshot: Snapshot, person_id: str) -> FairnessResult:
        scores = self.score_all(snapshot)
        return check_fairness(person_id, snapshot, scores, self._peer_index(snapshot, scores))

    def fairness_all(self, snapshot: Snapshot) -> dict[str, FairnessResult]:
        scores = self.score_all(snapshot)
        peers = self._peer_index(snapshot, scores)
        return {p.id: check_fairness(p.id, snapshot, scores, peers) for p in snapshot.people}
