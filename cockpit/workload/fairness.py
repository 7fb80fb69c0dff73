"""
Fairness Comparator — a person's utilization against same-grade, same-unit peers.

    diff = my utilization - mean(peer utilization)   (peers exclude self)

Overloaded above +band, Underutilized below -band, otherwise Balanced.
The band is burnout_config.fairness_band (25 points by default).

PeerIndex buckets the roster by (grade, unit) once, keeping a running sum
per bucket, so each comparison is O(1) instead of re-filtering the roster.
"""

import math
from collections import defaultdict
from dataclasses import dataclass
from enum import Enum

from cockpit.contracts.schema import Person, Snapshot
from cockpit.workload.aggregator import WorkloadScore


class FairnessStatus(str, Enum):
    OVERLOADED = "Overloaded"
    UNDERUTILIZED = "Underutilized"
    BALANCED = "Balanced"


@dataclass
class FairnessResult:
    status: FairnessStatus
    diff: float
    message: str
    peer_count: int = 0

    def to_dict(self) -> dict:
        return {
            "status": self.status.value,
            "diff": round(self.diff, 1),
            "message": self.message,
            "peer_count": self.peer_count,
        }


def _utilization(scores: dict[str, WorkloadScore], person_id: str) -> float:
    score = scores.get(person_id)
    return score.utilization_pct if score is not None else 0.0


class PeerIndex:
    """Utilization totals bucketed by (grade, unit)."""

    def __init__(self):
        self._values: dict[tuple[str, str], list[float]] = defaultdict(list)
        self._totals: dict[tuple[str, str], float] = {}

    @classmethod
    def build(cls, people: list[Person], scores: dict[str, WorkloadScore]) -> "PeerIndex":
        index = cls()
        for person in people:
            index._values[(person.grade, person.unit_id)].append(_utilization(scores, person.id))
        index._totals = {key: math.fsum(values) for key, values in index._values.items()}
        return index

    def peer_average(self, person: Person, own_utilization: float) -> tuple[float | None, int]:
        """
        Mean utilization of the person's bucket without the person.

        Returns (None, 0) when the person has no peers.
        """
        key = (person.grade, person.unit_id)
        count = len(self._values.get(key, ())) - 1
        if count <= 0:
            return None, 0
        return (self._totals[key] - own_utilization) / count, count


def classify_fairness(diff: float, band: float) -> FairnessStatus:
    if diff > band:
        return FairnessStatus.OVERLOADED
    if diff < -band:
        return FairnessStatus.UNDERUTILIZED
    return FairnessStatus.BALANCED


def check_fairness(
    person_id: str,
    snapshot: Snapshot,
    scores: dict[str, WorkloadScore],
    peers: PeerIndex | None = None,
) -> FairnessResult:
    """
    Compare one person against their peer group.

    `scores` is the precomputed map for the whole roster. Pass a PeerIndex
    built from the same scores when comparing many people.
    """
    person = snapshot.person(person_id)
    if person is None or person_id not in scores:
        return FairnessResult(FairnessStatus.BALANCED, 0.0, "No workload score to compare")

    if peers is None:
        peers = PeerIndex.build(snapshot.people, scores)

    mine = scores[person_id].utilization_pct
    peer_avg, peer_count = peers.peer_average(person, mine)
    if peer_avg is None:
        return FairnessResult(FairnessStatus.BALANCED, 0.0, "No same-grade peers in unit")

    diff = mine - peer_avg
    status = classify_fairness(diff, snapshot.settings.workload.burnout_config.fairness_band)
    if status is FairnessStatus.OVERLOADED:
        message = f"+{diff:.0f}% vs Grade Peers"
    elif status is FairnessStatus.UNDERUTILIZED:
        message = f"{diff:.0f}% vs Grade Peers"
    else:
        message = "Within peer range"
    return FairnessResult(status, diff, message, peer_count)
