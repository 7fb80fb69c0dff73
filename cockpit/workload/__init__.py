"""
Workload Module

Turns staffing assignments into per-person capacity utilization, burnout
risk tiers and peer-fairness signals.

Objects:
- AssignmentLoad (points of one staffing entry)
- WorkloadScore (per-person aggregate, valid for one snapshot revision)
- FairnessResult (utilization vs same-grade, same-unit peers)

Invariants:
- Every settings lookup has a fallback; scoring never fails on unknown keys
- Zero effective capacity yields 0% utilization
- Scores are memoized per (person, revision) only
"""

from .aggregator import (
    RiskTier,
    SnapshotIndex,
    WorkloadBreakdown,
    WorkloadScore,
    calculate_all_workload_scores,
    calculate_workload_score,
    classify_risk,
)
from .assignment import AssignmentLoad, calculate_assignment_load
from .engine import WorkloadEngine
from .fairness import FairnessResult, FairnessStatus, PeerIndex, check_fairness

__all__ = [
    "AssignmentLoad",
    "FairnessResult",
    "FairnessStatus",
    "PeerIndex",
    "RiskTier",
    "SnapshotIndex",
    "WorkloadBreakdown",
    "WorkloadEngine",
    "WorkloadScore",
    "calculate_all_workload_scores",
    "calculate_assignment_load",
    "calculate_workload_score",
    "check_fairness",
    "classify_risk",
]
