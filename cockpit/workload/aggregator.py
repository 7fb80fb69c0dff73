"""
Person Workload Aggregator — burnout score and utilization for one person.

Computes, for a person in a snapshot:
- Effective capacity (grade baseline scaled by the 1-10 capacity modifier)
- Committed vs pipeline load from every assignment
- Concurrency penalties over the grade's item caps
- Management load from formal direct reports
- Utilization % and a Green/Amber/Red risk tier

EFFICIENCY: SnapshotIndex groups staffing by person and counts direct
reports in one pass, so scoring the whole roster is O(people + assignments).
Build it once per revision and pass it to every call.
"""

import logging
from collections import Counter, defaultdict
from dataclasses import dataclass, field
from enum import Enum

from cockpit.contracts.schema import Person, Snapshot, StaffingEntry, WorkItem
from cockpit.contracts.settings import BurnoutConfig, RoleCategory
from cockpit.workload.assignment import calculate_assignment_load

logger = logging.getLogger(__name__)

# Categories always present in a breakdown, even at zero
BREAKDOWN_CATEGORIES = (
    RoleCategory.OVERSIGHT,
    RoleCategory.DELIVERY_LEAD,
    RoleCategory.EXECUTION,
    RoleCategory.PEOPLE_MANAGEMENT,
)


class RiskTier(str, Enum):
    """Burnout risk band from utilization."""

    GREEN = "Green"
    AMBER = "Amber"
    RED = "Red"


@dataclass
class WorkloadBreakdown:
    items: int = 0
    committed_items: int = 0
    concurrency_penalty: float = 0.0
    roles: dict[str, float] = field(default_factory=dict)  # points by role category
    grade_fallback: bool = False  # grade missing from grade_capacities

    def to_dict(self) -> dict:
        return {
            "items": self.items,
            "committed_items": self.committed_items,
            "concurrency_penalty": round(self.concurrency_penalty, 4),
            "roles": {k: round(v, 4) for k, v in self.roles.items()},
            "grade_fallback": self.grade_fallback,
        }


@dataclass
class WorkloadScore:
    """Derived workload for one person; valid for one snapshot revision."""

    person_id: str
    grade_cap_base: float
    effective_cap: float
    committed_load: float
    pipeline_load: float
    total_load: float
    penalty_points: float
    mgmt_load: float
    final_score: float
    utilization_pct: float
    risk: RiskTier
    breakdown: WorkloadBreakdown

    def to_dict(self) -> dict:
        return {
            "person_id": self.person_id,
            "grade_cap_base": self.grade_cap_base,
            "effective_cap": round(self.effective_cap, 4),
            "committed_load": round(self.committed_load, 4),
            "pipeline_load": round(self.pipeline_load, 4),
            "total_load": round(self.total_load, 4),
            "penalty_points": round(self.penalty_points, 4),
            "mgmt_load": round(self.mgmt_load, 4),
            "final_score": round(self.final_score, 4),
            "utilization_pct": round(self.utilization_pct, 1),
            "risk": self.risk.value,
            "breakdown": self.breakdown.to_dict(),
        }


class SnapshotIndex:
    """Per-revision lookups shared by every person's score."""

    def __init__(
        self,
        assignments: dict[str, list[tuple[WorkItem, StaffingEntry]]],
        direct_reports: Counter,
    ):
        self._assignments = assignments
        self._direct_reports = direct_reports

    @classmethod
    def build(cls, snapshot: Snapshot) -> "SnapshotIndex":
        assignments: dict[str, list[tuple[WorkItem, StaffingEntry]]] = defaultdict(list)
        for work_item in snapshot.work_items:
            seen: set[str] = set()
            for entry in work_item.staffing:
                # First entry per person per item counts
                if not entry.person_id or entry.person_id in seen:
                    continue
                seen.add(entry.person_id)
                assignments[entry.person_id].append((work_item, entry))

        direct_reports = Counter(
            p.formal_manager_id for p in snapshot.people if p.formal_manager_id
        )
        return cls(dict(assignments), direct_reports)

    def assignments_for(self, person_id: str) -> list[tuple[WorkItem, StaffingEntry]]:
        return self._assignments.get(person_id, [])

    def direct_report_count(self, person_id: str) -> int:
        return self._direct_reports.get(person_id, 0)


def classify_risk(utilization_pct: float, burnout: BurnoutConfig) -> RiskTier:
    """Red at or above red_threshold, Amber at or above amber_threshold."""
    if utilization_pct >= burnout.red_threshold:
        return RiskTier.RED
    if utilization_pct >= burnout.amber_threshold:
        return RiskTier.AMBER
    return RiskTier.GREEN


def calculate_workload_score(
    person: Person, snapshot: Snapshot, index: SnapshotIndex | None = None
) -> WorkloadScore:
    """
    Compute the full workload score for one person.

    For roster-wide scoring, build one SnapshotIndex and pass it in, or use
    calculate_all_workload_scores().
    """
    settings = snapshot.settings.workload
    burnout = settings.burnout_config
    if index is None:
        index = SnapshotIndex.build(snapshot)

    # 1. Grade capacity base
    grade_fallback = not settings.has_grade(person.grade)
    grade_cap = settings.grade_for(person.grade)
    if grade_fallback:
        logger.warning(
            "Unknown grade %r for %s; using fallback capacity row %r",
            person.grade,
            person.id,
            grade_cap.grade,
        )

    # 2. Effective capacity
    effective_cap = grade_cap.weekly_points * person.capacity_modifier / 10

    # 3. Assignments
    committed_load = 0.0
    pipeline_load = 0.0
    committed_items = 0
    total_items = 0
    roles = {category.value: 0.0 for category in BREAKDOWN_CATEGORIES}

    for work_item, entry in index.assignments_for(person.id):
        load = calculate_assignment_load(entry, work_item, settings)
        if load.is_committed:
            committed_load += load.points
            committed_items += 1
        else:
            pipeline_load += load.points
        total_items += 1
        category = load.role_category.value
        roles[category] = roles.get(category, 0.0) + load.points

    # 4. Concurrency penalties
    penalty_points = (
        max(0, committed_items - grade_cap.max_current) * burnout.penalty_per_extra_current_item
        + max(0, total_items - grade_cap.max_total) * burnout.penalty_per_extra_total_item
    )

    # 5. Management load
    mgmt_load = index.direct_report_count(person.id) * burnout.per_direct_report_weight

    # 6-7. Final score and utilization
    total_load = committed_load + pipeline_load
    final_score = total_load + penalty_points + mgmt_load
    utilization_pct = final_score / effective_cap * 100 if effective_cap > 0 else 0.0

    # 8. Risk tier; an unconfigured grade is always Red
    risk = RiskTier.RED if grade_fallback else classify_risk(utilization_pct, burnout)

    return WorkloadScore(
        person_id=person.id,
        grade_cap_base=grade_cap.weekly_points,
        effective_cap=effective_cap,
        committed_load=committed_load,
        pipeline_load=pipeline_load,
        total_load=total_load,
        penalty_points=penalty_points,
        mgmt_load=mgmt_load,
        final_score=final_score,
        utilization_pct=utilization_pct,
        risk=risk,
        breakdown=WorkloadBreakdown(
            items=total_items,
            committed_items=committed_items,
            concurrency_penalty=penalty_points,
            roles=roles,
            grade_fallback=grade_fallback,
        ),
    )


def calculate_all_workload_scores(
    snapshot: Snapshot, index: SnapshotIndex | None = None
) -> dict[str, WorkloadScore]:
    """Score every person in the snapshot, keyed by person id."""
    if index is None:
        index = SnapshotIndex.build(snapshot)
    scores = {p.id: calculate_workload_score(p, snapshot, index) for p in snapshot.people}
    logger.debug("Scored %d people", len(scores))
    return scores
