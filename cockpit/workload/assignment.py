"""
Assignment Load Calculator — points one staffing entry puts on one person.

    points = stage multiplier * role weight * complexity factor * allocation / 100

Every factor is a table lookup with a fallback (see cockpit.contracts.settings),
so the calculation is total and side-effect free.
"""

from dataclasses import dataclass

from cockpit.contracts.schema import StaffingEntry, WorkItem
from cockpit.contracts.settings import RoleCategory, WorkloadSettings


@dataclass(frozen=True)
class AssignmentLoad:
    """Load contribution of a single assignment."""

    points: float
    is_committed: bool
    role_category: RoleCategory

    def to_dict(self) -> dict:
        return {
            "points": round(self.points, 4),
            "is_committed": self.is_committed,
            "role_category": self.role_category.value,
        }


def allocation_pct(entry: StaffingEntry, settings: WorkloadSettings) -> float:
    """Explicit override, else the role's default allocation, else 50%."""
    if entry.allocation is not None:
        return entry.allocation
    return settings.default_allocation(entry.role_key)


def calculate_assignment_load(
    entry: StaffingEntry, work_item: WorkItem, settings: WorkloadSettings
) -> AssignmentLoad:
    stage = settings.stage_for(work_item.lifecycle_id)
    role = settings.role_for(entry.role_key)
    comp_factor = settings.complexity_factor(work_item.complexity)

    points = stage.multiplier * role.weight * comp_factor * (allocation_pct(entry, settings) / 100)

    return AssignmentLoad(points=points, is_committed=stage.is_committed, role_category=role.category)
