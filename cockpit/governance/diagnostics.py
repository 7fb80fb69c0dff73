"""
Data diagnostics — referential problems that skew scoring.

Checks:
- Staffing entries naming people who are not in the roster
- Circular formal reporting lines
- Work items owned by a unit missing from the taxonomy

Findings are returned as readable strings; nothing is repaired.
"""

import logging

from cockpit.contracts.schema import Snapshot

logger = logging.getLogger(__name__)

# Formal manager id at the top of the hierarchy
TOP_OF_HIERARCHY = "Board"
MAX_REPORTING_DEPTH = 20


def find_unknown_assignees(snapshot: Snapshot) -> list[str]:
    known = {p.id for p in snapshot.people}
    issues = []
    for work_item in snapshot.work_items:
        for entry in work_item.staffing:
            if entry.person_id and entry.person_id not in known:
                issues.append(f"Work Item {work_item.id} has invalid assignment: {entry.person_id}")
    return issues


def find_reporting_cycles(snapshot: Snapshot) -> list[str]:
    managers = {p.id: p.formal_manager_id for p in snapshot.people}
    issues = []
    for person in snapshot.people:
        visited = {person.id}
        current = person.formal_manager_id
        depth = 0
        while current and current != TOP_OF_HIERARCHY and depth < MAX_REPORTING_DEPTH:
            if current in visited:
                issues.append(
                    f"Circular reporting line detected for {person.name or person.id} involving {current}"
                )
                break
            visited.add(current)
            current = managers.get(current)
            depth += 1
    return issues


def find_orphan_units(snapshot: Snapshot) -> list[str]:
    units = {u.id for u in snapshot.settings.taxonomy.units}
    return [
        f"Work Item {wi.id} assigned to non-existent unit: {wi.team_unit_id}"
        for wi in snapshot.work_items
        if wi.team_unit_id not in units
    ]


def run_diagnostics(snapshot: Snapshot) -> list[str]:
    issues = find_unknown_assignees(snapshot) + find_reporting_cycles(snapshot) + find_orphan_units(snapshot)
    if issues:
        logger.warning("Snapshot diagnostics found %d issues", len(issues))
    return issues
