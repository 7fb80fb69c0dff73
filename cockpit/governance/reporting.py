"""
Reporting and RAID helpers shared by the health scorer and RAG classifier.

Report age is measured in whole days (floor) between the latest report
timestamp and `now`. `now` defaults to the current UTC time; pass it
explicitly for reproducible results.
"""

import logging
from collections.abc import Iterable
from dataclasses import dataclass, field
from datetime import datetime

from cockpit.contracts.schema import HIGH_IMPACT, Report, Snapshot, WorkItem, resolve_now

logger = logging.getLogger(__name__)

SECONDS_PER_DAY = 86400


def last_report(snapshot: Snapshot, work_id: str) -> Report | None:
    pack = snapshot.pack(work_id)
    if pack is None or not pack.reports:
        return None
    return max(pack.reports, key=lambda r: r.ts)


def report_age_days(snapshot: Snapshot, work_id: str, now: datetime | None = None) -> int | None:
    """Whole days since the latest report, or None if nothing was ever filed."""
    report = last_report(snapshot, work_id)
    if report is None:
        return None
    elapsed = resolve_now(now) - report.ts
    return int(elapsed.total_seconds() // SECONDS_PER_DAY)


def expected_update_days(snapshot: Snapshot, work_item: WorkItem) -> int:
    """Reporting cadence for the item's lifecycle stage."""
    return snapshot.settings.weights.reporting.expected_days(work_item.lifecycle_id)


@dataclass
class ComplianceDetail:
    id: str
    reason: str


@dataclass
class ReportingCompliance:
    total: int = 0
    compliant: int = 0
    non_compliant: int = 0
    missing: int = 0
    detail: list[ComplianceDetail] = field(default_factory=list)

    @property
    def compliance_rate(self) -> float:
        return self.compliant / self.total if self.total else 1.0

    def to_dict(self) -> dict:
        return {
            "total": self.total,
            "compliant": self.compliant,
            "non_compliant": self.non_compliant,
            "missing": self.missing,
            "compliance_rate": round(self.compliance_rate, 4),
            "detail": [{"id": d.id, "reason": d.reason} for d in self.detail],
        }


def reporting_compliance(snapshot: Snapshot, now: datetime | None = None) -> ReportingCompliance:
    """Which work items have reported within their lifecycle cadence."""
    now = resolve_now(now)
    result = ReportingCompliance(total=len(snapshot.work_items))

    for work_item in snapshot.work_items:
        expected = expected_update_days(snapshot, work_item)
        age = report_age_days(snapshot, work_item.id, now)
        if age is None:
            result.missing += 1
            result.non_compliant += 1
            result.detail.append(ComplianceDetail(work_item.id, "Missing report"))
        elif age <= expected:
            result.compliant += 1
        else:
            result.non_compliant += 1
            result.detail.append(
                ComplianceDetail(work_item.id, f"Report age {age}d (Limit: {expected}d)")
            )

    logger.debug(
        "Reporting compliance: %d/%d compliant, %d missing",
        result.compliant,
        result.total,
        result.missing,
    )
    return result


def _items(snapshot: Snapshot, subset: Iterable[WorkItem] | None) -> Iterable[WorkItem]:
    return snapshot.work_items if subset is None else subset


def open_risk_count(snapshot: Snapshot, subset: Iterable[WorkItem] | None = None) -> int:
    count = 0
    for work_item in _items(snapshot, subset):
        pack = snapshot.pack(work_item.id)
        if pack:
            count += len(pack.open_risks())
    return count


def critical_risk_count(snapshot: Snapshot, subset: Iterable[WorkItem] | None = None) -> int:
    """Open (or blocked) risks with High impact."""
    count = 0
    for work_item in _items(snapshot, subset):
        pack = snapshot.pack(work_item.id)
        if pack:
            count += sum(1 for r in pack.open_risks() if r.impact == HIGH_IMPACT)
    return count


def risks_by_impact(snapshot: Snapshot, subset: Iterable[WorkItem] | None = None) -> dict[str, int]:
    out = {"High": 0, "Medium": 0, "Low": 0}
    for work_item in _items(snapshot, subset):
        pack = snapshot.pack(work_item.id)
        if not pack:
            continue
        for risk in pack.open_risks():
            out[risk.impact] = out.get(risk.impact, 0) + 1
    return out
