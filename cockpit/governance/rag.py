"""
Project RAG Classifier — Green/Amber/Red for one project.

Stateless: recomputed on every call from the snapshot.

Rules, in order:
1. No report, or report older than the stage's staleness limit:
   Red in a critical stage, Amber otherwise.
2. Any open High-impact risk past its due date: Red.
3. Otherwise Green.

Two further Amber rules are opt-in via GovernanceRules:
- flag_open_high_risks: open High-impact risks not yet overdue
- risk_volume_threshold: more open risks than the threshold

Every rule that fires adds a RagReason for display.
"""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum

from cockpit.contracts.schema import HIGH_IMPACT, Snapshot, resolve_now
from cockpit.governance.reporting import report_age_days


class RagStatus(str, Enum):
    GREEN = "Green"
    AMBER = "Amber"
    RED = "Red"


@dataclass
class RagReason:
    label: str
    impact: str  # 'High' | 'Medium' | 'Low'
    type: str  # 'Report' | 'Risk'

    def to_dict(self) -> dict:
        return {"label": self.label, "impact": self.impact, "type": self.type}


@dataclass
class RagResult:
    status: RagStatus
    reasons: list[RagReason] = field(default_factory=list)
    last_report_age: int | None = None
    allowed_gap: int | None = None

    def to_dict(self) -> dict:
        return {
            "status": self.status.value,
            "reasons": [r.to_dict() for r in self.reasons],
            "meta": {"last_report_age": self.last_report_age, "allowed_gap": self.allowed_gap},
        }


def is_critical_stage(snapshot: Snapshot, lifecycle_id: str) -> bool:
    return lifecycle_id in snapshot.settings.weights.governance.critical_stages


def rag_analysis(snapshot: Snapshot, work_id: str, now: datetime | None = None) -> RagResult:
    work_item = snapshot.work_item(work_id)
    if work_item is None:
        return RagResult(RagStatus.GREEN)

    now = resolve_now(now)
    rules = snapshot.settings.weights.governance
    critical = is_critical_stage(snapshot, work_item.lifecycle_id)
    allowed_gap = rules.stale_report_days_critical if critical else rules.stale_report_days_standard
    age = report_age_days(snapshot, work_id, now)

    reasons: list[RagReason] = []
    is_red = False
    is_amber = False

    # 1. Reporting freshness
    if age is None or age > allowed_gap:
        label = "Never reported" if age is None else f"Report overdue ({age} days)"
        if critical:
            is_red = True
            reasons.append(RagReason(label, "High", "Report"))
        else:
            is_amber = True
            reasons.append(RagReason(label, "Medium", "Report"))

    # 2. Risk profile
    pack = snapshot.pack(work_id)
    if pack:
        open_risks = pack.open_risks()
        high_risks = [r for r in open_risks if r.impact == HIGH_IMPACT]
        overdue_high = [r for r in high_risks if r.is_overdue(now)]

        if overdue_high:
            is_red = True
            reasons.append(RagReason(f"{len(overdue_high)} Overdue High Impact Risks", "High", "Risk"))
        elif high_risks and rules.flag_open_high_risks:
            is_amber = True
            reasons.append(RagReason(f"{len(high_risks)} High Impact Risks Open", "Medium", "Risk"))

        if rules.risk_volume_threshold is not None and len(open_risks) > rules.risk_volume_threshold:
            is_amber = True
            reasons.append(RagReason(f"High Risk Volume ({len(open_risks)})", "Medium", "Risk"))

    if is_red:
        status = RagStatus.RED
    elif is_amber:
        status = RagStatus.AMBER
    else:
        status = RagStatus.GREEN

    return RagResult(status, reasons, last_report_age=age, allowed_gap=allowed_gap)


def rag_for_work(snapshot: Snapshot, work_id: str, now: datetime | None = None) -> RagStatus:
    return rag_analysis(snapshot, work_id, now).status


def rag_all(snapshot: Snapshot, now: datetime | None = None) -> dict[str, RagResult]:
    """RAG result for every work item, evaluated at one instant."""
    now = resolve_now(now)
    return {wi.id: rag_analysis(snapshot, wi.id, now) for wi in snapshot.work_items}
