"""
Portfolio Health Scorer — a single 0-100 index across a set of projects.

Each project starts at 100 and loses points for:
- every open risk, weighted by impact (plus blocked / overdue surcharges)
- a missing or stale status report
- required roles left unstaffed (only for work types configured in
  required_roles_by_type)

Project scores are clamped to [0, 100]; the portfolio index is the floor of
their mean. An empty selection is healthy (100).
"""

import logging
import math
from collections.abc import Iterable
from datetime import datetime

from cockpit.contracts.schema import BLOCKED_STATUS, Snapshot, WorkItem, resolve_now
from cockpit.governance.reporting import expected_update_days, report_age_days

logger = logging.getLogger(__name__)

MAX_HEALTH = 100


def project_health_score(snapshot: Snapshot, work_item: WorkItem, now: datetime | None = None) -> float:
    """Health of a single project in [0, 100]."""
    now = resolve_now(now)
    weights = snapshot.settings.weights.health
    score = float(MAX_HEALTH)

    pack = snapshot.pack(work_item.id)
    if pack:
        for risk in pack.open_risks():
            score -= weights.impact_weight.get(risk.impact, weights.default_impact_weight)
            if risk.status == BLOCKED_STATUS:
                score -= weights.blocked_penalty
            if risk.is_overdue(now):
                score -= weights.overdue_penalty

    age = report_age_days(snapshot, work_item.id, now)
    expected = expected_update_days(snapshot, work_item)
    if age is None:
        score -= weights.no_report_penalty
    elif age > expected:
        score -= min(weights.stale_penalty_cap, (age - expected) * weights.stale_penalty_per_day)

    for role_key in weights.required_roles_by_type.get(work_item.type_id, []):
        if not any(s.role_key == role_key and s.person_id for s in work_item.staffing):
            score -= weights.missing_role_penalty

    return min(float(MAX_HEALTH), max(0.0, score))


def portfolio_health_score(
    snapshot: Snapshot,
    subset: Iterable[WorkItem] | None = None,
    now: datetime | None = None,
) -> int:
    """
    Floor of the mean project health over `subset` (default: all work items).

    Always an integer in [0, 100].
    """
    items = list(snapshot.work_items if subset is None else subset)
    if not items:
        return MAX_HEALTH

    now = resolve_now(now)
    total = math.fsum(project_health_score(snapshot, wi, now) for wi in items)
    health = math.floor(total / len(items))
    logger.debug("Portfolio health %d over %d items", health, len(items))
    return health
