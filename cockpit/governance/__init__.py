"""
Governance Module

Project-level governance signals computed from RAID registers and status
reports:
- Portfolio health index (0-100)
- Project RAG status with display reasons
- Reporting compliance and RAID counts
- Snapshot diagnostics
"""

from .diagnostics import run_diagnostics
from .health import portfolio_health_score, project_health_score
from .labels import lifecycle_name, staff_label, type_name, unit_name
from .rag import RagReason, RagResult, RagStatus, is_critical_stage, rag_all, rag_analysis, rag_for_work
from .reporting import (
    ReportingCompliance,
    critical_risk_count,
    expected_update_days,
    last_report,
    open_risk_count,
    report_age_days,
    reporting_compliance,
    risks_by_impact,
)

__all__ = [
    "RagReason",
    "RagResult",
    "RagStatus",
    "ReportingCompliance",
    "critical_risk_count",
    "expected_update_days",
    "is_critical_stage",
    "last_report",
    "lifecycle_name",
    "open_risk_count",
    "portfolio_health_score",
    "project_health_score",
    "rag_all",
    "rag_analysis",
    "rag_for_work",
    "report_age_days",
    "reporting_compliance",
    "risks_by_impact",
    "run_diagnostics",
    "staff_label",
    "type_name",
    "unit_name",
]
