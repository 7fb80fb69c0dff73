"""
Contracts Module — shape and configuration models for the scoring engine.

- schema.py: Pydantic models for the organizational snapshot
- settings.py: Typed configuration tables with documented fallbacks

The engine assumes a snapshot that passed these models. Validation errors
surface here, never inside a scoring function.
"""

from .schema import (
    SCHEMA_VERSION,
    Pack,
    Person,
    PersonProfile,
    RaidItem,
    Report,
    Snapshot,
    SnapshotMeta,
    StaffingEntry,
    WorkItem,
)
from .settings import (
    BurnoutConfig,
    CockpitSettings,
    ComplexityFactor,
    DefaultAllocation,
    GovernanceRules,
    GradeCapacity,
    HealthWeights,
    ReportingCadence,
    RoleCategory,
    RoleWeight,
    StageMultiplier,
    Taxonomy,
    Weights,
    WorkloadSettings,
)

__all__ = [
    # Schema
    "SCHEMA_VERSION",
    "Pack",
    "Person",
    "PersonProfile",
    "RaidItem",
    "Report",
    "Snapshot",
    "SnapshotMeta",
    "StaffingEntry",
    "WorkItem",
    # Settings
    "BurnoutConfig",
    "CockpitSettings",
    "ComplexityFactor",
    "DefaultAllocation",
    "GovernanceRules",
    "GradeCapacity",
    "HealthWeights",
    "ReportingCadence",
    "RoleCategory",
    "RoleWeight",
    "StageMultiplier",
    "Taxonomy",
    "Weights",
    "WorkloadSettings",
]
